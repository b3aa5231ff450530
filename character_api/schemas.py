"""
Pydantic request/response schemas.

Required fields are declared Optional on purpose: the services own the
"missing field" checks so every 400 carries the same `{error}` message shape.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProjectCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class ProjectUpdate(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    description: Optional[str] = None


class CharacterBody(BaseModel):
    """Characters carry freeform fields next to the names."""

    model_config = ConfigDict(extra="allow")

    firstName: Optional[str] = None
    lastName: Optional[str] = None


class ImageCreate(BaseModel):
    url: Optional[str] = None
    title: Optional[str] = None
    fileName: Optional[str] = None
    description: Optional[str] = None
    positivePrompt: Optional[str] = None
    negativePrompt: Optional[str] = None
    tags: Optional[list[str]] = None
    createdByUserId: Optional[str] = None


class ImageUpdate(ImageCreate):
    model_config = ConfigDict(extra="allow")

    orderIndex: Optional[int] = None
    defaultImageId: Optional[str] = None


class ReorderRequest(BaseModel):
    imageIds: list[str] = Field(default_factory=list)


class UserCreate(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    projects: Optional[list[str]] = None


class UserUpdate(UserCreate):
    pass


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UploadResponse(BaseModel):
    id: str
    name: str
    url: str
