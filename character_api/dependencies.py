"""
Dependency wiring for the routers.

Services are built once by the app factory and kept on `app.state`; these
helpers hand them to the endpoints through `Depends`.
"""

from __future__ import annotations

from fastapi import Request

from character_api.core.config import Settings
from character_api.services.character_service import CharacterService
from character_api.services.image_service import ImageService
from character_api.services.media_service import MediaUploader
from character_api.services.project_service import ProjectService
from character_api.services.user_service import UserService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_project_service(request: Request) -> ProjectService:
    return request.app.state.project_service


def get_character_service(request: Request) -> CharacterService:
    return request.app.state.character_service


def get_image_service(request: Request) -> ImageService:
    return request.app.state.image_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_uploader(request: Request) -> MediaUploader:
    return request.app.state.uploader
