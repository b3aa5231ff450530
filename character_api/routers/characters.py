from __future__ import annotations

from fastapi import APIRouter, Depends

from character_api.dependencies import get_character_service
from character_api.schemas import CharacterBody
from character_api.services.character_service import CharacterService

router = APIRouter(prefix="/api/projects/{project_id}/characters", tags=["characters"])


@router.get("")
def list_characters(project_id: str, service: CharacterService = Depends(get_character_service)):
    return service.list_characters(project_id)


@router.post("")
def create_character(project_id: str, payload: CharacterBody, service: CharacterService = Depends(get_character_service)):
    return service.create_character(project_id, payload.model_dump(exclude_unset=True))


@router.get("/{character_id}")
def get_character(project_id: str, character_id: str, service: CharacterService = Depends(get_character_service)):
    return service.get_character(project_id, character_id)


@router.put("/{character_id}")
def update_character(
    project_id: str,
    character_id: str,
    payload: CharacterBody,
    service: CharacterService = Depends(get_character_service),
):
    return service.update_character(project_id, character_id, payload.model_dump(exclude_unset=True))


@router.delete("/{character_id}")
def delete_character(project_id: str, character_id: str, service: CharacterService = Depends(get_character_service)):
    service.delete_character(project_id, character_id)
    return {"success": True}
