from __future__ import annotations

from fastapi import APIRouter, Depends

from character_api.dependencies import get_project_service
from character_api.schemas import ProjectCreate, ProjectUpdate
from character_api.services.project_service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("")
def list_projects(service: ProjectService = Depends(get_project_service)):
    return service.list_projects()


@router.post("")
def create_project(payload: ProjectCreate, service: ProjectService = Depends(get_project_service)):
    return service.create_project(payload.name, payload.description)


@router.get("/{project_id}")
def get_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    return service.get_project(project_id)


@router.put("/{project_id}")
def update_project(project_id: str, payload: ProjectUpdate, service: ProjectService = Depends(get_project_service)):
    return service.update_project(project_id, payload.model_dump(exclude_unset=True))


@router.delete("/{project_id}")
def delete_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    service.delete_project(project_id)
    return {"success": True}
