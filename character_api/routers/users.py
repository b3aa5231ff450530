from __future__ import annotations

from fastapi import APIRouter, Depends

from character_api.dependencies import get_user_service
from character_api.schemas import LoginRequest, UserCreate, UserUpdate
from character_api.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("")
def list_users(service: UserService = Depends(get_user_service)):
    return service.list_users()


@router.post("")
def create_user(payload: UserCreate, service: UserService = Depends(get_user_service)):
    return service.create_user(payload.username, payload.password, payload.role, payload.projects)


@router.post("/login")
def check_credentials(payload: LoginRequest, service: UserService = Depends(get_user_service)):
    # credential check only: no session or token is issued
    return service.authenticate(payload.username, payload.password)


@router.get("/{user_id}")
def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return service.get_user(user_id)


@router.put("/{user_id}")
def update_user(user_id: str, payload: UserUpdate, service: UserService = Depends(get_user_service)):
    return service.update_user(user_id, payload.model_dump(exclude_unset=True))


@router.delete("/{user_id}")
def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    service.delete_user(user_id)
    return {"success": True}
