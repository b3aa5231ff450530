from __future__ import annotations

from fastapi import APIRouter, Depends

from character_api.dependencies import get_image_service
from character_api.schemas import ImageCreate, ImageUpdate, ReorderRequest
from character_api.services.image_service import ImageService

router = APIRouter(prefix="/api", tags=["images"])


@router.get("/characters/{character_id}/images")
def list_images(character_id: str, service: ImageService = Depends(get_image_service)):
    return service.list_images(character_id)


@router.post("/characters/{character_id}/images")
def add_image(character_id: str, payload: ImageCreate, service: ImageService = Depends(get_image_service)):
    return service.add_image(character_id, payload.model_dump(exclude_unset=True))


@router.patch("/characters/{character_id}/images/reorder")
def reorder_images(character_id: str, payload: ReorderRequest, service: ImageService = Depends(get_image_service)):
    return service.reorder(character_id, payload.imageIds)


@router.get("/images/{image_id}")
def get_image(image_id: str, service: ImageService = Depends(get_image_service)):
    return service.get_image(image_id)


@router.put("/images/{image_id}")
def update_image(image_id: str, payload: ImageUpdate, service: ImageService = Depends(get_image_service)):
    return service.update_image(image_id, payload.model_dump(exclude_unset=True))


@router.delete("/images/{image_id}")
def delete_image(image_id: str, service: ImageService = Depends(get_image_service)):
    service.delete_image(image_id)
    return {"success": True}
