from __future__ import annotations

from fastapi import APIRouter

from character_api.core.utils import utc_now_iso

router = APIRouter(tags=["health"])


@router.get("/")
def root():
    return {"status": "ok", "message": "Character backend up"}


@router.get("/health")
def health():
    return {"status": "healthy", "timestamp": utc_now_iso()}
