from __future__ import annotations

import logging
import traceback

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from character_api.core.config import Settings
from character_api.core.errors import UploadProviderError
from character_api.dependencies import get_app_settings, get_uploader
from character_api.schemas import UploadResponse
from character_api.services.media_service import MediaUploader

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])

UPLOAD_FAILED = "Upload sırasında hata oluştu"


@router.post("/upload", response_model=UploadResponse)
def upload_file(
    file: UploadFile | None = File(None),
    uploader: MediaUploader = Depends(get_uploader),
    settings: Settings = Depends(get_app_settings),
):
    if file is None:
        return JSONResponse({"error": "Dosya bulunamadı"}, status_code=400)

    data = file.file.read()
    filename = file.filename or "upload"
    mime_type = file.content_type or "application/octet-stream"
    logger.info("Uploading %s (%d bytes, %s)", filename, len(data), mime_type)
    try:
        media = uploader.upload(data, mime_type, filename)
    except UploadProviderError as exc:
        logger.error("Upload of %s failed: %s details=%r", filename, exc.message, exc.details)
        body = {"error": UPLOAD_FAILED, "message": exc.message}
        if exc.details is not None:
            body["details"] = exc.details
        return JSONResponse(body, status_code=500)
    except Exception as exc:
        logger.exception("Unexpected error uploading %s", filename)
        body = {"error": UPLOAD_FAILED, "message": str(exc)}
        if settings.expose_error_details:
            body["details"] = traceback.format_exc()
        return JSONResponse(body, status_code=500)

    logger.info("Upload of %s succeeded: %s", filename, media.url)
    return UploadResponse(id=media.id, name=filename, url=media.url)
