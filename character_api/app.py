"""
FastAPI application for the character backend.

`create_app` wires settings, the JSON collections (remote store + local
cache), the services and the media uploader, then mounts the routers.
"""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from character_api.core.config import Settings, get_settings
from character_api.core.errors import ApiError
from character_api.repositories.json_storage import build_data_store
from character_api.repositories.remote_store import RemoteStore
from character_api.routers import characters as characters_router
from character_api.routers import health as health_router
from character_api.routers import images as images_router
from character_api.routers import projects as projects_router
from character_api.routers import upload as upload_router
from character_api.routers import users as users_router
from character_api.services.character_service import CharacterService
from character_api.services.image_service import ImageService
from character_api.services.media_service import MediaUploader, build_uploader
from character_api.services.project_service import ProjectService
from character_api.services.user_service import UserService

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Geçersiz istek"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg") or "geçersiz değer"
    return f"{location}: {message}" if location else message


def _install_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": _validation_message(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        body = {"error": "Sunucu hatası"}
        if settings.expose_error_details:
            body["message"] = str(exc)
            body["details"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(body, status_code=500)


def create_app(
    settings: Settings | None = None,
    *,
    remote: RemoteStore | None = None,
    uploader: MediaUploader | None = None,
) -> FastAPI:
    """Build the app; usable directly or through `uvicorn --factory`."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Character Backend API")
    store = build_data_store(settings, remote=remote)
    app.state.settings = settings
    app.state.data_store = store
    app.state.project_service = ProjectService(store)
    app.state.character_service = CharacterService(store)
    app.state.image_service = ImageService(store)
    app.state.user_service = UserService(store)
    app.state.uploader = uploader or build_uploader(settings)

    origins = list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    _install_error_handlers(app, settings)

    app.include_router(health_router.router)
    app.include_router(upload_router.router)
    app.include_router(projects_router.router)
    app.include_router(characters_router.router)
    app.include_router(images_router.router)
    app.include_router(users_router.router)
    return app
