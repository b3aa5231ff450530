"""Entry point for uvicorn: `uvicorn character_api.app_factory:app`."""
from character_api.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
