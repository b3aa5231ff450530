"""
Configuration helpers for the character backend.

Settings are read once from the environment (optionally seeded from a .env
file) and handed to the app factory, which passes them on to the persistence
and media layers. Routers/services never read os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_root: str
    github_token: str
    github_owner: str
    github_repo: str
    github_branch: str
    github_api_url: str
    remote_timeout_seconds: float
    media_provider: str
    imgur_client_id: str
    cloudinary_cloud_name: str
    cloudinary_api_key: str
    cloudinary_api_secret: str
    cloudinary_folder: str
    gdrive_access_token: str
    gdrive_folder_id: str
    cors_origins: tuple[str, ...]
    log_level: str

    @property
    def remote_enabled(self) -> bool:
        return bool(self.github_token and self.github_owner and self.github_repo)

    @property
    def expose_error_details(self) -> bool:
        return self.app_env == "dev"


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    load_dotenv()

    def _float(value: str | None, default: float) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def _list(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            return default
        items = tuple(item.strip() for item in value.split(",") if item.strip())
        return items or default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_root=os.getenv("DATA_ROOT") or os.getcwd(),
        github_token=os.getenv("GITHUB_TOKEN", "").strip(),
        github_owner=os.getenv("GITHUB_OWNER", "").strip(),
        github_repo=os.getenv("GITHUB_REPO", "").strip(),
        github_branch=os.getenv("GITHUB_BRANCH", "main").strip() or "main",
        github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
        remote_timeout_seconds=_float(os.getenv("REMOTE_TIMEOUT_SECONDS"), 15.0),
        media_provider=(os.getenv("MEDIA_PROVIDER") or "imgur").strip().lower(),
        imgur_client_id=os.getenv("IMGUR_CLIENT_ID", ""),
        cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
        cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY", ""),
        cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
        cloudinary_folder=os.getenv("CLOUDINARY_FOLDER", "characters"),
        gdrive_access_token=os.getenv("GDRIVE_ACCESS_TOKEN", ""),
        gdrive_folder_id=os.getenv("GDRIVE_FOLDER_ID", ""),
        cors_origins=_list(os.getenv("CORS_ORIGINS"), ("*",)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
