"""Error taxonomy shared by services and the HTTP layer."""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """An error that maps directly onto an HTTP response with `{error}`."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class InvalidCredentialsError(ApiError):
    status_code = 401


class UploadProviderError(Exception):
    """The media host rejected or failed an upload."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details
