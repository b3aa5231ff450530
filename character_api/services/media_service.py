"""
Media upload adapters.

Every provider exposes the same `upload(data, mime_type, filename)` call and
returns the provider id and a public URL. Which provider is used is a matter
of configuration (MEDIA_PROVIDER), not of branching in the routers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
import base64
import hashlib
import json
import logging
import time
import uuid

import requests

from character_api.core.errors import UploadProviderError

logger = logging.getLogger(__name__)


@dataclass
class UploadedMedia:
    id: str
    url: str


class MediaUploader(Protocol):
    def upload(self, data: bytes, mime_type: str, filename: str) -> UploadedMedia:
        ...


def _response_details(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return response.text[:500]


class _HttpUploader:
    provider = "media"

    def __init__(self, timeout: float = 30.0, session: requests.Session | None = None) -> None:
        self.timeout = timeout
        self._session = session or requests.Session()

    def _post(self, url: str, **kwargs) -> requests.Response:
        try:
            response = self._session.post(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise UploadProviderError(f"{self.provider} isteği başarısız: {exc}") from exc
        if not response.ok:
            raise UploadProviderError(
                f"{self.provider} HTTP {response.status_code} döndürdü",
                details=_response_details(response),
            )
        return response

    def _json(self, response: requests.Response) -> dict:
        try:
            payload = response.json()
        except ValueError as exc:
            raise UploadProviderError(f"{self.provider} yanıtı okunamadı", details=response.text[:500]) from exc
        return payload if isinstance(payload, dict) else {}


class ImgurUploader(_HttpUploader):
    provider = "Imgur"
    endpoint = "https://api.imgur.com/3/image"

    def __init__(self, client_id: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self.client_id = client_id

    def upload(self, data: bytes, mime_type: str, filename: str) -> UploadedMedia:
        headers = {"Content-Type": "application/json"}
        if self.client_id:
            headers["Authorization"] = f"Client-ID {self.client_id}"
        body = {"image": base64.b64encode(data).decode("ascii"), "type": "base64", "name": filename}
        payload = self._json(self._post(self.endpoint, data=json.dumps(body), headers=headers))
        info = payload.get("data") or {}
        if not info.get("link"):
            raise UploadProviderError("Imgur yanıtında link bulunamadı", details=payload)
        return UploadedMedia(id=str(info.get("id") or ""), url=info["link"])


class CloudinaryUploader(_HttpUploader):
    provider = "Cloudinary"

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, folder: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder

    def sign(self, params: dict) -> str:
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] not in ("", None))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode("utf-8")).hexdigest()

    def upload(self, data: bytes, mime_type: str, filename: str) -> UploadedMedia:
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise UploadProviderError("Cloudinary yapılandırılmamış: CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY ve CLOUDINARY_API_SECRET gerekli")
        params = {"timestamp": int(time.time())}
        if self.folder:
            params["folder"] = self.folder
        form = {**params, "api_key": self.api_key, "signature": self.sign(params)}
        url = f"https://api.cloudinary.com/v1_1/{self.cloud_name}/image/upload"
        payload = self._json(self._post(url, data=form, files={"file": (filename, data, mime_type)}))
        if not payload.get("secure_url"):
            raise UploadProviderError("Cloudinary yanıtında URL bulunamadı", details=payload)
        return UploadedMedia(id=str(payload.get("public_id") or ""), url=payload["secure_url"])


class GoogleDriveUploader(_HttpUploader):
    provider = "Google Drive"
    upload_endpoint = "https://www.googleapis.com/upload/drive/v3/files?uploadType=multipart&fields=id,name"
    files_endpoint = "https://www.googleapis.com/drive/v3/files"

    def __init__(self, access_token: str, folder_id: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self.access_token = access_token
        self.folder_id = folder_id

    def _multipart_body(self, data: bytes, mime_type: str, filename: str) -> tuple[bytes, str]:
        boundary = uuid.uuid4().hex
        metadata = {"name": filename}
        if self.folder_id:
            metadata["parents"] = [self.folder_id]
        body = b"".join(
            [
                f"--{boundary}\r\nContent-Type: application/json; charset=UTF-8\r\n\r\n".encode("utf-8"),
                json.dumps(metadata).encode("utf-8"),
                f"\r\n--{boundary}\r\nContent-Type: {mime_type}\r\n\r\n".encode("utf-8"),
                data,
                f"\r\n--{boundary}--\r\n".encode("utf-8"),
            ]
        )
        return body, f"multipart/related; boundary={boundary}"

    def upload(self, data: bytes, mime_type: str, filename: str) -> UploadedMedia:
        if not self.access_token:
            raise UploadProviderError("Google Drive yapılandırılmamış: GDRIVE_ACCESS_TOKEN gerekli")
        auth = {"Authorization": f"Bearer {self.access_token}"}
        body, content_type = self._multipart_body(data, mime_type or "application/octet-stream", filename)
        payload = self._json(self._post(self.upload_endpoint, data=body, headers={**auth, "Content-Type": content_type}))
        file_id = payload.get("id")
        if not file_id:
            raise UploadProviderError("Google Drive yanıtında dosya kimliği bulunamadı", details=payload)
        # make the file readable through the public link
        self._post(
            f"{self.files_endpoint}/{file_id}/permissions",
            json={"role": "reader", "type": "anyone"},
            headers=auth,
        )
        return UploadedMedia(id=file_id, url=f"https://drive.google.com/uc?export=view&id={file_id}")


def build_uploader(settings) -> MediaUploader:
    provider = settings.media_provider
    timeout = settings.remote_timeout_seconds
    if provider == "cloudinary":
        return CloudinaryUploader(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            folder=settings.cloudinary_folder,
            timeout=timeout,
        )
    if provider in ("gdrive", "drive", "google-drive"):
        return GoogleDriveUploader(
            access_token=settings.gdrive_access_token,
            folder_id=settings.gdrive_folder_id,
            timeout=timeout,
        )
    if provider != "imgur":
        logger.warning("Unknown MEDIA_PROVIDER %r; falling back to Imgur", provider)
    return ImgurUploader(client_id=settings.imgur_client_id, timeout=timeout)
