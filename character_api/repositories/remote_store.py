"""
Remote store client for a Git hosting "contents" API (GitHub flavoured).

Reads fetch the file plus its blob sha; writes PUT the new content and pass
the last known sha so the host treats it as an update. Without a token the
store degrades to a disabled no-op so the app runs on local files only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol
import base64
import json
import logging

import requests

logger = logging.getLogger(__name__)


class RemoteStoreError(Exception):
    """Base class for remote store failures."""


class RemoteNotFound(RemoteStoreError):
    """The requested path does not exist on the remote branch."""


class RemoteUnavailable(RemoteStoreError):
    """Non-2xx response, network failure, malformed payload or no credential."""


@dataclass
class RemoteFile:
    content: str
    sha: str


class RemoteStore(Protocol):
    """Operations the persistence core needs from the remote store."""

    enabled: bool

    def get(self, path: str) -> RemoteFile:
        ...

    def put(self, path: str, content: str, message: str, sha: Optional[str] = None) -> None:
        ...


class DisabledRemoteStore:
    """Stand-in used when no credential is configured."""

    enabled = False

    def get(self, path: str) -> RemoteFile:
        raise RemoteUnavailable("remote store not configured")

    def put(self, path: str, content: str, message: str, sha: Optional[str] = None) -> None:
        logger.info("Remote store not configured; skipping write of %s", path)


@dataclass
class InMemoryRemoteStore:
    """Test double keeping files and incrementing fake shas."""

    files: dict = field(default_factory=dict)
    enabled: bool = True
    puts: list = field(default_factory=list)

    def get(self, path: str) -> RemoteFile:
        stored = self.files.get(path)
        if stored is None:
            raise RemoteNotFound(path)
        return stored

    def put(self, path: str, content: str, message: str, sha: Optional[str] = None) -> None:
        self.puts.append({"path": path, "message": message, "sha": sha})
        self.files[path] = RemoteFile(content=content, sha=f"sha-{len(self.puts)}")


class GitHubContentsStore:
    """Authenticated client for /repos/{owner}/{repo}/contents/{path}."""

    enabled = True

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        branch: str = "main",
        api_url: str = "https://api.github.com",
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    def _contents_url(self, path: str) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}/contents/{path.lstrip('/')}"

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            return self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise RemoteUnavailable(f"{method} {url} failed: {exc}") from exc

    def _json(self, response: requests.Response) -> dict:
        try:
            payload = response.json()
        except ValueError as exc:
            raise RemoteUnavailable(f"invalid JSON from remote store: {exc}") from exc
        if not isinstance(payload, dict):
            raise RemoteUnavailable("unexpected payload from remote store")
        return payload

    def _fetch_blob(self, sha: str) -> str:
        url = f"{self.api_url}/repos/{self.owner}/{self.repo}/git/blobs/{sha}"
        response = self._request("GET", url)
        if not response.ok:
            raise RemoteUnavailable(f"blob {sha} returned HTTP {response.status_code}")
        return self._json(response).get("content") or ""

    def get(self, path: str) -> RemoteFile:
        response = self._request("GET", self._contents_url(path), params={"ref": self.branch})
        if response.status_code == 404:
            raise RemoteNotFound(path)
        if not response.ok:
            raise RemoteUnavailable(f"GET {path} returned HTTP {response.status_code}")
        payload = self._json(response)
        sha = payload.get("sha") or ""
        encoded = payload.get("content") or ""
        # files over the inline limit come back with encoding "none"
        if payload.get("encoding") == "none" and sha:
            encoded = self._fetch_blob(sha)
        try:
            content = base64.b64decode(encoded).decode("utf-8")
        except (TypeError, ValueError, UnicodeDecodeError) as exc:
            raise RemoteUnavailable(f"could not decode {path}: {exc}") from exc
        return RemoteFile(content=content, sha=sha)

    def put(self, path: str, content: str, message: str, sha: Optional[str] = None) -> None:
        body = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": self.branch,
        }
        if sha:
            body["sha"] = sha
        response = self._request("PUT", self._contents_url(path), data=json.dumps(body))
        if not response.ok:
            raise RemoteUnavailable(f"PUT {path} returned HTTP {response.status_code}: {response.text[:200]}")


def build_remote_store(settings) -> RemoteStore:
    if not settings.remote_enabled:
        logger.info("GITHUB_TOKEN/GITHUB_OWNER/GITHUB_REPO not set; using local persistence only.")
        return DisabledRemoteStore()
    return GitHubContentsStore(
        token=settings.github_token,
        owner=settings.github_owner,
        repo=settings.github_repo,
        branch=settings.github_branch,
        api_url=settings.github_api_url,
        timeout=settings.remote_timeout_seconds,
    )
