"""
JSON collection persistence backed by a remote store and a local cache.

Each collection is one JSON document. `load()` prefers the remote copy
(refreshing the local file with it), then the local file, then seeds the
collection default. `save()` always writes the local file first and mirrors
to the remote store on a best-effort basis: remote failures are logged and
never reach the caller.

There is no locking between concurrent load/save cycles: two writers on the
same collection race and the last save wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Generic, TypeVar
import copy
import json
import logging

from .local_store import LocalFileStore
from .remote_store import (
    DisabledRemoteStore,
    RemoteNotFound,
    RemoteStore,
    RemoteStoreError,
    RemoteUnavailable,
    build_remote_store,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROJECTS_PATH = "data/projects.json"
CHARACTERS_PATH = "data/characters.json"
CHARACTER_IMAGES_PATH = "data/character-images.json"
USERS_PATH = "data/users.json"


def dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, indent=2)


class JsonCollection(Generic[T]):
    """One logical collection persisted as a JSON snapshot in two stores."""

    def __init__(
        self,
        path: str,
        default: Callable[[], T],
        local: LocalFileStore,
        remote: RemoteStore | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.path = path
        self._default = default
        self.local = local
        self.remote = remote or DisabledRemoteStore()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def default(self) -> T:
        return copy.deepcopy(self._default())

    def load(self) -> T:
        if self.remote.enabled:
            try:
                remote_file = self.remote.get(self.path)
                value = json.loads(remote_file.content)
            except RemoteNotFound:
                logger.debug("%s not found on remote store; falling back to local copy", self.path)
            except RemoteUnavailable as exc:
                logger.warning("Remote load of %s failed, using local copy: %s", self.path, exc)
            except ValueError as exc:
                logger.warning("Remote copy of %s is not valid JSON, using local copy: %s", self.path, exc)
            else:
                self._refresh_local(remote_file.content)
                return value

        try:
            raw = self.local.load(self.path)
        except FileNotFoundError:
            value = self.default()
            logger.info("Seeding %s with its default value", self.path)
            self.local.save(self.path, dumps(value))
            return value
        return json.loads(raw)

    def save(self, value: T) -> None:
        content = dumps(value)
        self.local.save(self.path, content)
        if not self.remote.enabled:
            return
        try:
            sha = None
            try:
                sha = self.remote.get(self.path).sha
            except RemoteNotFound:
                pass
            self.remote.put(self.path, content, message=self.commit_message(), sha=sha)
        except RemoteStoreError as exc:
            logger.warning("Remote save of %s failed; kept local copy only: %s", self.path, exc)

    def commit_message(self) -> str:
        stamp = self._clock().isoformat()
        return f"Update {self.path} ({stamp})"

    def _refresh_local(self, content: str) -> None:
        try:
            self.local.save(self.path, content)
        except OSError as exc:
            logger.warning("Could not refresh local cache for %s: %s", self.path, exc)


@dataclass
class DataStore:
    """The four collections the API works with."""

    projects: JsonCollection[list]
    characters: JsonCollection[dict]
    images: JsonCollection[dict]
    users: JsonCollection[list]

    def all(self) -> list[JsonCollection]:
        return [self.projects, self.characters, self.images, self.users]


def build_data_store(settings, remote: RemoteStore | None = None, local: LocalFileStore | None = None) -> DataStore:
    """Instantiate every collection against the configured stores."""
    remote_store = remote if remote is not None else build_remote_store(settings)
    local_store = local or LocalFileStore(settings.data_root)

    def collection(path: str, default: Callable[[], Any]) -> JsonCollection:
        return JsonCollection(path, default, local_store, remote_store)

    return DataStore(
        projects=collection(PROJECTS_PATH, list),
        characters=collection(CHARACTERS_PATH, dict),
        images=collection(CHARACTER_IMAGES_PATH, dict),
        users=collection(USERS_PATH, list),
    )
