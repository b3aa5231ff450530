"""
Load/save contract of the JSON collections against an in-memory remote store
and a temporary local directory.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Make the character_api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from character_api.repositories.json_storage import JsonCollection, build_data_store, dumps  # noqa: E402
from character_api.repositories.local_store import LocalFileStore  # noqa: E402
from character_api.repositories.remote_store import (  # noqa: E402
    DisabledRemoteStore,
    InMemoryRemoteStore,
    RemoteFile,
    RemoteUnavailable,
)


class BrokenRemoteStore:
    """Remote store whose every call fails like a dropped connection."""

    enabled = True

    def __init__(self) -> None:
        self.calls = 0

    def get(self, path):
        self.calls += 1
        raise RemoteUnavailable("connection reset")

    def put(self, path, content, message, sha=None):
        self.calls += 1
        raise RemoteUnavailable("connection reset")


class ReadOnlyRemoteStore(InMemoryRemoteStore):
    def put(self, path, content, message, sha=None):
        raise RemoteUnavailable("HTTP 409")


@pytest.fixture()
def local(tmp_path):
    return LocalFileStore(tmp_path)


def test_save_then_load_round_trips_without_remote(local):
    projects = JsonCollection("data/projects.json", list, local)
    value = [{"id": "proje-1", "name": "Demo", "description": "çalışma"}]

    projects.save(value)

    assert projects.load() == value


def test_save_then_load_round_trips_with_remote(local):
    remote = InMemoryRemoteStore()
    characters = JsonCollection("data/characters.json", dict, local, remote)
    value = {"proje-1": [{"id": "chara-1", "firstName": "Ada", "lastName": "Lovelace"}]}

    characters.save(value)

    assert characters.load() == value
    assert json.loads(remote.files["data/characters.json"].content) == value


def test_fresh_load_seeds_default_and_persists_it(local, tmp_path):
    images = JsonCollection("data/character-images.json", dict, local, DisabledRemoteStore())

    first = images.load()

    assert first == {}
    seeded = tmp_path / "data" / "character-images.json"
    assert seeded.exists()
    assert json.loads(seeded.read_text(encoding="utf-8")) == {}
    assert images.load() == first


def test_default_is_not_shared_between_loads(local):
    users = JsonCollection("data/users.json", lambda: [{"id": "seed"}], local)

    users.default().append({"id": "mutated"})

    assert users.default() == [{"id": "seed"}]


def test_remote_missing_falls_back_to_local_copy(local):
    local.save("data/projects.json", dumps([{"id": "proje-local", "name": "Local"}]))
    projects = JsonCollection("data/projects.json", list, local, InMemoryRemoteStore())

    assert projects.load() == [{"id": "proje-local", "name": "Local"}]


def test_remote_error_falls_back_to_local_copy(local):
    local.save("data/projects.json", dumps([{"id": "proje-local", "name": "Local"}]))
    projects = JsonCollection("data/projects.json", list, local, BrokenRemoteStore())

    assert projects.load() == [{"id": "proje-local", "name": "Local"}]


def test_remote_wins_on_load_and_refreshes_local_copy(local, tmp_path):
    local.save("data/projects.json", dumps([{"id": "stale"}]))
    remote = InMemoryRemoteStore()
    remote_content = dumps([{"id": "proje-remote", "name": "Remote"}])
    remote.files["data/projects.json"] = RemoteFile(content=remote_content, sha="abc")
    projects = JsonCollection("data/projects.json", list, local, remote)

    assert projects.load() == [{"id": "proje-remote", "name": "Remote"}]
    assert (tmp_path / "data" / "projects.json").read_text(encoding="utf-8") == remote_content


def test_invalid_remote_json_falls_back_to_local(local):
    local.save("data/users.json", dumps([{"id": "user-1"}]))
    remote = InMemoryRemoteStore()
    remote.files["data/users.json"] = RemoteFile(content="{not json", sha="abc")
    users = JsonCollection("data/users.json", list, local, remote)

    assert users.load() == [{"id": "user-1"}]


def test_save_survives_remote_failure(local, tmp_path):
    remote = BrokenRemoteStore()
    projects = JsonCollection("data/projects.json", list, local, remote)

    projects.save([{"id": "proje-1", "name": "Demo"}])

    assert remote.calls >= 1
    stored = json.loads((tmp_path / "data" / "projects.json").read_text(encoding="utf-8"))
    assert stored == [{"id": "proje-1", "name": "Demo"}]


def test_save_survives_rejected_remote_write(local):
    projects = JsonCollection("data/projects.json", list, local, ReadOnlyRemoteStore())

    projects.save([{"id": "proje-1"}])

    assert local.load("data/projects.json") == dumps([{"id": "proje-1"}])


def test_save_passes_current_revision_when_remote_file_exists(local):
    remote = InMemoryRemoteStore()
    remote.files["data/projects.json"] = RemoteFile(content="[]", sha="rev-1")
    projects = JsonCollection("data/projects.json", list, local, remote)

    projects.save([{"id": "proje-1"}])
    projects.save([{"id": "proje-1"}, {"id": "proje-2"}])

    assert remote.puts[0]["sha"] == "rev-1"
    assert remote.puts[1]["sha"] == "sha-1"
    assert remote.puts[0]["message"].startswith("Update data/projects.json (")


def test_save_creates_remote_file_without_revision(local):
    remote = InMemoryRemoteStore()
    projects = JsonCollection("data/projects.json", list, local, remote)

    projects.save([])

    assert remote.puts == [{"path": "data/projects.json", "message": remote.puts[0]["message"], "sha": None}]


def test_disabled_remote_is_never_written(local):
    remote = InMemoryRemoteStore(enabled=False)
    projects = JsonCollection("data/projects.json", list, local, remote)

    projects.save([{"id": "proje-1"}])
    projects.load()

    assert remote.puts == []


def test_snapshots_are_pretty_printed_utf8(local, tmp_path):
    projects = JsonCollection("data/projects.json", list, local)

    projects.save([{"id": "proje-1", "name": "Şehir"}])

    text = (tmp_path / "data" / "projects.json").read_text(encoding="utf-8")
    assert '  {\n    "id": "proje-1"' in text
    assert "Şehir" in text


def test_build_data_store_uses_collection_layout(tmp_path):
    settings = type("Settings", (), {"data_root": str(tmp_path), "remote_enabled": False})()

    store = build_data_store(settings)

    assert [c.path for c in store.all()] == [
        "data/projects.json",
        "data/characters.json",
        "data/character-images.json",
        "data/users.json",
    ]
    assert store.projects.load() == []
    assert store.characters.load() == {}
    assert store.images.load() == {}
    assert store.users.load() == []


class ReadOnlyLocalStore(LocalFileStore):
    def save(self, path, content):
        raise PermissionError(f"read-only: {path}")


def test_failed_cache_refresh_still_returns_remote_value(tmp_path):
    remote = InMemoryRemoteStore()
    remote.files["data/projects.json"] = RemoteFile(content=dumps([{"id": "proje-remote"}]), sha="abc")
    projects = JsonCollection("data/projects.json", list, ReadOnlyLocalStore(tmp_path), remote)

    assert projects.load() == [{"id": "proje-remote"}]


def test_local_snapshot_follows_umask(local, tmp_path):
    reference = tmp_path / "reference.json"
    reference.write_text("[]", encoding="utf-8")

    local.save("data/projects.json", "[]")

    snapshot = tmp_path / "data" / "projects.json"
    assert snapshot.stat().st_mode & 0o777 == reference.stat().st_mode & 0o777
    assert [p.name for p in snapshot.parent.iterdir()] == ["projects.json"]
