from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the character_api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from character_api.core.errors import NotFoundError, ValidationError  # noqa: E402
from character_api.repositories.json_storage import build_data_store  # noqa: E402
from character_api.services.character_service import CharacterService  # noqa: E402
from character_api.services.image_service import ImageService  # noqa: E402
from character_api.services.project_service import ProjectService  # noqa: E402


@pytest.fixture()
def store(tmp_path):
    settings = type("Settings", (), {"data_root": str(tmp_path), "remote_enabled": False})()
    return build_data_store(settings)


def test_project_lifecycle(store):
    svc = ProjectService(store)

    project = svc.create_project("  Demo  ", "first")
    assert project["id"].startswith("proje-")
    assert project["name"] == "Demo"

    updated = svc.update_project(project["id"], {"name": "Demo 2", "id": "other"})
    assert updated["id"] == project["id"]
    assert updated["name"] == "Demo 2"
    assert updated["description"] == "first"
    assert "updatedAt" in updated

    svc.delete_project(project["id"])
    assert svc.list_projects() == []


def test_project_validation_and_missing(store):
    svc = ProjectService(store)

    with pytest.raises(ValidationError):
        svc.create_project("   ")
    with pytest.raises(NotFoundError) as exc:
        svc.update_project("proje-missing", {"name": "x"})
    assert exc.value.message == "Proje bulunamadı"
    with pytest.raises(NotFoundError):
        svc.delete_project("proje-missing")


def test_projects_keep_insertion_order(store):
    svc = ProjectService(store)
    names = ["one", "two", "three"]
    for name in names:
        svc.create_project(name)

    assert [p["name"] for p in svc.list_projects()] == names


def test_character_keeps_freeform_fields_and_identity(store):
    svc = CharacterService(store)

    character = svc.create_character("proje-1", {"firstName": "Ada", "lastName": "Lovelace", "age": 36})
    assert character["id"].startswith("chara-")
    assert character["age"] == 36
    assert "createdAt" in character

    updated = svc.update_character(
        "proje-1", character["id"], {"id": "x", "createdAt": "never", "mood": "curious"}
    )
    assert updated["id"] == character["id"]
    assert updated["createdAt"] == character["createdAt"]
    assert updated["mood"] == "curious"
    assert updated["firstName"] == "Ada"


def test_character_for_unknown_project_creates_bucket(store):
    svc = CharacterService(store)

    svc.create_character("proje-ghost", {"firstName": "Nobody"})

    assert len(store.characters.load()["proje-ghost"]) == 1


def test_character_requires_first_name(store):
    with pytest.raises(ValidationError):
        CharacterService(store).create_character("proje-1", {"lastName": "Only"})


def test_deleting_project_drops_characters_and_images(store):
    projects = ProjectService(store)
    characters = CharacterService(store)
    images = ImageService(store)
    project = projects.create_project("Demo")
    character = characters.create_character(project["id"], {"firstName": "Ada"})
    images.add_image(character["id"], {"url": "https://img.test/a.png", "title": "A"})

    projects.delete_project(project["id"])

    assert project["id"] not in store.characters.load()
    assert character["id"] not in store.images.load()


def test_deleting_character_drops_its_images(store):
    characters = CharacterService(store)
    images = ImageService(store)
    character = characters.create_character("proje-1", {"firstName": "Ada"})
    images.add_image(character["id"], {"url": "https://img.test/a.png", "title": "A"})

    characters.delete_character("proje-1", character["id"])

    assert characters.list_characters("proje-1") == []
    assert images.list_images(character["id"]) == []
    with pytest.raises(NotFoundError):
        characters.delete_character("proje-1", character["id"])
