"""Character use cases (characters are grouped per project)."""

from __future__ import annotations

from character_api.core.errors import NotFoundError, ValidationError
from character_api.core.utils import generate_id, utc_now_iso
from character_api.repositories.json_storage import DataStore

CHARACTER_NOT_FOUND = "Karakter bulunamadı"
_PROTECTED_FIELDS = ("id", "createdAt")


class CharacterService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    def list_characters(self, project_id: str) -> list[dict]:
        return self.store.characters.load().get(project_id, [])

    def get_character(self, project_id: str, character_id: str) -> dict:
        for character in self.list_characters(project_id):
            if character.get("id") == character_id:
                return character
        raise NotFoundError(CHARACTER_NOT_FOUND)

    def create_character(self, project_id: str, fields: dict) -> dict:
        first_name = (fields.get("firstName") or "").strip()
        if not first_name:
            raise ValidationError("Karakter adı gerekli")
        extra = {k: v for k, v in fields.items() if k not in _PROTECTED_FIELDS}
        character = {
            **extra,
            "id": generate_id("character"),
            "firstName": first_name,
            "lastName": (fields.get("lastName") or "").strip(),
            "createdAt": utc_now_iso(),
        }
        characters = self.store.characters.load()
        # unknown projects get an empty bucket, the project id is not checked
        characters.setdefault(project_id, []).append(character)
        self.store.characters.save(characters)
        return character

    def update_character(self, project_id: str, character_id: str, changes: dict) -> dict:
        if "firstName" in changes and not (changes.get("firstName") or "").strip():
            raise ValidationError("Karakter adı gerekli")
        characters = self.store.characters.load()
        bucket = characters.get(project_id, [])
        for index, character in enumerate(bucket):
            if character.get("id") != character_id:
                continue
            patch = {k: v for k, v in changes.items() if k not in _PROTECTED_FIELDS}
            updated = {**character, **patch, "updatedAt": utc_now_iso()}
            bucket[index] = updated
            self.store.characters.save(characters)
            return updated
        raise NotFoundError(CHARACTER_NOT_FOUND)

    def delete_character(self, project_id: str, character_id: str) -> None:
        characters = self.store.characters.load()
        bucket = characters.get(project_id, [])
        remaining = [c for c in bucket if c.get("id") != character_id]
        if len(remaining) == len(bucket):
            raise NotFoundError(CHARACTER_NOT_FOUND)
        characters[project_id] = remaining
        self.store.characters.save(characters)

        images = self.store.images.load()
        if images.pop(character_id, None) is not None:
            self.store.images.save(images)
