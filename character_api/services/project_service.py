"""Project use cases."""

from __future__ import annotations

from typing import Optional

from character_api.core.errors import NotFoundError, ValidationError
from character_api.core.utils import generate_id, utc_now_iso
from character_api.repositories.json_storage import DataStore

PROJECT_NOT_FOUND = "Proje bulunamadı"


class ProjectService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    def list_projects(self) -> list[dict]:
        return self.store.projects.load()

    def get_project(self, project_id: str) -> dict:
        for project in self.store.projects.load():
            if project.get("id") == project_id:
                return project
        raise NotFoundError(PROJECT_NOT_FOUND)

    def create_project(self, name: Optional[str], description: Optional[str] = None) -> dict:
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Proje adı gerekli")
        projects = self.store.projects.load()
        project = {"id": generate_id("project"), "name": clean_name}
        if description is not None:
            project["description"] = description
        projects.append(project)
        self.store.projects.save(projects)
        return project

    def update_project(self, project_id: str, changes: dict) -> dict:
        if "name" in changes and not (changes.get("name") or "").strip():
            raise ValidationError("Proje adı gerekli")
        projects = self.store.projects.load()
        for index, project in enumerate(projects):
            if project.get("id") != project_id:
                continue
            updated = {**project, **changes, "id": project_id, "updatedAt": utc_now_iso()}
            if "name" in changes:
                updated["name"] = changes["name"].strip()
            projects[index] = updated
            self.store.projects.save(projects)
            return updated
        raise NotFoundError(PROJECT_NOT_FOUND)

    def delete_project(self, project_id: str) -> None:
        projects = self.store.projects.load()
        remaining = [p for p in projects if p.get("id") != project_id]
        if len(remaining) == len(projects):
            raise NotFoundError(PROJECT_NOT_FOUND)
        self.store.projects.save(remaining)

        # drop the characters owned by the project and their image buckets
        characters = self.store.characters.load()
        owned = characters.pop(project_id, None)
        if owned is None:
            return
        self.store.characters.save(characters)
        images = self.store.images.load()
        dropped = [images.pop(c.get("id"), None) for c in owned]
        if any(bucket is not None for bucket in dropped):
            self.store.images.save(images)
