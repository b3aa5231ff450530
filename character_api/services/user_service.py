"""
User management use cases.

Passwords are stored as Argon2 hashes. Records written before hashing was
introduced hold the password in clear; they still verify and are rehashed
the first time the credential check succeeds.
"""

from __future__ import annotations

from typing import Optional

from character_api.core.errors import InvalidCredentialsError, NotFoundError, ValidationError
from character_api.core.security import hash_password, is_hashed, verify_password
from character_api.core.utils import generate_id
from character_api.repositories.json_storage import DataStore

USER_NOT_FOUND = "Kullanıcı bulunamadı"
DEFAULT_ROLE = "user"


def public_user(user: dict) -> dict:
    return {k: v for k, v in user.items() if k != "password"}


class UserService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    def list_users(self) -> list[dict]:
        return [public_user(u) for u in self.store.users.load()]

    def get_user(self, user_id: str) -> dict:
        for user in self.store.users.load():
            if user.get("id") == user_id:
                return public_user(user)
        raise NotFoundError(USER_NOT_FOUND)

    def _ensure_username_free(self, users: list[dict], username: str, exclude_id: Optional[str] = None) -> None:
        for user in users:
            if user.get("username") == username and user.get("id") != exclude_id:
                raise ValidationError("Bu kullanıcı adı zaten kullanılıyor")

    def create_user(
        self,
        username: Optional[str],
        password: Optional[str],
        role: Optional[str] = None,
        projects: Optional[list[str]] = None,
    ) -> dict:
        clean_username = (username or "").strip()
        if not clean_username or not password:
            raise ValidationError("Kullanıcı adı ve şifre gerekli")
        users = self.store.users.load()
        self._ensure_username_free(users, clean_username)
        user = {
            "id": generate_id("user"),
            "username": clean_username,
            "password": hash_password(password),
            "role": (role or DEFAULT_ROLE).strip() or DEFAULT_ROLE,
            "projects": list(projects or []),
        }
        users.append(user)
        self.store.users.save(users)
        return public_user(user)

    def update_user(self, user_id: str, changes: dict) -> dict:
        users = self.store.users.load()
        for index, user in enumerate(users):
            if user.get("id") != user_id:
                continue
            patch = {k: v for k, v in changes.items() if k != "id"}
            if "username" in patch:
                clean_username = (patch.get("username") or "").strip()
                if not clean_username:
                    raise ValidationError("Kullanıcı adı gerekli")
                self._ensure_username_free(users, clean_username, exclude_id=user_id)
                patch["username"] = clean_username
            if "password" in patch:
                if not patch["password"]:
                    raise ValidationError("Şifre boş olamaz")
                patch["password"] = hash_password(patch["password"])
            updated = {**user, **patch}
            users[index] = updated
            self.store.users.save(users)
            return public_user(updated)
        raise NotFoundError(USER_NOT_FOUND)

    def delete_user(self, user_id: str) -> None:
        users = self.store.users.load()
        remaining = [u for u in users if u.get("id") != user_id]
        if len(remaining) == len(users):
            raise NotFoundError(USER_NOT_FOUND)
        self.store.users.save(remaining)

    def authenticate(self, username: Optional[str], password: Optional[str]) -> dict:
        clean_username = (username or "").strip()
        if not clean_username or not password:
            raise InvalidCredentialsError("Geçersiz kullanıcı adı veya şifre")
        users = self.store.users.load()
        for index, user in enumerate(users):
            if user.get("username") != clean_username:
                continue
            stored = user.get("password")
            if not verify_password(password, stored):
                break
            if not is_hashed(stored):
                users[index] = {**user, "password": hash_password(password)}
                self.store.users.save(users)
            return public_user(users[index])
        raise InvalidCredentialsError("Geçersiz kullanıcı adı veya şifre")
