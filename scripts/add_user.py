#!/usr/bin/env python3
"""
Create a user in data/users.json (and mirror it to the remote store when
GITHUB_TOKEN is configured).

Usage:
  python scripts/add_user.py --username admin [--password secret] [--role admin] [--project proje-...]
"""
from __future__ import annotations

import argparse
import secrets
import sys

from character_api.core.config import get_settings
from character_api.core.errors import ApiError
from character_api.repositories.json_storage import build_data_store
from character_api.services.user_service import UserService


def gen_password(length: int = 16) -> str:
    return secrets.token_urlsafe(length)[:length]


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a user")
    ap.add_argument("--username", required=True, help="Unique username")
    ap.add_argument("--password", help="Password (default: random 16 chars)")
    ap.add_argument("--role", default="user", help="Role (default: user)")
    ap.add_argument("--project", action="append", default=[], help="Project id the user can access (repeatable)")
    args = ap.parse_args()

    service = UserService(build_data_store(get_settings()))
    password = (args.password or "").strip() or gen_password()
    try:
        user = service.create_user(args.username, password, args.role, args.project)
    except ApiError as exc:
        raise SystemExit(exc.message)

    print("OK: user created")
    print(f"  ID: {user['id']}")
    print(f"  Username: {user['username']}")
    print(f"  Role: {user['role']}")
    if not args.password:
        print(f"  Password: {password}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
