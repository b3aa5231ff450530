#!/usr/bin/env python3
"""
Copy collection snapshots between the local cache and the remote store.

Unlike the request path, a remote failure here is fatal: the script exits
with an error instead of falling back to the local copy.

Usage:
  python scripts/sync_snapshots.py          # push local files to the remote store
  python scripts/sync_snapshots.py --pull   # refresh local files from the remote store
"""
from __future__ import annotations

import argparse
import sys

from character_api.core.config import get_settings
from character_api.repositories.json_storage import DataStore, build_data_store
from character_api.repositories.remote_store import RemoteNotFound


def push(store: DataStore) -> list[str]:
    lines = []
    for collection in store.all():
        try:
            content = collection.local.load(collection.path)
        except FileNotFoundError:
            lines.append(f"[skip] {collection.path} (no local file)")
            continue
        sha = None
        try:
            sha = collection.remote.get(collection.path).sha
        except RemoteNotFound:
            pass
        collection.remote.put(collection.path, content, message=collection.commit_message(), sha=sha)
        lines.append(f"[push] {collection.path}")
    return lines


def pull(store: DataStore) -> list[str]:
    lines = []
    for collection in store.all():
        try:
            remote_file = collection.remote.get(collection.path)
        except RemoteNotFound:
            lines.append(f"[skip] {collection.path} (not on remote)")
            continue
        collection.local.save(collection.path, remote_file.content)
        lines.append(f"[pull] {collection.path}")
    return lines


def main() -> None:
    ap = argparse.ArgumentParser(description="Sync JSON snapshots with the remote store")
    ap.add_argument("--pull", action="store_true", help="Load from the remote store into the local cache")
    args = ap.parse_args()

    settings = get_settings()
    if not settings.remote_enabled:
        raise SystemExit("GITHUB_TOKEN, GITHUB_OWNER and GITHUB_REPO must be set")

    store = build_data_store(settings)
    for line in pull(store) if args.pull else push(store):
        print(line)


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
