"""Local JSON files used as the fast path and offline fallback."""

from __future__ import annotations

from pathlib import Path
import os
import secrets


class LocalFileStore:
    """Reads/writes text files relative to a root directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        return self.root / path

    def load(self, path: str) -> str:
        """Raise FileNotFoundError when the file is absent."""
        with self.resolve(path).open("r", encoding="utf-8") as f:
            return f.read()

    def save(self, path: str, content: str) -> None:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        # plain open() so the snapshot gets the umask-derived mode, not 0600
        tmp_path = target.with_name(f".{target.name}.{secrets.token_hex(4)}.tmp")
        try:
            with tmp_path.open("x", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, target)
        except BaseException:
            if tmp_path.exists():
                tmp_path.unlink()
            raise
