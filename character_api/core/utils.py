"""
Utility helpers shared across services.
"""

from datetime import datetime, timezone
import secrets
import time


def generate_id(resource: str) -> str:
    """
    Build a collection id such as "proje-1718000000000-a1b2c3".
    The prefix is the first five letters of the resource name.
    """
    prefix = (resource or "item")[:5].lower()
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(3)}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
