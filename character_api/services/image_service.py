"""Character image use cases, including display-order maintenance."""

from __future__ import annotations

from typing import Iterable, Optional

from character_api.core.errors import NotFoundError, ValidationError
from character_api.core.utils import generate_id, utc_now_iso
from character_api.repositories.json_storage import DataStore

IMAGE_NOT_FOUND = "Resim bulunamadı"
_PROTECTED_FIELDS = ("id", "characterId", "createdAt")


def normalize_tags(tags: Optional[Iterable]) -> list[str]:
    """Strip, drop empties and keep the first occurrence of each tag."""
    seen: list[str] = []
    for tag in tags or []:
        value = str(tag).strip()
        if value and value not in seen:
            seen.append(value)
    return seen


def display_key(image: dict) -> tuple:
    """Sort key: orderIndex ascending, images without one last, ties by createdAt."""
    order = image.get("orderIndex")
    missing = not isinstance(order, (int, float)) or isinstance(order, bool)
    return (missing, 0 if missing else order, image.get("createdAt") or "")


def sort_images(images: list[dict]) -> list[dict]:
    return sorted(images, key=display_key)


class ImageService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    def list_images(self, character_id: str) -> list[dict]:
        return sort_images(self.store.images.load().get(character_id, []))

    def _locate(self, images: dict, image_id: str) -> tuple[list, int]:
        for bucket in images.values():
            for index, image in enumerate(bucket):
                if image.get("id") == image_id:
                    return bucket, index
        raise NotFoundError(IMAGE_NOT_FOUND)

    def get_image(self, image_id: str) -> dict:
        bucket, index = self._locate(self.store.images.load(), image_id)
        return bucket[index]

    def add_image(self, character_id: str, fields: dict) -> dict:
        url = (fields.get("url") or "").strip()
        title = (fields.get("title") or "").strip()
        if not url:
            raise ValidationError("Resim URL'si gerekli")
        if not title:
            raise ValidationError("Başlık gerekli")
        images = self.store.images.load()
        bucket = images.setdefault(character_id, [])
        image = {
            "id": generate_id("image"),
            "characterId": character_id,
            "url": url,
            "fileName": fields.get("fileName") or "",
            "title": title,
            "description": fields.get("description") or "",
            "positivePrompt": fields.get("positivePrompt"),
            "negativePrompt": fields.get("negativePrompt"),
            "tags": normalize_tags(fields.get("tags")),
            "orderIndex": len(bucket),
            "createdAt": utc_now_iso(),
            "createdByUserId": fields.get("createdByUserId"),
        }
        bucket.append(image)
        self.store.images.save(images)
        return image

    def update_image(self, image_id: str, changes: dict) -> dict:
        if "title" in changes and not (changes.get("title") or "").strip():
            raise ValidationError("Başlık gerekli")
        images = self.store.images.load()
        bucket, index = self._locate(images, image_id)
        patch = {k: v for k, v in changes.items() if k not in _PROTECTED_FIELDS}
        if "tags" in patch:
            patch["tags"] = normalize_tags(patch["tags"])
        updated = {**bucket[index], **patch, "updatedAt": utc_now_iso()}
        bucket[index] = updated
        self.store.images.save(images)
        return updated

    def delete_image(self, image_id: str) -> None:
        images = self.store.images.load()
        bucket, index = self._locate(images, image_id)
        del bucket[index]
        self.store.images.save(images)

    def reorder(self, character_id: str, ordered_ids: list[str]) -> list[dict]:
        """
        Give each listed image its position as orderIndex. Images left out of
        `ordered_ids` follow the listed ones in their previous display order,
        so every orderIndex in the bucket stays unique. Unknown ids are ignored.
        """
        images = self.store.images.load()
        bucket = images.get(character_id, [])
        by_id = {image.get("id"): image for image in bucket}

        listed: list[dict] = []
        listed_ids: set[str] = set()
        for image_id in ordered_ids or []:
            image = by_id.get(image_id)
            if image is not None and image_id not in listed_ids:
                listed.append(image)
                listed_ids.add(image_id)
        omitted = sort_images([image for image in bucket if image.get("id") not in listed_ids])

        reordered = listed + omitted
        for position, image in enumerate(reordered):
            image["orderIndex"] = position
        images[character_id] = reordered
        self.store.images.save(images)
        return reordered
