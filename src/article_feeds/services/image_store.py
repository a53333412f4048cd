"""Storage backends for article images.

The store is created once at application start-up and handed to request
handlers through dependency injection; the reaction and feed engine never
touch it.
"""
from __future__ import annotations

import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from article_feeds.core.settings import Settings
from article_feeds.services.errors import ValidationFailed

logger = logging.getLogger(__name__)

IMAGE_FOLDER = "articles"


@dataclass(frozen=True)
class UploadedImage:
    """Raw image bytes received from a client upload."""

    filename: str
    content_type: str
    data: bytes


class ImageStore(Protocol):
    """Persist uploaded images and hand back a public URL."""

    def save(self, image: UploadedImage) -> str: ...

    def delete(self, url: str) -> None: ...


def validate_image(image: UploadedImage, *, max_bytes: int) -> None:
    """Reject non-image uploads and files larger than `max_bytes`."""
    if not image.content_type.startswith("image/"):
        raise ValidationFailed("Only image files are allowed.")
    if len(image.data) > max_bytes:
        raise ValidationFailed(f"Image exceeds the {max_bytes} byte limit.")


class LocalImageStore:
    """Image store that writes files beneath a media root on local disk."""

    def __init__(self, root: str | Path, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> LocalImageStore:
        return cls(settings.media_root, settings.media_url)

    def _extension(self, image: UploadedImage) -> str:
        suffix = Path(image.filename).suffix.lower()
        if suffix:
            return suffix
        return mimetypes.guess_extension(image.content_type) or ""

    def save(self, image: UploadedImage) -> str:
        folder = self.root / IMAGE_FOLDER
        folder.mkdir(parents=True, exist_ok=True)
        name = f"{uuid.uuid4().hex}{self._extension(image)}"
        (folder / name).write_bytes(image.data)
        logger.info("Stored image %s (%d bytes)", name, len(image.data))
        return f"{self.base_url}/{IMAGE_FOLDER}/{name}"

    def delete(self, url: str) -> None:
        prefix = f"{self.base_url}/{IMAGE_FOLDER}/"
        if not url.startswith(prefix):
            logger.warning("Refusing to delete image outside the media root: %s", url)
            return
        path = self.root / IMAGE_FOLDER / Path(url[len(prefix):]).name
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Image %s already removed", path.name)
            return
        logger.info("Deleted image %s", path.name)
