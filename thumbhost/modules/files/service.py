"""Resolves stored files and evaluates conditional GET validators."""

from __future__ import annotations

import logging
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import FileNotFoundInStorageError, FileServeError
from .models import CacheValidator, StoredFile

logger = logging.getLogger(__name__)

MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}
DEFAULT_MEDIA_TYPE = "application/octet-stream"


def media_type_for(filename: str) -> str:
    return MEDIA_TYPES.get(Path(filename).suffix.lower(), DEFAULT_MEDIA_TYPE)


def _opaque_tag(tag: str) -> str:
    tag = tag.strip()
    if tag.startswith("W/"):
        tag = tag[2:]
    return tag


def is_not_modified(if_none_match: Optional[str], validator: CacheValidator) -> bool:
    """Weak comparison of ``If-None-Match`` against the current ETag."""
    if not if_none_match:
        return False
    if if_none_match.strip() == "*":
        return True
    current = _opaque_tag(validator.etag)
    return any(_opaque_tag(candidate) == current for candidate in if_none_match.split(","))


@dataclass(slots=True)
class FileServer:
    storage_root: Path

    def resolve(self, filename: str) -> Path:
        """Map ``filename`` to a path that stays inside the storage root."""
        if not filename or "\0" in filename or "/" in filename or "\\" in filename:
            raise FileNotFoundInStorageError(filename)
        root = self.storage_root.resolve()
        candidate = (root / filename).resolve()
        if candidate.parent != root:
            logger.warning("Rejected path outside storage root: %r", filename)
            raise FileNotFoundInStorageError(filename)
        return candidate

    def lookup(self, filename: str) -> StoredFile:
        path = self.resolve(filename)
        # A single stat call answers existence, size and mtime together.
        try:
            stat_result = path.stat()
        except (FileNotFoundError, NotADirectoryError):
            raise FileNotFoundInStorageError(filename) from None
        except OSError as exc:
            raise FileServeError() from exc

        if not stat.S_ISREG(stat_result.st_mode):
            raise FileNotFoundInStorageError(filename)

        return StoredFile(
            path=path,
            media_type=media_type_for(filename),
            stat_result=stat_result,
            validator=CacheValidator.from_stat(stat_result),
        )


__all__ = [
    "DEFAULT_MEDIA_TYPE",
    "FileServer",
    "is_not_modified",
    "media_type_for",
]
