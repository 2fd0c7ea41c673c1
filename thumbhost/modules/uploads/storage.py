"""Persists uploaded image bytes under generated, unique filenames."""

from __future__ import annotations

import logging
import os
import random
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from starlette.datastructures import UploadFile

from .exceptions import FileTooLargeError, InvalidFileTypeError, UploadStorageError
from .models import UploadedAsset

logger = logging.getLogger(__name__)


class UploadStorer(Protocol):
    async def store(self, upload: UploadFile, field: str) -> UploadedAsset:
        ...

    def discard(self, asset: UploadedAsset) -> None:
        ...


def generate_filename(field: str, original_name: str | None) -> str:
    """``<field>-<epoch millis>-<random>.<original extension>``"""
    suffix = Path(os.path.basename(original_name or "")).suffix
    if not suffix[1:].isalnum():
        suffix = ""
    unique = f"{int(time.time() * 1000)}-{random.randrange(1_000_000_000)}"
    return f"{field}-{unique}{suffix}"


@dataclass(slots=True)
class DiskUploadStorer:
    storage_root: Path
    allowed_mime_types: frozenset[str] = field(
        default_factory=lambda: frozenset({"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"})
    )
    max_bytes: int = 5 * 1024 * 1024
    chunk_size: int = 1024 * 1024

    def ensure_storage(self) -> None:
        """Create the storage directory if it does not exist."""
        self.storage_root.mkdir(parents=True, exist_ok=True)

    async def store(self, upload: UploadFile, field: str) -> UploadedAsset:
        mime_type = (upload.content_type or "").lower()
        if mime_type not in self.allowed_mime_types:
            await upload.close()
            raise InvalidFileTypeError()

        self.ensure_storage()
        target_path = self._unique_target(field, upload.filename)
        temp_path = target_path.with_suffix(target_path.suffix + ".upload")

        total_size = 0
        try:
            with temp_path.open("wb") as buffer:
                while True:
                    chunk = await upload.read(self.chunk_size)
                    if not chunk:
                        break
                    total_size += len(chunk)
                    if total_size > self.max_bytes:
                        raise FileTooLargeError(self.max_bytes // (1024 * 1024))
                    buffer.write(chunk)
            temp_path.replace(target_path)
        except FileTooLargeError:
            temp_path.unlink(missing_ok=True)
            raise
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise UploadStorageError() from exc
        finally:
            await upload.close()

        logger.info("Stored upload %s (%d bytes, %s)", target_path.name, total_size, mime_type)
        return UploadedAsset(
            filename=target_path.name,
            original_name=upload.filename or target_path.name,
            mime_type=mime_type,
            size_bytes=total_size,
            storage_path=target_path,
        )

    def discard(self, asset: UploadedAsset) -> None:
        asset.storage_path.unlink(missing_ok=True)
        logger.info("Discarded stored upload %s", asset.filename)

    def _unique_target(self, field: str, original_name: str | None) -> Path:
        while True:
            candidate = self.storage_root / generate_filename(field, original_name)
            if not candidate.exists():
                return candidate
