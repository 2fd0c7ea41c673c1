"""Domain models for uploaded images and their thumbnails."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class UploadedAsset:
    filename: str
    original_name: str
    mime_type: str
    size_bytes: int
    storage_path: Path


@dataclass(frozen=True, slots=True)
class Thumbnail:
    filename: str
    storage_path: Path


@dataclass(frozen=True, slots=True)
class ResizePolicy:
    """Bounding box and JPEG quality used when deriving thumbnails."""

    max_width: int = 300
    max_height: int = 300
    quality: int = 80


@dataclass(frozen=True, slots=True)
class UploadResult:
    asset: UploadedAsset
    thumbnail: Thumbnail
