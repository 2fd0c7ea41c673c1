"""Thumbnail derivation for stored uploads."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from PIL import Image, ImageOps
from starlette.concurrency import run_in_threadpool

from .exceptions import ThumbnailGenerationError
from .models import ResizePolicy, Thumbnail, UploadedAsset

logger = logging.getLogger(__name__)

THUMBNAIL_EXTENSION = ".jpg"


class ImageResizer(Protocol):
    def resize(self, source: Path, target: Path, policy: ResizePolicy) -> None:
        ...


class PillowImageResizer:
    """Fits the image inside the policy box without enlarging and writes a JPEG."""

    def resize(self, source: Path, target: Path, policy: ResizePolicy) -> None:
        with Image.open(source) as image:
            image = ImageOps.exif_transpose(image)
            image.thumbnail((policy.max_width, policy.max_height), Image.Resampling.LANCZOS)
            if image.mode != "RGB":
                image = _flatten(image)
            image.save(target, format="JPEG", quality=policy.quality, optimize=True)


def _flatten(image: Image.Image) -> Image.Image:
    # JPEG has no alpha channel; composite transparent pixels onto white.
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return image.convert("RGB")


def thumbnail_filename(filename: str, suffix: str = "_thumb") -> str:
    return f"{Path(filename).stem}{suffix}{THUMBNAIL_EXTENSION}"


@dataclass(slots=True)
class ThumbnailGenerator:
    resizer: ImageResizer = field(default_factory=PillowImageResizer)
    policy: ResizePolicy = field(default_factory=ResizePolicy)
    suffix: str = "_thumb"

    def target_for(self, asset: UploadedAsset) -> Path:
        return asset.storage_path.parent / thumbnail_filename(asset.filename, self.suffix)

    async def generate(self, asset: UploadedAsset) -> Thumbnail:
        target = self.target_for(asset)
        try:
            await run_in_threadpool(self.resizer.resize, asset.storage_path, target, self.policy)
        except Exception as exc:
            target.unlink(missing_ok=True)
            raise ThumbnailGenerationError() from exc

        logger.info("Generated thumbnail %s for %s", target.name, asset.filename)
        return Thumbnail(filename=target.name, storage_path=target)
