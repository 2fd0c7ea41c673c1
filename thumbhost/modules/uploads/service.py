"""Upload pipeline: select the file part, store it, derive its thumbnail."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from starlette.datastructures import FormData

from thumbhost.core.config import Settings

from .exceptions import ThumbnailGenerationError
from .models import ResizePolicy, UploadResult
from .storage import DiskUploadStorer, UploadStorer
from .thumbnails import ThumbnailGenerator
from .validation import select_upload

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UploadService:
    storer: UploadStorer
    generator: ThumbnailGenerator
    field: str = "image"
    keep_original_on_failure: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadService":
        storer = DiskUploadStorer(
            storage_root=settings.upload_dir,
            allowed_mime_types=frozenset(t.lower() for t in settings.storage.allowed_mime_types),
            max_bytes=settings.storage.max_upload_bytes,
            chunk_size=settings.storage.chunk_size,
        )
        generator = ThumbnailGenerator(
            policy=ResizePolicy(
                max_width=settings.thumbnails.max_width,
                max_height=settings.thumbnails.max_height,
                quality=settings.thumbnails.quality,
            ),
            suffix=settings.thumbnails.suffix,
        )
        return cls(
            storer=storer,
            generator=generator,
            field=settings.storage.upload_field,
            keep_original_on_failure=settings.thumbnails.keep_original_on_failure,
        )

    async def handle(self, form: FormData) -> UploadResult:
        upload = select_upload(form, self.field)
        asset = await self.storer.store(upload, self.field)

        try:
            thumbnail = await self.generator.generate(asset)
        except ThumbnailGenerationError:
            if self.keep_original_on_failure:
                logger.warning("Thumbnail failed for %s; keeping original", asset.filename)
            else:
                self.storer.discard(asset)
            raise

        return UploadResult(asset=asset, thumbnail=thumbnail)
