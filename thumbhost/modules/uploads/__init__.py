"""Upload domain exports."""

from .models import ResizePolicy, Thumbnail, UploadedAsset, UploadResult
from .service import UploadService
from .storage import DiskUploadStorer, UploadStorer
from .thumbnails import ImageResizer, PillowImageResizer, ThumbnailGenerator, thumbnail_filename
from .validation import select_upload

__all__ = [
    "DiskUploadStorer",
    "ImageResizer",
    "PillowImageResizer",
    "ResizePolicy",
    "Thumbnail",
    "ThumbnailGenerator",
    "UploadResult",
    "UploadService",
    "UploadStorer",
    "UploadedAsset",
    "select_upload",
    "thumbnail_filename",
]
