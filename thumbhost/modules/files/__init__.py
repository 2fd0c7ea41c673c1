"""File serving domain exports."""

from .models import CacheValidator, StoredFile
from .service import FileServer, is_not_modified, media_type_for

__all__ = [
    "CacheValidator",
    "FileServer",
    "StoredFile",
    "is_not_modified",
    "media_type_for",
]
