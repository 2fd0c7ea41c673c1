"""Image upload service with thumbnail generation and cache-aware file serving."""

__version__ = "0.1.0"
