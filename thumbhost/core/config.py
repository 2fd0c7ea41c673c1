"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class StorageSettings(BaseModel):
    upload_dir: Path = Field(default=Path("uploads"))
    upload_field: str = "image"
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, gt=0)
    chunk_size: int = Field(default=1024 * 1024, gt=0)
    allowed_mime_types: list[str] = Field(
        default_factory=lambda: ["image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"]
    )


class ThumbnailSettings(BaseModel):
    max_width: int = Field(default=300, gt=0)
    max_height: int = Field(default=300, gt=0)
    quality: int = Field(default=80, ge=1, le=95)
    suffix: str = "_thumb"
    keep_original_on_failure: bool = False


class HttpSettings(BaseModel):
    cache_control: str = "public, max-age=31536000"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "thumbhost"
    api_prefix: str = "/api"
    public_files_prefix: str = "/api/files"
    log_level: str = "INFO"

    server: ServerSettings = ServerSettings()
    storage: StorageSettings = StorageSettings()
    thumbnails: ThumbnailSettings = ThumbnailSettings()
    http: HttpSettings = HttpSettings()

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def upload_dir(self) -> Path:
        return self.storage.upload_dir.resolve()

    @property
    def max_upload_megabytes(self) -> int:
        return self.storage.max_upload_bytes // (1024 * 1024)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
