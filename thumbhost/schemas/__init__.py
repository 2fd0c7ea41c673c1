"""Pydantic schemas used across the project."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class UploadData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    original_name: str = Field(..., alias="originalName")
    mimetype: str
    size: int
    url: str
    thumbnail: str
    thumbnail_url: str = Field(..., alias="thumbnailUrl")


class UploadResponse(BaseModel):
    data: UploadData
    message: str
    timestamp: str


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
    timestamp: str
    path: str


class StorageHealth(BaseModel):
    path: str
    writable: bool


class HealthResponse(BaseModel):
    status: str
    message: str
    storage: StorageHealth
    timestamp: str


class ApiIndexResponse(BaseModel):
    message: str
    version: str
    endpoints: dict[str, str] = Field(default_factory=dict)
