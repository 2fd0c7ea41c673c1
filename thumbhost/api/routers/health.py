"""Health check routes."""
from __future__ import annotations

import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from thumbhost.api.deps import get_app_settings
from thumbhost.core.config import Settings
from thumbhost.core.errors import utc_timestamp
from thumbhost.schemas import HealthResponse, StorageHealth

router = APIRouter(tags=["health"])


def _storage_health(settings: Settings) -> StorageHealth:
    path = settings.upload_dir
    writable = path.is_dir() and os.access(path, os.W_OK)
    return StorageHealth(path=str(path), writable=writable)


@router.get("/health", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health(settings: Settings = Depends(get_app_settings)):
    storage = _storage_health(settings)
    if not storage.writable:
        payload = HealthResponse(
            status="ERROR",
            message="サービスが利用できません",
            storage=storage,
            timestamp=utc_timestamp(),
        )
        return JSONResponse(status_code=503, content=payload.model_dump())
    return HealthResponse(
        status="OK",
        message=f"{settings.project_name} が正常に動作しています",
        storage=storage,
        timestamp=utc_timestamp(),
    )
