from fastapi import APIRouter

from thumbhost.api.routers import health, upload


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(health.router)
    router.include_router(upload.router, prefix="/upload")
    router.include_router(upload.router, prefix="/files")
    return router


__all__ = [
    "create_api_router",
]
