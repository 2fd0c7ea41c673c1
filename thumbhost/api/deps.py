"""Reusable FastAPI dependencies."""

from fastapi import Depends, Request

from thumbhost.core.config import Settings
from thumbhost.modules.files import FileServer
from thumbhost.modules.uploads import UploadService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upload_service(settings: Settings = Depends(get_app_settings)) -> UploadService:
    return UploadService.from_settings(settings)


def get_file_server(settings: Settings = Depends(get_app_settings)) -> FileServer:
    return FileServer(settings.upload_dir)


__all__ = [
    "get_app_settings",
    "get_file_server",
    "get_upload_service",
]
