"""Routes for uploading images and serving stored files.

The same router is mounted under both ``/upload`` and ``/files`` so that
``POST /api/upload`` and ``GET /api/files/{filename}`` work side by side with
their aliases.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import FileResponse

from thumbhost.api.deps import get_app_settings, get_file_server, get_upload_service
from thumbhost.core.config import Settings
from thumbhost.core.errors import utc_timestamp
from thumbhost.modules.files import FileServer, is_not_modified
from thumbhost.modules.uploads import UploadResult, UploadService
from thumbhost.schemas import ErrorResponse, UploadData, UploadResponse

router = APIRouter(tags=["uploads"])

UPLOAD_SUCCESS_MESSAGE = "画像が正常にアップロードされました。"


def public_url(settings: Settings, filename: str) -> str:
    return f"{settings.public_files_prefix.rstrip('/')}/{filename}"


def _result_to_response(settings: Settings, result: UploadResult) -> UploadResponse:
    asset = result.asset
    thumbnail_url = public_url(settings, result.thumbnail.filename)
    return UploadResponse(
        data=UploadData(
            filename=asset.filename,
            original_name=asset.original_name,
            mimetype=asset.mime_type,
            size=asset.size_bytes,
            url=public_url(settings, asset.filename),
            thumbnail=thumbnail_url,
            thumbnail_url=thumbnail_url,
        ),
        message=UPLOAD_SUCCESS_MESSAGE,
        timestamp=utc_timestamp(),
    )


@router.post(
    "",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an image and generate its thumbnail",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_image(
    request: Request,
    service: UploadService = Depends(get_upload_service),
    settings: Settings = Depends(get_app_settings),
) -> UploadResponse:
    form = await request.form()
    try:
        result = await service.handle(form)
    finally:
        await form.close()
    return _result_to_response(settings, result)


@router.get(
    "/{filename:path}",
    summary="Serve a stored image with conditional GET support",
    response_class=FileResponse,
    responses={304: {"description": "Not modified"}, 404: {"model": ErrorResponse}},
)
async def serve_file(
    filename: str,
    request: Request,
    server: FileServer = Depends(get_file_server),
    settings: Settings = Depends(get_app_settings),
):
    stored = server.lookup(filename)
    headers = {
        "ETag": stored.validator.etag,
        "Last-Modified": stored.validator.last_modified,
        "Cache-Control": settings.http.cache_control,
    }
    if is_not_modified(request.headers.get("if-none-match"), stored.validator):
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers=headers)

    return FileResponse(
        path=stored.path,
        media_type=stored.media_type,
        headers=headers,
        stat_result=stored.stat_result,
    )
