"""Error taxonomy and the JSON error envelope returned by every endpoint.

Every failure leaves the service as::

    {"error": {"code": ..., "message": ..., "details": ...}, "timestamp": ..., "path": ...}

Client errors (4xx) carry a stable ``code`` and a localized ``message``.
Server errors (5xx) carry a generic message; exception text is only exposed
in ``details`` when the application runs with ``debug`` enabled.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors rendered into the error envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_SERVER_ERROR"
    message: str = "サーバー内部エラーが発生しました。"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        details: Any = None,
    ) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = details
        super().__init__(self.message)


class ValidationError(ApiError):
    """Missing or invalid client input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    message = "バリデーションエラーが発生しました。"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    message = "指定されたリソースが見つかりません。"


class ProcessingError(ApiError):
    """A derived asset could not be produced."""

    code = "PROCESSING_ERROR"
    message = "処理中にエラーが発生しました。"


class InternalError(ApiError):
    """Unexpected I/O failure."""


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def error_body(request: Request, code: str, message: str, details: Any = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error, "timestamp": utc_timestamp(), "path": request.url.path}


def _debug_enabled(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.debug)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed with %s: %s",
            request.method,
            request.url.path,
            exc.code,
            exc,
            exc_info=exc.__cause__ or exc,
        )
        details = exc.details
        if details is None and _debug_enabled(request) and exc.__cause__ is not None:
            details = str(exc.__cause__)
    else:
        logger.info("%s %s rejected with %s", request.method, request.url.path, exc.code)
        details = exc.details
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.code, exc.message, details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        body = error_body(
            request,
            "ROUTE_NOT_FOUND",
            "指定されたルートが見つかりません。",
            {"path": request.url.path, "method": request.method},
        )
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        body = error_body(
            request,
            "METHOD_NOT_ALLOWED",
            "許可されていないメソッドです。",
            {"path": request.url.path, "method": request.method},
        )
    else:
        body = error_body(request, "HTTP_ERROR", str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(request, ValidationError.code, ValidationError.message, jsonable_errors(exc)),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    details = repr(exc) if _debug_enabled(request) else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(request, ApiError.code, ApiError.message, details),
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(item.get("loc", ())), "msg": item.get("msg", ""), "type": item.get("type", "")}
        for item in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "ApiError",
    "ValidationError",
    "NotFoundError",
    "ProcessingError",
    "InternalError",
    "error_body",
    "register_exception_handlers",
    "utc_timestamp",
]
