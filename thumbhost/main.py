import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from thumbhost import __version__
from thumbhost.api import create_api_router
from thumbhost.api.routers import health as health_router
from thumbhost.core.config import Settings, get_settings
from thumbhost.core.errors import register_exception_handlers
from thumbhost.core.logger import RequestLoggingMiddleware, configure_logging
from thumbhost.schemas import ApiIndexResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Uploads directory: %s", settings.upload_dir)
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        description="Image upload service with thumbnails and cache-aware file serving",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.http.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router.router)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get(settings.api_prefix, response_model=ApiIndexResponse)
    async def api_index() -> ApiIndexResponse:
        return ApiIndexResponse(
            message=f"{settings.project_name} API",
            version=__version__,
            endpoints={
                "health": "/health",
                "upload": f"{settings.api_prefix}/upload",
                "files": f"{settings.public_files_prefix}/{{filename}}",
            },
        )

    return app


app = create_app()
