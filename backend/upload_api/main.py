import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from upload_api.api.routers import uploads as uploads_router
from upload_api.core.config import MissingConfigurationError, get_settings
from upload_api.core.errors import (
    UploadError,
    http_exception_handler,
    unhandled_exception_handler,
    upload_error_handler,
)
from upload_api.services.storage import get_storage_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        get_storage_service()
    except MissingConfigurationError as exc:
        # Keep serving; requests answer with a generic configuration error.
        logger.error("Storage is not configured, missing: %s", ", ".join(exc.missing))
    else:
        logger.info("Storage configured")
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        debug=settings.debug,
        title="Upload URL Issuer",
        lifespan=lifespan,
    )

    app.add_exception_handler(UploadError, upload_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(uploads_router.router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "app": settings.app_name}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "upload_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
