# ==============================================================================
# MAIN APPLICATION - FastAPI Entry Point
# ==============================================================================
# Application factory with lifespan events, middleware, and routing
# ==============================================================================

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from crud_template.api import api_router, health_router
from crud_template.core.cache import create_cache
from crud_template.core.exceptions import AppException
from crud_template.core.logger import setup_logging
from crud_template.core.settings import settings
from crud_template.database.mongodb import MongoDB
from crud_template.middleware import RequestContextMiddleware

logger = logging.getLogger(__name__)


# ==============================================================================
# LIFESPAN MANAGEMENT
# ==============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Startup: Connect MongoDB, register the cache
    - Shutdown: Close the MongoDB client
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")

    try:
        await MongoDB.initialize()
    except AppException as e:
        logger.error(f"Failed to initialize database: {e.message}")
        # Development keeps serving; health reports the database down
        if settings.is_production:
            raise

    app.state.cache = create_cache(settings)

    yield

    logger.info("Shutting down application...")
    await app.state.cache.clear()
    await MongoDB.shutdown()
    logger.info("Application shutdown complete")


# ==============================================================================
# APPLICATION FACTORY
# ==============================================================================

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    setup_logging(settings)

    app = FastAPI(
        title=settings.SWAGGER_TITLE,
        description=settings.SWAGGER_DESCRIPTION,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=f"/{settings.SWAGGER_DOCS.strip('/')}",
        redoc_url=None,
    )
    app.state.started_at = time.time()

    if settings.ENABLE_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=settings.ENABLE_CORS_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=settings.cors_allowed_headers or ["*"],
            expose_headers=settings.cors_exposed_headers,
        )

    app.add_middleware(
        RequestContextMiddleware,
        request_id_header=settings.REQUEST_ID_HEADER,
        channel_id_header=settings.CHANNEL_ID_HEADER,
    )

    register_exception_handlers(app)

    app.include_router(api_router)
    app.include_router(health_router)

    return app


# ==============================================================================
# EXCEPTION HANDLERS
# ==============================================================================

def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> JSONResponse:
        """Handle application exceptions."""
        if exc.request_id is None:
            exc.request_id = getattr(request.state, "request_id", None)
        log_level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
        logger.log(
            log_level,
            f"{exc.error_code}: {exc.message}",
            extra={"request_id": exc.request_id},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(include_stack=settings.ENABLE_ERROR_STACK),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", None)
        logger.exception(
            f"Unexpected error: {exc}",
            extra={"request_id": request_id},
        )

        if settings.DEBUG:
            detail = str(exc)
        else:
            detail = "An unexpected error occurred"

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "requestId": request_id,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": detail,
                    "details": {},
                }
            },
        )


# Create application instance
app = create_app()


# ==============================================================================
# DEVELOPMENT RUNNER
# ==============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "crud_template.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.DEBUG,
        log_level=settings.APP_LOG_LEVEL.lower(),
    )
