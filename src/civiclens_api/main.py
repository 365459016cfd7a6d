"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from civiclens_api import __version__
from civiclens_api.core.config import get_settings
from civiclens_api.core.database import dispose_engine, init_engine
from civiclens_api.core.errors import ERROR_STATUS_CODES
from civiclens_api.core.logging import setup_logging

INTERNAL_ERROR_DETAIL = "Internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Configure logging and the database engine for the life of the process."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)
    init_engine(settings.database_url, schema=settings.database_schema)
    logger.info(f"CivicLens API {__version__} starting ({settings.environment})")
    yield
    await dispose_engine()


def _status_for(exc: Exception) -> int:
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 400


async def _domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=_status_for(exc), content={"detail": str(exc)})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": INTERNAL_ERROR_DETAIL})


def register_error_handlers(app: FastAPI) -> None:
    """Map domain errors to their status codes, other ``ValueError``s to 400, and anything else to 500."""
    for error_type in ERROR_STATUS_CODES:
        app.add_exception_handler(error_type, _domain_error_handler)
    app.add_exception_handler(ValueError, _domain_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)


def create_app() -> FastAPI:
    """Build the application: error handlers, middleware, and the versioned router."""
    from civiclens_api.api.router import create_router, setup_middleware

    settings = get_settings()
    app = FastAPI(
        title="CivicLens API",
        description="Citizen ratings and discussion of elected representatives",
        version=__version__,
        lifespan=lifespan,
    )
    register_error_handlers(app)
    setup_middleware(app, settings)
    app.include_router(create_router(settings))
    return app
