"""Zenith API - student marketplace backend."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from zenith.core.config import settings
from zenith.core.exceptions import ZenithError
from zenith.core.logging import get_logger, log_fail, setup_logging
from zenith.core.rate_limit import limiter
from zenith.api.v1.router import api_router
from zenith.db.init_db import create_tables, init_db
from zenith.db.session import AsyncSessionLocal, engine
from zenith.services.cache_service import cache

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    # Startup
    setup_logging()
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    # Create database tables if in debug mode; production uses alembic
    if settings.DEBUG:
        await create_tables()

    async with AsyncSessionLocal() as session:
        await init_db(session)
        await session.commit()

    await cache.connect()

    yield

    # Shutdown
    logger.info("Shutting down...")
    await cache.disconnect()
    await engine.dispose()


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to JSON responses with their HTTP status."""

    @app.exception_handler(ZenithError)
    async def handle_zenith_error(request: Request, exc: ZenithError):
        if exc.status_code >= 500:
            log_fail(
                logger,
                f"{request.method} {request.url.path} -> {exc.status_code} "
                f"{exc.error_code}: {exc.message} {exc.context}"
            )
        else:
            logger.info(
                f"{request.method} {request.url.path} -> {exc.status_code} "
                f"{exc.error_code}: {exc.message}"
            )
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "error_code": exc.error_code},
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS middleware; credentials are needed for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.API_V1_STR)
    register_exception_handlers(app)

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "zenith.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
