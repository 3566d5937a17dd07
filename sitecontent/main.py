import logging
import logging.config
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import psycopg2
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from sitecontent.config import ConfigurationError, Settings, load_settings
from sitecontent.db import create_pool
from sitecontent.dependencies import get_repository, limiter
from sitecontent.models.response import HealthResponse
from sitecontent.routers.common import error_response
from sitecontent.routers.content import router as content_router
from sitecontent.routers.schemas import router as schemas_router
from sitecontent.routers.spa import router as spa_router
from sitecontent.services.repository import PostgresPageRepository

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
        }
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load settings and open the pool unless they were injected up front."""
    if app.state.settings is None:
        app.state.settings = load_settings()
        configure_logging(app.state.settings.log_level)

    settings: Settings = app.state.settings
    pool = None
    if app.state.repository is None:
        if not settings.database_url:
            raise ConfigurationError("DATABASE_URL or DATABASE_PUBLIC_URL is required.")
        pool = create_pool(settings.database_url, settings.db_pool_min, settings.db_pool_max)
        app.state.repository = PostgresPageRepository(pool, settings.db_slow_query_ms)

    logger.info("Serving content for tenant %s", settings.tenant_id)
    try:
        yield
    finally:
        if pool is not None:
            pool.closeall()
            logger.info("Database pool closed")


def create_app(settings: Optional[Settings] = None, repository=None) -> FastAPI:
    app = FastAPI(
        title="sitecontent – Tenant Page Content API",
        description="Serves CMS-authored page layouts and metadata for one tenant.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.repository = repository

    # Rate-limiting state
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception for %s", request.url)
        return error_response(500, "Internal server error", details=str(exc))

    @app.get("/health", response_model=HealthResponse, summary="Health check")
    def health(repository=Depends(get_repository)) -> HealthResponse | JSONResponse:
        try:
            repository.ping()
        except psycopg2.Error as exc:
            logger.error("Health check failed to reach the database: %s", exc)
            body = HealthResponse(
                status="degraded",
                timestamp=datetime.now(timezone.utc),
                database="unavailable",
            )
            return JSONResponse(status_code=503, content=body.model_dump(mode="json"))
        return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc), database="ok")

    app.include_router(content_router)
    app.include_router(schemas_router)
    # Catch-all, must stay last.
    app.include_router(spa_router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: load settings and serve on the configured port."""
    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
