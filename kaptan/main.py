"""
FastAPI application - Kaptan travel CMS backend
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from kaptan.auth import require_metrics_credentials
from kaptan.config import Settings
from kaptan.config import settings as default_settings
from kaptan.database import Store, get_store
from kaptan.errors import KaptanError, StoreUnavailableError
from kaptan.observability import (
    PROCEDURE_ERRORS,
    MetricsMiddleware,
    configure_logging,
    metrics_response,
)
from kaptan.routers.auth import router as auth_router
from kaptan.routers.blocks import router as blocks_router
from kaptan.routers.caravan_routes import router as caravan_routes_router
from kaptan.routers.categories import router as categories_router
from kaptan.routers.homepage import router as homepage_router
from kaptan.routers.media import router as media_router
from kaptan.routers.pages import router as pages_router
from kaptan.routers.posts import router as posts_router
from kaptan.routers.site_settings import router as site_settings_router
from kaptan.security import limiter
from kaptan.services.storage import StorageBackend, build_storage
from kaptan.upsert import Clock, utcnow

logger = logging.getLogger(__name__)


# ==========================================
# Exception handlers
# ==========================================
async def kaptan_error_handler(request: Request, exc: KaptanError):
    PROCEDURE_ERRORS.labels(exc.code).inc()
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        {"detail": exc.message, "code": exc.code}, status_code=exc.status_code
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    PROCEDURE_ERRORS.labels("RateLimitExceeded").inc()
    return JSONResponse(
        {
            "detail": "Rate limit exceeded. Please retry shortly.",
            "code": "RateLimitExceeded",
        },
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
    )


# ==========================================
# Application factory
# ==========================================
def create_app(
    settings: Settings | None = None,
    *,
    store: Store | None = None,
    storage: StorageBackend | None = None,
    clock: Clock = utcnow,
) -> FastAPI:
    """Build the API.

    ``store`` and ``storage`` default to the configured database and media
    backend; tests pass in-memory replacements and a fixed ``clock``.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store.create_all()
        logger.info("Kaptan API ready (environment=%s)", settings.environment)
        yield
        app.state.store.dispose()
        logger.info("Kaptan API stopped")

    app = FastAPI(
        title="Kaptan CMS",
        description="Content API for the sailing and caravan travel site",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url=None if settings.is_production else "/openapi.json",
    )
    app.state.settings = settings
    app.state.store = store or Store(settings.database_url, echo=settings.db_echo)
    app.state.storage = storage or build_storage(settings)
    app.state.clock = clock
    app.state.limiter = limiter

    app.add_exception_handler(KaptanError, kaptan_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

    # Order: rate-limit/metrics -> CORS -> correlation id (outermost)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(MetricsMiddleware)
    if settings.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            # The session travels as a cookie.
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["Accept", "Content-Type", "X-Request-ID"],
        )
    app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

    @app.get("/healthz", tags=["system"], summary="Health check", response_model=dict)
    def health_check(request: Request) -> dict:
        try:
            get_store(request).ping()
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            raise StoreUnavailableError() from exc
        if settings.is_production:
            return {"status": "healthy"}
        return {"status": "healthy", "database": "connected", "version": app.version}

    @app.get("/metrics", include_in_schema=False)
    def metrics(_: str = Depends(require_metrics_credentials)):
        return metrics_response()

    app.include_router(auth_router)
    app.include_router(homepage_router)
    app.include_router(categories_router)
    app.include_router(posts_router)
    app.include_router(caravan_routes_router)
    app.include_router(pages_router)
    app.include_router(blocks_router)
    app.include_router(site_settings_router)
    app.include_router(media_router)
    return app


configure_logging(
    default_settings.log_level,
    sql_echo=default_settings.db_echo,
    environment=default_settings.environment,
)
app = create_app()
