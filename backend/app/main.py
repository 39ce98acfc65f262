"""
FastAPI application entry point.

Uses structured logging from tracker.logging. One GitHub client session and
one TrackerService live for the whole process and are kept on ``app.state``.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from tracker import __version__
from tracker.api.github_api import GitHubClient
from tracker.cache import FileCacheStore
from tracker.logging import RequestLoggingMiddleware, configure_logging, get_logger
from tracker.services import build_tracker_service

from .config import Settings, get_settings
from .dependencies import get_cache_store
from .error_handlers import register_exception_handlers
from .middleware import RequestIDMiddleware
from .routers import profile as profile_router
from .routers import repos as repos_router
from .schemas import HealthResponse, RootResponse

logger = get_logger("api")


def log_config_status(settings: Settings) -> None:
    """Log configuration problems at startup. Missing credentials are not fatal."""
    errors, warnings = settings.validate_runtime_config()
    for error in errors:
        logger.error("config_error", message=error)
    for warning in warnings:
        logger.warning("config_warning", message=warning)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("app_startup", app_name=settings.app_name, storage_dir=settings.storage_dir)
    log_config_status(settings)

    async with GitHubClient(
        token=settings.github_token,
        base_url=settings.github_api_base,
        timeout=settings.request_timeout,
        max_concurrent=settings.max_concurrent_requests,
    ) as client:
        app.state.tracker = build_tracker_service(settings, client)
        yield
        logger.info("app_shutdown", github_requests=client.request_count)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(level="DEBUG" if settings.debug else settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
    )

    # Read-only API for a local dashboard
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Accept", "Accept-Encoding", "Content-Type", "Origin", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    # Commit lists and catalogs compress well
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Structured request logging, inside the request ID middleware so the id is bound first
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app, debug=settings.debug)

    @app.get("/health", tags=["health"], response_model=HealthResponse)
    def health_check(store: FileCacheStore = Depends(get_cache_store)):
        """Cache directory status plus configuration problems."""
        errors, warnings = settings.validate_runtime_config()
        cache_status = store.health_check()
        return {
            "status": "ok" if cache_status.get("available") else "degraded",
            "cache": cache_status,
            "config_errors": errors,
            "config_warnings": warnings,
        }

    @app.get("/", tags=["health"], response_model=RootResponse)
    def root():
        return {
            "name": settings.app_name,
            "version": __version__,
            "docs": "/docs",
        }

    app.include_router(repos_router.router, prefix=settings.api_prefix)
    app.include_router(profile_router.router, prefix=settings.api_prefix)

    return app


app = create_app()
