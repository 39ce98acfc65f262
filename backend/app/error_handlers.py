"""
Custom exception handlers for FastAPI.

Maps the tracker error taxonomy onto HTTP statuses:
- RepositoryNotFoundError -> 404
- TransportError (GitHub unreachable) -> 502
- ConfigurationError -> 503
- anything else -> 500, raw message only in debug mode
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException
import structlog

from tracker.exceptions import ConfigurationError, RepositoryNotFoundError, TransportError
from tracker.logging import get_logger

logger = get_logger("backend.errors")


def _get_request_id() -> str:
    """Current request ID from the logging context, for server-side logs only."""
    return structlog.contextvars.get_contextvars().get("request_id", "-")


def _response_payload(detail: str, status_code: int) -> dict:
    return {
        "detail": detail,
        "status_code": status_code,
    }


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail), exc.status_code),
        )

    @app.exception_handler(RepositoryNotFoundError)
    async def not_found_handler(request: Request, exc: RepositoryNotFoundError):
        logger.info("repository_not_found", repo_key=exc.repo_key, request_id=_get_request_id())
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_response_payload("Repo not found", status.HTTP_404_NOT_FOUND),
        )

    @app.exception_handler(TransportError)
    async def transport_error_handler(request: Request, exc: TransportError):
        logger.error(
            "github_unreachable",
            error=str(exc),
            url=exc.url,
            request_id=_get_request_id(),
        )
        detail = str(exc) if debug else "GitHub API unreachable"
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=_response_payload(detail, status.HTTP_502_BAD_GATEWAY),
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error("configuration_error", error=str(exc), request_id=_get_request_id())
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=_response_payload(str(exc), status.HTTP_503_SERVICE_UNAVAILABLE),
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError):
        logger.warning(
            "validation_error",
            errors=exc.errors(),
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=422,
            content={
                **_response_payload("Validation error", 422),
                "errors": exc.errors(include_url=False, include_context=False),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        detail = str(exc) if debug else "Internal server error"
        return JSONResponse(
            status_code=500,
            content=_response_payload(detail, 500),
        )
