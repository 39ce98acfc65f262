"""
Structured logging for Repo Streak Tracker.

Log output goes to stderr so CLI commands can print JSON on stdout. Console
rendering is used in debug mode or when stderr is a terminal; otherwise every
entry is one JSON object per line.

Usage:
    from tracker.logging import get_logger, LogContext

    logger = get_logger("commit.service")
    with LogContext(repo="octo/hello"):
        logger.info("commits_fetched", commits=120)
"""

import asyncio
import logging
import sys
import time
import uuid
from collections.abc import Callable, MutableMapping
from functools import lru_cache, wraps
from typing import Any, TypeVar

import structlog
from structlog.types import Processor

F = TypeVar("F", bound=Callable[..., Any])

APP_NAME = "repo_tracker"


def _tag_app(logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def _wants_console() -> bool:
    from .config import get_settings

    return get_settings().debug or sys.stderr.isatty()


def build_processors(console: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        _tag_app,
    ]
    if console:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors.extend([structlog.processors.format_exc_info, structlog.processors.JSONRenderer()])
    return processors


@lru_cache(maxsize=1)
def configure_logging(level: str = "INFO") -> None:
    """Configure structlog on top of stdlib logging. Repeated calls are no-ops."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    # aiohttp's access and client loggers are noisy at INFO
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(_wants_console()),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


# =============================================================================
# Context
# =============================================================================


def bind_context(**kwargs: Any) -> None:
    """Attach key/values to every entry logged from the current task."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """
    Bind key/values for the duration of a ``with`` block.

    Keys bound outside the block are left alone.
    """

    def __init__(self, **kwargs: Any):
        self.values = kwargs

    def __enter__(self):
        structlog.contextvars.bind_contextvars(**self.values)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        structlog.contextvars.unbind_contextvars(*self.values)
        return False


# =============================================================================
# Timing
# =============================================================================


def log_timing(operation: str, logger: structlog.stdlib.BoundLogger | None = None) -> Callable[[F], F]:
    """
    Log the duration of every call to the decorated function.

    Works on plain functions and coroutine functions. Failures are logged with
    the exception type and re-raised.
    """

    def decorator(func: F) -> F:
        log = logger or get_logger(func.__module__)

        def finish(start: float, error: Exception | None = None) -> None:
            elapsed = round(time.perf_counter() - start, 3)
            if error is None:
                log.info("operation_complete", operation=operation, duration_seconds=elapsed)
            else:
                log.error(
                    "operation_failed",
                    operation=operation,
                    duration_seconds=elapsed,
                    error=str(error),
                    error_type=type(error).__name__,
                )

        if asyncio.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                start = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    finish(start, e)
                    raise
                finish(start)
                return result

            return async_wrapper  # type: ignore

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                finish(start, e)
                raise
            finish(start)
            return result

        return wrapper  # type: ignore

    return decorator


# =============================================================================
# ASGI request logging
# =============================================================================


class RequestLoggingMiddleware:
    """Logs one entry per HTTP request with status and duration."""

    def __init__(self, app):
        self.app = app
        self.logger = get_logger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # RequestIDMiddleware runs first and leaves the id in scope state
        request_id = scope.get("state", {}).get("request_id") or uuid.uuid4().hex[:8]
        bind_context(request_id=request_id)

        method = scope.get("method", "")
        path = scope.get("path", "")
        status_code = 500
        start = time.perf_counter()

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            if status_code >= 500:
                log = self.logger.error
            elif status_code >= 400:
                log = self.logger.warning
            else:
                log = self.logger.info
            log(
                "request_complete",
                method=method,
                path=path,
                status_code=status_code,
                duration_seconds=round(time.perf_counter() - start, 3),
            )
            clear_context()


class _LazyLogger:
    """Module-level logger resolved on first use, after configure_logging has run."""

    def __init__(self, name: str):
        self._name = name

    def __getattr__(self, attr: str):
        return getattr(get_logger(self._name), attr)


cli_logger = _LazyLogger("cli")


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "LogContext",
    "log_timing",
    "RequestLoggingMiddleware",
    "cli_logger",
]
