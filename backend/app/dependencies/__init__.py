"""
FastAPI dependency injection module.

The TrackerService is built once per process in the application lifespan
and handed to routes from ``app.state``. Tests override
``get_tracker_service`` with a service wired to fakes.
"""

from fastapi import Depends, Request

from tracker.cache import FileCacheStore
from tracker.services import TrackerService


def get_tracker_service(request: Request) -> TrackerService:
    """Get the TrackerService built at startup."""
    return request.app.state.tracker


def get_cache_store(service: TrackerService = Depends(get_tracker_service)) -> FileCacheStore:
    """Get the file cache behind the TrackerService."""
    return service.store


__all__ = [
    "get_tracker_service",
    "get_cache_store",
]
