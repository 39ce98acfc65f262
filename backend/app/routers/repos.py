"""
Repository endpoints.

``repo_key`` accepts ``owner/name`` (the path converter keeps the slash),
``owner__name`` or a bare repository name.
"""

from fastapi import APIRouter, Depends

from tracker.logging import get_logger
from tracker.models import CommitRecord, Repository, StreakReport
from tracker.services import TrackerService

from ..dependencies import get_tracker_service
from ..schemas import ErrorResponse

logger = get_logger("repos")

router = APIRouter(tags=["repos"])

_NOT_FOUND = {404: {"model": ErrorResponse}}
_UPSTREAM = {502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}


@router.get("/repos", response_model=list[Repository], responses=_UPSTREAM)
async def list_repos(service: TrackerService = Depends(get_tracker_service)):
    """Enriched repository catalog, served from cache when present."""
    return await service.get_catalog()


@router.get("/repos/refresh", response_model=list[Repository], responses=_UPSTREAM)
async def refresh_repos(service: TrackerService = Depends(get_tracker_service)):
    """Rebuild the catalog from GitHub and overwrite the cached copy."""
    repos = await service.refresh_catalog()
    logger.info("catalog_refreshed", repos=len(repos))
    return repos


@router.get("/commits/{repo_key:path}", response_model=list[CommitRecord], responses=_NOT_FOUND)
async def get_commits(repo_key: str, service: TrackerService = Depends(get_tracker_service)):
    return await service.get_commits(repo_key)


@router.get("/streak/{repo_key:path}", response_model=StreakReport, responses=_NOT_FOUND)
async def get_streak(repo_key: str, service: TrackerService = Depends(get_tracker_service)):
    return await service.get_streak(repo_key)
