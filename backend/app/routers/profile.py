"""
Profile endpoint.

Summary of the configured identity with a daily commit heatmap built from
the cached commit documents.
"""

from fastapi import APIRouter, Depends

from tracker.models import Profile
from tracker.services import TrackerService

from ..dependencies import get_tracker_service

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=Profile)
async def get_profile(service: TrackerService = Depends(get_tracker_service)):
    return await service.get_profile()
