"""
Pydantic models for the repository catalog, commit cache and served views.

Usage:
    from tracker.models import Repository, CommitRecord, StreakStats
"""

from .commit import CommitRecord
from .enums import OwnerKind
from .profile import HeatmapEntry, Profile, StreakReport
from .repo import Contributor, RepoOwner, Repository, StreakStats

__all__ = [
    "CommitRecord",
    "Contributor",
    "HeatmapEntry",
    "OwnerKind",
    "Profile",
    "RepoOwner",
    "Repository",
    "StreakReport",
    "StreakStats",
]
