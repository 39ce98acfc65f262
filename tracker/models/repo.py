"""
Repository catalog models.

A Repository starts out bare (as returned by a GitHub listing) and becomes
enriched once contributors, streak statistics and ownership flags are attached.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from tracker.constants import REPO_KEY_SEPARATOR

from .enums import OwnerKind


class RepoOwner(BaseModel):
    login: str
    kind: OwnerKind = OwnerKind.USER


class Contributor(BaseModel):
    login: str
    contributions: int = 0


class StreakStats(BaseModel):
    """Consecutive-day activity derived from a repository's commit dates."""
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    total_commits: int = Field(default=0, ge=0, description="Commit records, not days")
    days_active: int = Field(default=0, ge=0, description="Distinct UTC calendar days")


class Repository(BaseModel):
    """Catalog entry. Identity is ``full_name``."""
    full_name: str = Field(min_length=1)
    name: str = ""
    owner: Optional[RepoOwner] = None
    size: int = 0
    created_at: Optional[datetime] = None
    pushed_at: Optional[datetime] = None
    url: str = ""
    is_fork: bool = False
    contributors: List[Contributor] = Field(default_factory=list)
    streak: StreakStats = Field(default_factory=StreakStats)
    is_owner: bool = False
    is_contributor: bool = False

    @property
    def owner_login(self) -> str:
        return self.owner.login if self.owner else ""

    @property
    def key(self) -> str:
        """Cache key in ``owner__name`` form."""
        return f"{self.owner_login}{REPO_KEY_SEPARATOR}{self.name}"
