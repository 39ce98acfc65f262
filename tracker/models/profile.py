"""
Aggregate views served to the UI layer.
"""

from datetime import date
from typing import List

from pydantic import BaseModel, Field

from .repo import StreakStats


class HeatmapEntry(BaseModel):
    """Commit count for one UTC calendar day across the whole catalog."""
    date: date
    count: int = Field(ge=0)


class StreakReport(StreakStats):
    """Streak statistics for a single repository, recomputed on request."""
    owner: str
    repo: str
    full_name: str


class Profile(BaseModel):
    username: str
    avatar_url: str
    total_commits: int = 0
    repos: int = 0
    heatmap: List[HeatmapEntry] = Field(default_factory=list)
