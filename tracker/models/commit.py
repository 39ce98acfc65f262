"""
Commit records as persisted in the per-repository commit cache.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommitRecord(BaseModel):
    """Simplified commit. Immutable once persisted."""
    model_config = ConfigDict(frozen=True)

    sha: str = Field(min_length=1)
    message: str = ""
    author_name: str = ""
    authored_at: datetime = Field(description="Author timestamp; source of truth for day bucketing")
    url: str = ""
