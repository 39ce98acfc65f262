"""
Pydantic schemas for responses that are not domain models.

Repositories, commits, streak reports and profiles are served as the
models in ``tracker.models`` directly.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    detail: str
    status_code: int


class CacheStatus(BaseModel):
    available: bool
    root: str
    catalog_cached: bool = False
    commit_documents: int = 0
    error: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    cache: CacheStatus
    config_errors: list[str] = Field(default_factory=list)
    config_warnings: list[str] = Field(default_factory=list)


class RootResponse(BaseModel):
    name: str
    version: str
    docs: str
