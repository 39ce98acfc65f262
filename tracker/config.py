"""
Application configuration using Pydantic settings.

Usage:
    from tracker.config import get_settings
    settings = get_settings()

For constants, import from tracker.constants:
    from tracker.constants import COMMITS_PAGE_SIZE, CATALOG_FILE
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tracker.constants import (
    COMMITS_PAGE_SIZE,
    DEFAULT_ENRICHMENT_CONCURRENCY,
    DEFAULT_MAX_CONCURRENT_REQUESTS,
    DEFAULT_ORG,
    DEFAULT_STORAGE_DIR,
    GITHUB_API_BASE,
    MAX_COMMIT_PAGES,
    MAX_LISTING_PAGES,
)


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    Required for live fetching:
        - GITHUB_TOKEN (static credential for the GitHub REST API)
        - GITHUB_USER (the identity whose activity is tracked)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "Repo Streak Tracker"
    api_prefix: str = Field(default="", validation_alias="API_PREFIX")
    debug: bool = Field(default=False, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # GitHub
    github_token: Optional[str] = Field(default=None, validation_alias="GITHUB_TOKEN")
    github_user: str = Field(default="", validation_alias="GITHUB_USER")
    github_org: str = Field(default=DEFAULT_ORG, validation_alias="GITHUB_ORG")
    github_api_base: str = Field(default=GITHUB_API_BASE, validation_alias="GITHUB_API_BASE")
    request_timeout: int = Field(default=30, ge=1, validation_alias="GITHUB_REQUEST_TIMEOUT")
    max_concurrent_requests: int = Field(
        default=DEFAULT_MAX_CONCURRENT_REQUESTS, ge=1, validation_alias="GITHUB_MAX_CONCURRENT"
    )

    # Pipeline
    enrichment_concurrency: int = Field(
        default=DEFAULT_ENRICHMENT_CONCURRENCY, ge=1, validation_alias="ENRICHMENT_CONCURRENCY"
    )
    commits_page_size: int = Field(default=COMMITS_PAGE_SIZE, ge=1, le=100, validation_alias="COMMITS_PAGE_SIZE")
    max_commit_pages: int = Field(default=MAX_COMMIT_PAGES, ge=1, validation_alias="MAX_COMMIT_PAGES")
    max_listing_pages: int = Field(default=MAX_LISTING_PAGES, ge=1, validation_alias="MAX_LISTING_PAGES")

    # Storage
    storage_dir: str = Field(default=DEFAULT_STORAGE_DIR, validation_alias="STORAGE_DIR")

    # CORS
    cors_allowed_origins: str = Field(default="*", validation_alias="CORS_ALLOWED_ORIGINS")

    @field_validator("github_user", "github_org")
    @classmethod
    def strip_login(cls, v: str) -> str:
        """Logins are compared case-insensitively later; only trim here."""
        return v.strip()

    @field_validator("github_api_base")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def validate_runtime_config(self) -> tuple[List[str], List[str]]:
        """
        Validate configuration for live GitHub access.

        Returns:
            Tuple of (errors, warnings) - errors block live fetching, warnings are advisory
        """
        errors = []
        warnings = []

        if not self.github_token:
            errors.append("GITHUB_TOKEN is required for GitHub API access")
        if not self.github_user:
            errors.append("GITHUB_USER is required to compute ownership and contribution flags")
        if not self.github_org:
            warnings.append("GITHUB_ORG not set - only directly affiliated repositories are listed")

        return errors, warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
