"""Exceptions raised by the tracker pipeline."""

from __future__ import annotations


class TrackerError(Exception):
    """Base exception for tracker failures."""


class TransportError(TrackerError):
    """Raised when no HTTP response could be obtained from the GitHub API."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class CacheIOError(TrackerError):
    """Raised when a cache document cannot be read or written."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class RepositoryNotFoundError(TrackerError):
    """Raised when a repository key matches nothing in the catalog."""

    def __init__(self, repo_key: str):
        super().__init__(f"Repository not found: {repo_key}")
        self.repo_key = repo_key


class ConfigurationError(TrackerError):
    """Raised when an operation needs a setting that is not configured."""
