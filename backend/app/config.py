"""
Application configuration using Pydantic settings.

Re-exports the unified tracker.config module so backend code can keep
importing settings relative to the app package:
    from .config import get_settings
"""

from tracker.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
