"""
Repo Streak Tracker Core Library.

Aggregates one developer's commit activity across owned, collaborated and
organization repositories into streak statistics and a daily heatmap, with an
on-disk cache in front of the GitHub REST API.

Usage:
    # Config
    from tracker.config import get_settings, Settings

    # Logging
    from tracker.logging import get_logger, configure_logging

    # Services
    from tracker.services import build_tracker_service

Users should import directly from submodules to avoid pulling aiohttp in at
import time.
"""

__version__ = "1.0.0"
