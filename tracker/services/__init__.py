"""
Core services for catalog building, commit retrieval and enrichment.

Services take their collaborators (GitHub client, cache store) through the
constructor; ``build_tracker_service`` wires them from settings.
"""

from tracker.services.catalog_service import CatalogService, is_candidate, merge_listings
from tracker.services.commit_service import CommitService
from tracker.services.enrichment_service import EnrichmentService
from tracker.services.tracker_service import TrackerService, build_tracker_service

__all__ = [
    "CatalogService",
    "CommitService",
    "EnrichmentService",
    "TrackerService",
    "build_tracker_service",
    "is_candidate",
    "merge_listings",
]
