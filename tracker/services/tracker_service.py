"""
Tracker Service - the operations served to the UI layer.

Orchestrates catalog listing, enrichment, commit retrieval and the cache:
    catalog -> filter -> enrich (contributors, commits, streak) -> cache
"""

import asyncio
from pathlib import Path
from typing import List, Optional

from tracker.cache import FileCacheStore
from tracker.config import Settings
from tracker.constants import AVATAR_URL_TEMPLATE, DEFAULT_AVATAR_URL
from tracker.logging import get_logger
from tracker.models import CommitRecord, Profile, Repository, StreakReport
from tracker.streaks import compute_heatmap, compute_streak

from .catalog_service import CatalogService
from .commit_service import CommitService
from .enrichment_service import EnrichmentService

logger = get_logger("tracker.service")


class TrackerService:
    """
    Served catalog operations.

    Catalog builds (first request without a cached catalog, and every refresh)
    run one at a time so two refreshes never interleave writes to the catalog
    document.
    """

    def __init__(
        self,
        catalog: CatalogService,
        commits: CommitService,
        enrichment: EnrichmentService,
        store: FileCacheStore,
        identity: str = "",
    ):
        self.catalog = catalog
        self.commits = commits
        self.enrichment = enrichment
        self.store = store
        self.identity = identity
        self._build_lock = asyncio.Lock()

    async def _build(self) -> List[Repository]:
        candidates = await self.catalog.candidates()
        enriched = await self.enrichment.enrich(candidates)
        if not await self.store.save_catalog(enriched):
            logger.error("catalog_not_persisted", repos=len(enriched))
        return enriched

    async def get_catalog(self) -> List[Repository]:
        """Get the cached enriched catalog, building it when nothing is cached."""
        cached = await self.store.load_catalog()
        if cached is not None:
            return cached

        async with self._build_lock:
            cached = await self.store.load_catalog()
            if cached is not None:
                return cached
            logger.info("catalog_cache_miss")
            return await self._build()

    async def refresh_catalog(self) -> List[Repository]:
        """Rebuild the catalog from GitHub and overwrite the cache."""
        async with self._build_lock:
            self.catalog.invalidate()
            return await self._build()

    async def get_commits(self, repo_key: str) -> List[CommitRecord]:
        """
        Raises:
            RepositoryNotFoundError: ``repo_key`` matches no cataloged repository
        """
        repo = await self.catalog.find(repo_key)
        return await self.commits.get_commits(repo.owner_login, repo.name)

    async def get_streak(self, repo_key: str) -> StreakReport:
        """Recompute streak statistics for one repository from its commits."""
        repo = await self.catalog.find(repo_key)
        commits = await self.commits.get_commits(repo.owner_login, repo.name)
        stats = compute_streak(commit.authored_at for commit in commits)
        return StreakReport(
            owner=repo.owner_login,
            repo=repo.name,
            full_name=repo.full_name,
            **stats.model_dump(),
        )

    async def get_profile(self) -> Profile:
        """
        Identity summary with a heatmap over every cached commit.

        Reads commit documents directly rather than the streak snapshots in
        the catalog, so a stale catalog does not skew the heatmap.
        """
        repos = await self.store.load_catalog() or []

        all_commits: List[CommitRecord] = []
        for repo in repos:
            if not repo.owner_login or not repo.name:
                continue
            all_commits.extend(await self.store.load_commits(repo.owner_login, repo.name) or [])

        heatmap = compute_heatmap(all_commits)
        avatar_url = (
            AVATAR_URL_TEMPLATE.format(login=self.identity) if self.identity else DEFAULT_AVATAR_URL
        )
        return Profile(
            username=self.identity or "unknown",
            avatar_url=avatar_url,
            total_commits=sum(entry.count for entry in heatmap),
            repos=len(repos),
            heatmap=heatmap,
        )


def build_tracker_service(
    settings: Settings,
    client,
    store: Optional[FileCacheStore] = None,
) -> TrackerService:
    """Wire a TrackerService from settings around an open GitHub client."""
    store = store or FileCacheStore(Path(settings.storage_dir))
    catalog = CatalogService(
        client,
        org=settings.github_org,
        max_pages=settings.max_listing_pages,
    )
    commits = CommitService(
        client,
        store,
        page_size=settings.commits_page_size,
        max_pages=settings.max_commit_pages,
    )
    enrichment = EnrichmentService(
        client,
        commits,
        identity=settings.github_user,
        concurrency=settings.enrichment_concurrency,
    )
    return TrackerService(catalog, commits, enrichment, store, identity=settings.github_user)
