"""
Catalog Service - merges the identity's repository listings into one catalog.

Two listings are combined:
1. Repositories the identity owns or collaborates on
2. Every repository of the configured organization

The merged catalog is memoized in-process until ``invalidate()``.
"""

import asyncio
from typing import Iterable, List, Optional

from tracker.api.github_api import org_repos_path, user_repos_path
from tracker.api.pagination import fetch_all_pages
from tracker.api.parsers import parse_repositories
from tracker.constants import LISTING_PAGE_SIZE, MAX_LISTING_PAGES, REPO_KEY_SEPARATOR
from tracker.exceptions import RepositoryNotFoundError
from tracker.logging import get_logger
from tracker.models import Repository

logger = get_logger("catalog.service")


def merge_listings(*listings: Iterable[Repository]) -> List[Repository]:
    """
    Concatenate listings in order and drop repeated ``full_name`` entries.

    The first occurrence wins, so earlier listings take precedence.
    """
    seen = set()
    merged = []
    for listing in listings:
        for repo in listing:
            if repo.full_name in seen:
                continue
            seen.add(repo.full_name)
            merged.append(repo)
    return merged


def is_candidate(repo: Repository) -> bool:
    """Empty repositories and entries without a name or owner are not enriched."""
    return repo.size > 0 and bool(repo.name) and bool(repo.owner_login)


class CatalogService:
    """
    Builds and memoizes the merged repository catalog.

    Usage:
        catalog = CatalogService(client, org="my-org")
        repos = await catalog.list_catalog()
        repo = await catalog.find("my-org/api")
    """

    def __init__(
        self,
        client,
        org: str = "",
        page_size: int = LISTING_PAGE_SIZE,
        max_pages: int = MAX_LISTING_PAGES,
    ):
        self.client = client
        self.org = org
        self.page_size = page_size
        self.max_pages = max_pages
        self._memo: Optional[List[Repository]] = None
        self._lock = asyncio.Lock()

    async def _listing(self, label: str, path: str, params: dict) -> List[Repository]:
        walk = await fetch_all_pages(
            self.client, path, params, page_size=self.page_size, max_pages=self.max_pages
        )
        if walk.failed:
            logger.warning("listing_failed", listing=label, status=walk.status)
            return []
        repos = parse_repositories(walk.items)
        logger.info("listing_fetched", listing=label, repos=len(repos), pages=walk.pages)
        return repos

    async def _direct_listing(self) -> List[Repository]:
        return await self._listing(
            "direct", user_repos_path(), {"affiliation": "owner,collaborator"}
        )

    async def _org_listing(self) -> List[Repository]:
        if not self.org:
            return []
        return await self._listing("organization", org_repos_path(self.org), {"type": "all"})

    async def list_catalog(self) -> List[Repository]:
        """Get the merged catalog, building it on first use."""
        if self._memo is not None:
            return self._memo

        async with self._lock:
            if self._memo is None:
                direct, organization = await asyncio.gather(
                    self._direct_listing(), self._org_listing()
                )
                self._memo = merge_listings(direct, organization)
                logger.info(
                    "catalog_built",
                    repos=len(self._memo),
                    direct=len(direct),
                    organization=len(organization),
                )
            return self._memo

    def invalidate(self) -> None:
        self._memo = None

    async def refresh_catalog(self) -> List[Repository]:
        self.invalidate()
        return await self.list_catalog()

    async def candidates(self) -> List[Repository]:
        """Catalog entries worth enriching."""
        return [repo for repo in await self.list_catalog() if is_candidate(repo)]

    async def find(self, repo_key: str) -> Repository:
        """
        Resolve a repository key against the catalog.

        Accepts ``owner/name``, ``owner__name`` or a bare ``name``; a bare
        name resolves to the first catalog entry carrying it.

        Raises:
            RepositoryNotFoundError: Nothing in the catalog matches
        """
        repos = await self.list_catalog()
        key = repo_key.strip()

        for matches in (
            lambda r: r.full_name == key,
            lambda r: REPO_KEY_SEPARATOR in key and r.key == key,
            lambda r: r.name == key,
        ):
            for repo in repos:
                if repo.owner_login and matches(repo):
                    return repo

        raise RepositoryNotFoundError(repo_key)
