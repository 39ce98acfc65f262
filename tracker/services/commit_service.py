"""
Commit Service - cache-first retrieval of a repository's full commit history.
"""

from typing import List

from tracker.api.github_api import commits_path
from tracker.api.pagination import fetch_all_pages
from tracker.api.parsers import parse_commits
from tracker.cache import CacheKeys, FileCacheStore, KeyedLock
from tracker.constants import COMMITS_PAGE_SIZE, EMPTY_REPOSITORY_STATUS, MAX_COMMIT_PAGES
from tracker.logging import LogContext, get_logger
from tracker.models import CommitRecord

logger = get_logger("commit.service")


class CommitService:
    """
    Serves commit histories from the cache, fetching each repository once.

    A stored document is returned as-is whatever its age or length. Only a
    complete page walk is persisted, so an interrupted fetch is retried on the
    next access instead of being cached as if it were the whole history.

    Usage:
        commits = CommitService(client, store)
        history = await commits.get_commits("octo", "hello")
    """

    def __init__(
        self,
        client,
        store: FileCacheStore,
        page_size: int = COMMITS_PAGE_SIZE,
        max_pages: int = MAX_COMMIT_PAGES,
    ):
        self.client = client
        self.store = store
        self.page_size = page_size
        self.max_pages = max_pages
        self._locks = KeyedLock()


    async def get_commits(self, owner: str, name: str) -> List[CommitRecord]:
        """
        Get the full commit history of ``owner/name``.

        Raises:
            TransportError: GitHub could not be reached while fetching
        """
        cached = await self.store.load_commits(owner, name)
        if cached is not None:
            return cached

        # Single flight per repository: a second caller waits, then hits the cache
        async with self._locks.hold(CacheKeys.repo_key(owner, name)):
            cached = await self.store.load_commits(owner, name)
            if cached is not None:
                return cached
            return await self._fetch(owner, name)

    async def _fetch(self, owner: str, name: str) -> List[CommitRecord]:
        with LogContext(repo=f"{owner}/{name}"):
            walk = await fetch_all_pages(
                self.client,
                commits_path(owner, name),
                page_size=self.page_size,
                max_pages=self.max_pages,
            )
            commits = parse_commits(walk.items)

            if walk.complete:
                await self.store.save_commits(owner, name, commits)
                logger.info("commits_fetched", commits=len(commits), pages=walk.pages)
            elif walk.status == EMPTY_REPOSITORY_STATUS and not commits:
                await self.store.save_commits(owner, name, [])
                logger.info("commits_repository_empty")
            else:
                logger.warning(
                    "commits_incomplete",
                    commits=len(commits),
                    pages=walk.pages,
                    status=walk.status,
                )
            return commits
