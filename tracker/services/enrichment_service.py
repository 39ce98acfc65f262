"""
Enrichment Service - attaches contributors, streaks and ownership flags to
bare catalog entries.

Each repository is enriched independently; the number of repositories in
flight at once is bounded so a large catalog cannot flood the GitHub API.
"""

import asyncio
from typing import List, Optional

from tracker.api.github_api import contributors_path
from tracker.api.parsers import parse_contributors
from tracker.constants import DEFAULT_ENRICHMENT_CONCURRENCY
from tracker.exceptions import ConfigurationError, TransportError
from tracker.logging import get_logger, log_timing
from tracker.models import Contributor, Repository
from tracker.streaks import compute_streak

from .commit_service import CommitService

logger = get_logger("enrichment.service")


class EnrichmentService:
    """
    Enriches repositories concurrently under a fixed ceiling.

    Output order follows input order, but nothing downstream relies on it.
    """

    def __init__(
        self,
        client,
        commits: CommitService,
        identity: str,
        concurrency: int = DEFAULT_ENRICHMENT_CONCURRENCY,
    ):
        self.client = client
        self.commits = commits
        self.identity = identity
        self.concurrency = concurrency

    async def fetch_contributors(self, repo: Repository) -> List[Contributor]:
        """Contributors of a repository; a failed lookup yields an empty list."""
        result = await self.client.request(contributors_path(repo.owner_login, repo.name))
        if not result.ok:
            logger.warning("contributors_unavailable", repo=repo.full_name, status=result.status)
            return []
        return parse_contributors(result.payload)

    async def enrich_one(self, repo: Repository) -> Optional[Repository]:
        """
        Enrich a single repository.

        Returns:
            The enriched copy, or None when the contributor lookup got no response

        Raises:
            TransportError: The commit fetch got no response
        """
        try:
            contributors = await self.fetch_contributors(repo)
        except TransportError as e:
            logger.error("repository_dropped", repo=repo.full_name, error=str(e))
            return None

        commits = await self.commits.get_commits(repo.owner_login, repo.name)
        streak = compute_streak(commit.authored_at for commit in commits)

        identity = self.identity.lower()
        return repo.model_copy(
            update={
                "contributors": contributors,
                "streak": streak,
                "is_owner": repo.owner_login.lower() == identity,
                "is_contributor": any(c.login.lower() == identity for c in contributors),
            }
        )

    @log_timing("enrichment")
    async def enrich(self, candidates: List[Repository]) -> List[Repository]:
        """
        Enrich every candidate, at most ``concurrency`` at a time.

        Raises:
            ConfigurationError: No identity configured to compare logins against
        """
        if not self.identity:
            raise ConfigurationError("GITHUB_USER must be set to enrich repositories")

        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(repo: Repository) -> Optional[Repository]:
            async with semaphore:
                return await self.enrich_one(repo)

        tasks = [asyncio.create_task(bounded(repo)) for repo in candidates]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            # One failed leg fails the batch; stop the rest before reporting
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        enriched = [repo for repo in results if repo is not None]

        logger.info(
            "enrichment_complete",
            candidates=len(candidates),
            enriched=len(enriched),
            dropped=len(candidates) - len(enriched),
        )
        return enriched
