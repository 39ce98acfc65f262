"""
Async GitHub REST client.

Features:
- Async HTTP with aiohttp
- Bearer token authentication
- Uniform RemoteResult for every response, success or not
- Concurrency ceiling on in-flight requests
- Rate limit tracking (observed, never waited on)
"""

import asyncio
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp

from tracker.constants import (
    DEFAULT_MAX_CONCURRENT_REQUESTS,
    GITHUB_ACCEPT,
    GITHUB_API_BASE,
    GITHUB_API_VERSION,
    RATE_LIMIT_WARN_THRESHOLD,
    USER_AGENT,
)
from tracker.exceptions import TransportError
from tracker.logging import get_logger

logger = get_logger("github")


@dataclass(frozen=True)
class RemoteResult:
    """Outcome of one GitHub request. ``ok`` is true for any 2xx status."""

    ok: bool
    status: int
    payload: Any = None


class GitHubClient:
    """
    Async GitHub REST client.

    Non-2xx responses come back as ``RemoteResult(ok=False)``; only a missing
    response (connection failure, timeout) raises ``TransportError``. Callers
    decide whether a failed sub-call matters.

    Example:
        async with GitHubClient(token) as client:
            result = await client.request("/user/repos", {"per_page": 100})
            if result.ok:
                print(len(result.payload))
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = GITHUB_API_BASE,
        timeout: int = 30,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT_REQUESTS,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_concurrent = max_concurrent
        self.rate_limit_remaining: Optional[int] = None
        self.rate_limit_reset: Optional[datetime] = None
        self.request_count = 0
        self._session = session
        self._owns_session = session is None
        self._semaphore = asyncio.Semaphore(max_concurrent)

    @property
    def headers(self) -> Dict[str, str]:
        headers = {
            "Accept": GITHUB_ACCEPT,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def __aenter__(self) -> "GitHubClient":
        """Create aiohttp session on context entry."""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def open(self) -> None:
        if self._session is not None:
            return
        connector = aiohttp.TCPConnector(
            limit=self.max_concurrent * 2,
            limit_per_host=self.max_concurrent,
        )
        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )
        self._owns_session = True

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _update_rate_limit(self, headers: Any) -> None:
        remaining = headers.get("X-RateLimit-Remaining")
        reset = headers.get("X-RateLimit-Reset")
        if remaining is not None and str(remaining).isdigit():
            self.rate_limit_remaining = int(remaining)
        if reset is not None and str(reset).isdigit():
            self.rate_limit_reset = datetime.fromtimestamp(int(reset), tz=timezone.utc)

        if self.rate_limit_remaining is not None and self.rate_limit_remaining < RATE_LIMIT_WARN_THRESHOLD:
            logger.warning(
                "rate_limit_low",
                remaining=self.rate_limit_remaining,
                reset_at=self.rate_limit_reset.isoformat() if self.rate_limit_reset else None,
            )

    @staticmethod
    async def _read_payload(response: aiohttp.ClientResponse) -> Any:
        text = await response.text()
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return text

    async def request(self, path: str, params: Optional[Dict[str, Any]] = None) -> RemoteResult:
        """
        GET a GitHub API path.

        Args:
            path: Path relative to the API base (``/user/repos``) or an absolute URL
            params: Query parameters

        Returns:
            RemoteResult with the parsed JSON payload (raw text if not JSON)

        Raises:
            TransportError: No response could be obtained
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context.")

        url = self._url(path)
        query = {key: str(value) for key, value in (params or {}).items()}

        async with self._semaphore:
            try:
                async with self._session.get(url, params=query, headers=self.headers) as response:
                    self.request_count += 1
                    self._update_rate_limit(response.headers)
                    payload = await self._read_payload(response)
                    status = response.status
            except asyncio.TimeoutError as e:
                logger.error("request_timeout", url=url, timeout=self.timeout)
                raise TransportError(f"Timed out after {self.timeout}s requesting {url}", url=url) from e
            except aiohttp.ClientError as e:
                logger.error("request_transport_error", url=url, error=str(e))
                raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        ok = 200 <= status < 300
        if not ok:
            message = payload.get("message") if isinstance(payload, dict) else payload
            logger.warning("github_api_error", status=status, url=url, message=message)
        return RemoteResult(ok=ok, status=status, payload=payload)


# =============================================================================
# Endpoint paths
# =============================================================================


def user_repos_path() -> str:
    """Repositories the authenticated identity owns or collaborates on."""
    return "/user/repos"


def org_repos_path(org: str) -> str:
    return f"/orgs/{quote(org, safe='')}/repos"


def contributors_path(owner: str, name: str) -> str:
    return f"/repos/{quote(owner, safe='')}/{quote(name, safe='')}/contributors"


def commits_path(owner: str, name: str) -> str:
    return f"/repos/{quote(owner, safe='')}/{quote(name, safe='')}/commits"
