"""
Sequential page walking for GitHub list endpoints.

Page n+1 is only requested once page n's length is known, because the stop
condition depends on it. A page shorter than ``page_size`` is taken to be the
last one; a remote that returns a short page mid-listing would truncate the
result without any error.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tracker.logging import get_logger

logger = get_logger("github.pagination")


@dataclass
class PageWalk:
    """Items gathered by a page walk and how the walk ended."""

    items: List[Any] = field(default_factory=list)
    pages: int = 0
    complete: bool = False
    status: Optional[int] = None

    @property
    def failed(self) -> bool:
        return not self.complete and self.status is not None and not 200 <= self.status < 300


async def fetch_all_pages(
    client,
    path: str,
    params: Optional[Dict[str, Any]] = None,
    page_size: int = 100,
    max_pages: int = 500,
) -> PageWalk:
    """
    Request ``path`` page by page until the listing is exhausted.

    Args:
        client: Object with an async ``request(path, params)`` returning RemoteResult
        path: API path of a list endpoint
        params: Extra query parameters sent with every page
        page_size: ``per_page`` value; a shorter page ends the walk
        max_pages: Hard cap on requests for one walk

    Returns:
        PageWalk. ``complete`` is false when a page failed (``status`` holds the
        failing HTTP status) or when the cap was reached on a full page.
    """
    walk = PageWalk()

    for page in range(1, max_pages + 1):
        query = dict(params or {})
        query.update({"per_page": page_size, "page": page})

        result = await client.request(path, query)
        walk.pages = page
        walk.status = result.status

        if not result.ok:
            logger.warning("page_walk_failed", path=path, page=page, status=result.status)
            return walk

        batch = result.payload if isinstance(result.payload, list) else []
        walk.items.extend(batch)

        if len(batch) < page_size:
            walk.complete = True
            return walk

    logger.warning("page_walk_capped", path=path, max_pages=max_pages, items=len(walk.items))
    return walk
