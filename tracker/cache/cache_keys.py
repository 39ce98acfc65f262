"""
Cache document naming.

Centralized document names to:
- Prevent collisions between repositories
- Keep the on-disk layout documented in one place
"""

from tracker.constants import CATALOG_FILE, COMMITS_DIR, REPO_KEY_SEPARATOR


class CacheKeys:
    """
    Centralized cache document names, relative to the storage root.

    Layout:
        - repos.json -> enriched repository catalog
        - commits/octo__hello.json -> commit list of octo/hello
    """

    CATALOG = CATALOG_FILE
    COMMITS_DIR = COMMITS_DIR

    @staticmethod
    def repo_key(owner: str, name: str) -> str:
        """Repository key in ``owner__name`` form."""
        for part in (owner, name):
            if not part or "/" in part or "\\" in part or part in (".", ".."):
                raise ValueError(f"Invalid repository component: {part!r}")
        return f"{owner}{REPO_KEY_SEPARATOR}{name}"

    @staticmethod
    def catalog() -> str:
        return CATALOG_FILE

    @staticmethod
    def commits(owner: str, name: str) -> str:
        """Document holding the full commit list of one repository."""
        return f"{COMMITS_DIR}/{CacheKeys.repo_key(owner, name)}.json"
