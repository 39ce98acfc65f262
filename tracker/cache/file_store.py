"""
File-backed cache store.

Persists two kinds of JSON documents under a storage root:
- the enriched repository catalog (one document)
- per-repository commit lists (one document each)

Existence of a commit document is the only "already fetched" signal: a missing
document means not fetched yet, a document holding ``[]`` means the repository
was fetched and has no commits.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from tracker.exceptions import CacheIOError
from tracker.logging import get_logger
from tracker.models import CommitRecord, Repository

from .cache_keys import CacheKeys
from .keyed_lock import KeyedLock

logger = get_logger("cache")

_catalog_adapter = TypeAdapter(List[Repository])
_commits_adapter = TypeAdapter(List[CommitRecord])


class FileCacheStore:
    """
    JSON document store with atomic writes.

    Features:
    - Writes go to a temporary file and are swapped in with ``os.replace``
    - Writes to the same document are serialized with a per-document lock
    - Read failures degrade to a cache miss, write failures to ``False``

    Usage:
        store = FileCacheStore("storage")
        commits = await store.load_commits("octo", "hello")
        if commits is None:
            ...  # not fetched yet
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        self._locks = KeyedLock()

    def _path(self, key: str) -> Path:
        return self.root / key

    # =========================================================================
    # Raw document I/O (blocking, run in a worker thread)
    # =========================================================================

    @staticmethod
    def _read_document(path: Path) -> Optional[Any]:
        """Return the parsed document, None when it does not exist."""
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return json.load(handle)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CacheIOError(f"Cannot read {path}: {e}", path=str(path)) from e

    @staticmethod
    def _write_document(path: Path, data: Any) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, indent=2, ensure_ascii=False)
                    handle.write("\n")
                os.replace(tmp, path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise CacheIOError(f"Cannot write {path}: {e}", path=str(path)) from e

    async def _load(self, key: str, adapter: TypeAdapter) -> Optional[Any]:
        path = self._path(key)
        try:
            raw = await asyncio.to_thread(self._read_document, path)
        except CacheIOError as e:
            logger.warning("cache_read_error", key=key, error=str(e))
            return None
        if raw is None:
            return None
        try:
            return adapter.validate_python(raw)
        except ValidationError as e:
            logger.warning("cache_document_invalid", key=key, errors=e.error_count())
            return None

    async def _save(self, key: str, data: Any) -> bool:
        path = self._path(key)
        async with self._locks.hold(key):
            try:
                await asyncio.to_thread(self._write_document, path, data)
            except CacheIOError as e:
                logger.error("cache_write_error", key=key, error=str(e))
                return False
        logger.debug("cache_written", key=key)
        return True

    # =========================================================================
    # Catalog
    # =========================================================================

    async def load_catalog(self) -> Optional[List[Repository]]:
        """Get the enriched catalog, None on a miss."""
        return await self._load(CacheKeys.catalog(), _catalog_adapter)

    async def save_catalog(self, repos: List[Repository]) -> bool:
        data = [repo.model_dump(mode="json") for repo in repos]
        return await self._save(CacheKeys.catalog(), data)

    async def clear_catalog(self) -> bool:
        path = self._path(CacheKeys.catalog())
        async with self._locks.hold(CacheKeys.catalog()):
            try:
                await asyncio.to_thread(path.unlink, True)
            except OSError as e:
                logger.error("cache_delete_error", key=CacheKeys.catalog(), error=str(e))
                return False
        return True

    # =========================================================================
    # Commits
    # =========================================================================

    async def load_commits(self, owner: str, name: str) -> Optional[List[CommitRecord]]:
        """
        Get the cached commit list of a repository.

        Returns:
            The stored list (possibly empty), or None if never fetched
        """
        return await self._load(CacheKeys.commits(owner, name), _commits_adapter)

    async def save_commits(self, owner: str, name: str, commits: List[CommitRecord]) -> bool:
        data = [commit.model_dump(mode="json") for commit in commits]
        return await self._save(CacheKeys.commits(owner, name), data)

    async def has_commits(self, owner: str, name: str) -> bool:
        path = self._path(CacheKeys.commits(owner, name))
        return await asyncio.to_thread(path.is_file)

    # =========================================================================
    # Health
    # =========================================================================

    def health_check(self) -> Dict[str, Any]:
        commits_dir = self._path(CacheKeys.COMMITS_DIR)
        try:
            documents = sum(1 for _ in commits_dir.glob("*.json")) if commits_dir.is_dir() else 0
            return {
                "available": self.root.is_dir() or not self.root.exists(),
                "root": str(self.root),
                "catalog_cached": self._path(CacheKeys.catalog()).is_file(),
                "commit_documents": documents,
            }
        except OSError as e:
            return {"available": False, "root": str(self.root), "error": str(e)}
