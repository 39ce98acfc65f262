"""
Payload parsing at the ingestion boundary.

GitHub payloads are loosely shaped dictionaries; everything past this module
works with the fixed Repository / Contributor / CommitRecord models.
"""

from typing import Any, Dict, List

from pydantic import ValidationError

from tracker.logging import get_logger
from tracker.models import CommitRecord, Contributor, OwnerKind, RepoOwner, Repository

logger = get_logger("github.parsers")


def _parse_owner(owner: Dict[str, Any] | None) -> RepoOwner | None:
    if not isinstance(owner, dict) or not owner.get("login"):
        return None
    kind = OwnerKind.ORGANIZATION if owner.get("type") == OwnerKind.ORGANIZATION.value else OwnerKind.USER
    return RepoOwner(login=owner["login"], kind=kind)


def parse_repository(node: Dict[str, Any]) -> Repository:
    """Parse one repository listing entry into a bare Repository."""
    return Repository(
        full_name=node.get("full_name") or "",
        name=node.get("name") or "",
        owner=_parse_owner(node.get("owner")),
        size=node.get("size") or 0,
        created_at=node.get("created_at"),
        pushed_at=node.get("pushed_at"),
        url=node.get("html_url") or "",
        is_fork=bool(node.get("fork", False)),
    )


def parse_repositories(payload: Any) -> List[Repository]:
    if not isinstance(payload, list):
        return []

    repos = []
    for node in payload:
        if not isinstance(node, dict) or not node.get("full_name"):
            continue
        try:
            repos.append(parse_repository(node))
        except ValidationError as e:
            logger.debug("repository_skipped", full_name=node.get("full_name"), error=str(e))
    return repos


def parse_contributors(payload: Any) -> List[Contributor]:
    if not isinstance(payload, list):
        return []

    contributors = []
    for node in payload:
        # Anonymous contributors carry no login
        if not isinstance(node, dict) or not node.get("login"):
            continue
        try:
            contributors.append(
                Contributor(login=node["login"], contributions=node.get("contributions") or 0)
            )
        except ValidationError as e:
            logger.debug("contributor_skipped", login=node.get("login"), error=str(e))
    return contributors


def parse_commit(node: Dict[str, Any]) -> CommitRecord:
    """Parse one commit listing entry, keeping author name and author date."""
    commit = node.get("commit") or {}
    author = commit.get("author") or {}
    return CommitRecord(
        sha=node.get("sha") or "",
        message=commit.get("message") or "",
        author_name=author.get("name") or "",
        authored_at=author.get("date"),
        url=node.get("html_url") or "",
    )


def parse_commits(payload: Any) -> List[CommitRecord]:
    if not isinstance(payload, list):
        return []

    commits = []
    for node in payload:
        if not isinstance(node, dict):
            continue
        try:
            commits.append(parse_commit(node))
        except ValidationError as e:
            logger.debug("commit_skipped", sha=node.get("sha"), error=str(e))
    return commits
