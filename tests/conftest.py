"""
Pytest fixtures for Repo Streak Tracker tests.

GitHub is replaced by FakeGitHubClient, which serves canned RemoteResults
per path and records every call. The cache lives in a pytest tmp_path.
"""

import pytest

from tracker.api import RemoteResult
from tracker.cache import FileCacheStore


def ok(payload):
    return RemoteResult(ok=True, status=200, payload=payload)


def error(status, message="error"):
    return RemoteResult(ok=False, status=status, payload={"message": message})


class FakeGitHubClient:
    """
    Stand-in for GitHubClient.

    ``responses`` maps an API path to either a single RemoteResult, an
    exception to raise, or a list of those indexed by the ``page`` parameter.
    Pages past the end of a list come back empty. Unknown paths are 404.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def request(self, path, params=None):
        self.calls.append((path, dict(params or {})))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            response = self.responses.get(path)
            if response is None:
                return error(404, "Not Found")
            if isinstance(response, list):
                page = int((params or {}).get("page", 1))
                response = response[page - 1] if page <= len(response) else ok([])
            if isinstance(response, Exception):
                raise response
            return response
        finally:
            self.in_flight -= 1

    def calls_to(self, path):
        return [params for called, params in self.calls if called == path]


def commit_payload(sha, date, message="Update", author="Ada"):
    """Commit listing entry as returned by /repos/{owner}/{name}/commits."""
    return {
        "sha": sha,
        "html_url": f"https://github.com/octo/hello/commit/{sha}",
        "commit": {
            "message": message,
            "author": {"name": author, "email": f"{author.lower()}@example.com", "date": date},
        },
    }


def repo_payload(full_name, size=10, owner_type="User", fork=False):
    """Repository listing entry as returned by /user/repos and /orgs/{org}/repos."""
    owner, name = full_name.split("/")
    return {
        "full_name": full_name,
        "name": name,
        "owner": {"login": owner, "type": owner_type},
        "size": size,
        "created_at": "2024-01-01T00:00:00Z",
        "pushed_at": "2024-03-01T12:00:00Z",
        "html_url": f"https://github.com/{full_name}",
        "fork": fork,
    }


@pytest.fixture
def fake_client():
    return FakeGitHubClient()


@pytest.fixture
def store(tmp_path):
    return FileCacheStore(tmp_path / "storage")
