"""
Tests for the HTTP API.

Tests:
- Catalog, commits, streak and profile endpoints
- Error mapping (404, 502, 503, 500)
- Health and request ID middleware
"""

from backend.app.dependencies import get_tracker_service
from tests.conftest import ok
from tracker.exceptions import TransportError


class TestRepos:
    """Tests for /repos endpoints."""

    def test_list_repos(self, api_client):
        response = api_client.get("/repos")

        assert response.status_code == 200
        repos = response.json()
        assert [repo["full_name"] for repo in repos] == ["octo/hello", "acme/api"]
        hello = repos[0]
        assert hello["is_owner"] is True
        assert hello["is_contributor"] is True
        assert hello["streak"] == {
            "current_streak": 2,
            "longest_streak": 2,
            "total_commits": 3,
            "days_active": 3,
        }
        assert repos[1]["owner"] == {"login": "acme", "kind": "Organization"}

    def test_refresh(self, api_client, github):
        api_client.get("/repos")
        github.responses["/orgs/acme/repos"] = ok([])

        response = api_client.get("/repos/refresh")

        assert response.status_code == 200
        assert [repo["full_name"] for repo in response.json()] == ["octo/hello"]

    def test_refresh_transport_error(self, api_client, github):
        github.responses["/user/repos"] = TransportError("connection refused", url="https://api.github.com/user/repos")

        response = api_client.get("/repos/refresh")

        assert response.status_code == 502
        assert response.json() == {"detail": "GitHub API unreachable", "status_code": 502}

    def test_missing_identity(self, make_client):
        client = make_client(GITHUB_USER="")

        response = client.get("/repos")

        assert response.status_code == 503
        assert "GITHUB_USER" in response.json()["detail"]


class TestCommits:
    """Tests for /commits and /streak."""

    def test_commits_by_full_name(self, api_client):
        response = api_client.get("/commits/octo/hello")

        assert response.status_code == 200
        commits = response.json()
        assert [commit["sha"] for commit in commits] == ["h3", "h2", "h1"]
        assert commits[0]["author_name"] == "Ada"

    def test_commits_by_separator_key(self, api_client):
        response = api_client.get("/commits/acme__api")

        assert response.status_code == 200
        assert response.json()[0]["sha"] == "a1"

    def test_commits_unknown_repository(self, api_client):
        response = api_client.get("/commits/nobody/nothing")

        assert response.status_code == 404
        assert response.json() == {"detail": "Repo not found", "status_code": 404}

    def test_streak(self, api_client):
        response = api_client.get("/streak/octo/hello")

        assert response.status_code == 200
        assert response.json() == {
            "current_streak": 2,
            "longest_streak": 2,
            "total_commits": 3,
            "days_active": 3,
            "owner": "octo",
            "repo": "hello",
            "full_name": "octo/hello",
        }

    def test_streak_unknown_repository(self, api_client):
        assert api_client.get("/streak/missing").status_code == 404


class TestProfile:
    def test_profile_after_catalog(self, api_client):
        api_client.get("/repos")

        response = api_client.get("/profile")

        assert response.status_code == 200
        profile = response.json()
        assert profile["username"] == "octo"
        assert profile["repos"] == 2
        assert profile["total_commits"] == 4
        assert profile["heatmap"] == [
            {"date": "2024-01-20", "count": 1},
            {"date": "2024-02-02", "count": 1},
            {"date": "2024-02-03", "count": 2},
        ]

    def test_profile_empty_cache(self, api_client):
        profile = api_client.get("/profile").json()

        assert profile["repos"] == 0
        assert profile["heatmap"] == []


class TestHealth:
    def test_health(self, api_client):
        response = api_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["cache"]["catalog_cached"] is False
        assert body["config_errors"] == []

    def test_health_reports_missing_token(self, make_client):
        body = make_client(GITHUB_TOKEN="").get("/health").json()

        assert "GITHUB_TOKEN is required for GitHub API access" in body["config_errors"]

    def test_root(self, api_client):
        body = api_client.get("/").json()

        assert body["name"] == "Repo Streak Tracker"
        assert body["docs"] == "/docs"

    def test_request_id_echoed(self, api_client):
        response = api_client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    def test_request_id_generated(self, api_client):
        response = api_client.get("/health")

        assert len(response.headers["X-Request-ID"]) == 8


class TestErrors:
    def _failing_client(self, make_client, **overrides):
        class Broken:
            async def get_catalog(self):
                raise RuntimeError("disk on fire")

        client = make_client(**overrides)
        client.app.dependency_overrides[get_tracker_service] = lambda: Broken()
        return client

    def test_unexpected_error_hidden(self, make_client):
        response = self._failing_client(make_client).get("/repos")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error", "status_code": 500}

    def test_unexpected_error_shown_in_debug(self, make_client):
        response = self._failing_client(make_client, DEBUG=True).get("/repos")

        assert response.status_code == 500
        assert response.json()["detail"] == "disk on fire"

    def test_api_prefix(self, make_client):
        client = make_client(API_PREFIX="/api")

        assert client.get("/api/repos").status_code == 200
        assert client.get("/repos").status_code == 404
