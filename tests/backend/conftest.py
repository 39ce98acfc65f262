from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from backend.app.dependencies import get_tracker_service
from backend.app.main import create_app
from tests.conftest import FakeGitHubClient, commit_payload, ok, repo_payload
from tracker.config import Settings
from tracker.services import build_tracker_service


@pytest.fixture
def github():
    return FakeGitHubClient(
        {
            "/user/repos": ok([repo_payload("octo/hello")]),
            "/orgs/acme/repos": ok([repo_payload("acme/api", owner_type="Organization")]),
            "/repos/octo/hello/contributors": ok([{"login": "octo", "contributions": 2}]),
            "/repos/octo/hello/commits": ok(
                [
                    commit_payload("h3", "2024-02-03T08:00:00Z"),
                    commit_payload("h2", "2024-02-02T08:00:00Z"),
                    commit_payload("h1", "2024-01-20T08:00:00Z"),
                ]
            ),
            "/repos/acme/api/contributors": ok([{"login": "ada"}]),
            "/repos/acme/api/commits": ok([commit_payload("a1", "2024-02-03T18:00:00Z")]),
        }
    )


@pytest.fixture
def make_settings(tmp_path):
    def factory(**overrides) -> Settings:
        values = {
            "GITHUB_TOKEN": "token",
            "GITHUB_USER": "octo",
            "GITHUB_ORG": "acme",
            "STORAGE_DIR": str(tmp_path / "storage"),
        }
        values.update(overrides)
        return Settings(**values)

    return factory


@pytest.fixture
def make_client(github, make_settings):
    """Build a TestClient whose TrackerService talks to the fake GitHub client."""

    def factory(**overrides) -> TestClient:
        settings = make_settings(**overrides)
        app = create_app(settings)
        service = build_tracker_service(settings, github)
        app.dependency_overrides[get_tracker_service] = lambda: service
        # No context manager: the lifespan would open a real GitHub session
        return TestClient(app, raise_server_exceptions=False)

    return factory


@pytest.fixture
def api_client(make_client) -> Iterator[TestClient]:
    yield make_client()
