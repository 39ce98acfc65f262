"""
Tests for sequential page walking.
"""

import asyncio

from tests.conftest import FakeGitHubClient, error, ok
from tracker.api.pagination import fetch_all_pages

PATH = "/repos/octo/hello/commits"


def _walk(responses, **kwargs):
    client = FakeGitHubClient({PATH: responses})
    walk = asyncio.run(fetch_all_pages(client, PATH, **kwargs))
    return client, walk


class TestFetchAllPages:
    """Tests for fetch_all_pages."""

    def test_full_page_then_empty_page(self):
        """A final page exactly page_size long needs one more empty page to stop."""
        client, walk = _walk([ok([1, 2]), ok([])], page_size=2)

        assert walk.items == [1, 2]
        assert walk.pages == 2
        assert walk.complete
        assert not walk.failed
        assert len(client.calls) == 2

    def test_short_page_stops(self):
        client, walk = _walk([ok([1, 2]), ok([3]), ok([4, 5])], page_size=2)

        assert walk.items == [1, 2, 3]
        assert walk.pages == 2
        assert walk.complete

    def test_first_page_empty(self):
        client, walk = _walk([ok([])], page_size=2)

        assert walk.items == []
        assert walk.complete
        assert len(client.calls) == 1

    def test_failure_midway_keeps_partial_items(self):
        client, walk = _walk([ok([1, 2]), error(500)], page_size=2)

        assert walk.items == [1, 2]
        assert not walk.complete
        assert walk.failed
        assert walk.status == 500

    def test_cap_reached(self):
        client, walk = _walk([ok([1, 2]), ok([3, 4]), ok([5])], page_size=2, max_pages=2)

        assert walk.items == [1, 2, 3, 4]
        assert walk.pages == 2
        assert not walk.complete
        assert not walk.failed
        assert len(client.calls) == 2

    def test_non_list_payload_ends_walk(self):
        client, walk = _walk([ok({"message": "unexpected"})], page_size=2)

        assert walk.items == []
        assert walk.complete

    def test_page_parameters(self):
        client = FakeGitHubClient({PATH: [ok([1]), ok([])]})
        asyncio.run(fetch_all_pages(client, PATH, {"type": "all"}, page_size=1))

        assert client.calls_to(PATH) == [
            {"type": "all", "per_page": 1, "page": 1},
            {"type": "all", "per_page": 1, "page": 2},
        ]
