"""Shared test fixtures for the animeav1 test suite."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from animeav1.application.site import SiteUrls

BASE_URL = "https://animeav1.test"
CDN_URL = "https://cdn.animeav1.test"

# ---------------------------------------------------------------------------
# Sample page-data payloads
# ---------------------------------------------------------------------------

CATALOG_PAYLOAD: dict[str, Any] = {
    "type": "data",
    "nodes": [
        {"type": "data", "data": [{"user": 1}, None], "uses": {}},
        {
            "type": "data",
            "uses": {"search_params": ["search", "page"]},
            "data": [
                {"results": 1, "total": 10},
                [2, 6, 10],
                {"id": 3, "title": 4, "slug": 5},
                1234,
                "One Piece",
                "one-piece",
                {"id": 7, "title": 8, "slug": 9},
                87,
                "One Punch Man",
                "one-punch-man",
                {"id": 11, "title": 12},
                5,
                "Untitled Slugless",
            ],
        },
    ],
}

MEDIA_PAYLOAD: dict[str, Any] = {
    "type": "data",
    "nodes": [
        {"type": "data", "data": [{"layout": 1}, "dark"]},
        {
            "type": "data",
            "data": [
                {"media": 1, "related": 13},
                {"id": 2, "slug": 3, "title": 4, "episodes": 5},
                321,
                "one-piece",
                "One Piece",
                [6, 9, 11],
                {"number": 7, "title": 8},
                1,
                "Romance Dawn",
                {"number": 10},
                2,
                {"title": 12},
                "Inline Special",
                {"id": 14, "slug": 15, "episodes": 16},
                999,
                "one-piece-film-red",
                [],
            ],
        },
    ],
}

EPISODE_PAYLOAD: dict[str, Any] = {
    "type": "data",
    "nodes": [
        {"type": "data", "data": [{"layout": 1}, "dark"]},
        {
            "type": "data",
            "data": [
                {"episode": 1, "embeds": 2},
                5,
                {"SUB": 3, "DUB": 7},
                [4, 10],
                {"server": 5, "url": 6},
                "Mega",
                "https://mega.nz/embed/xyz",
                [8],
                {"server": 9, "url": 11},
                "HLS",
                {"server": 9, "url": 12},
                "https://player.zilla-networks.com/play/dub123",
                "https://player.zilla-networks.com/play/sub456",
            ],
        },
    ],
}


# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------


class FakeResponse:
    """Minimal PageDataResponse."""

    def __init__(self, body: Any = None, status_code: int = 200) -> None:
        self._body = body
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if isinstance(self._body, str):
            raise ValueError("not JSON")
        return copy.deepcopy(self._body)


class FakeFetcher:
    """PageDataFetcherPort routing exact URLs to canned responses.

    Unknown URLs answer 404. Every requested URL is recorded in ``calls``.
    """

    def __init__(self, routes: dict[str, FakeResponse] | None = None) -> None:
        self.routes = routes or {}
        self.calls: list[str] = []

    def route(self, url: str, body: Any = None, status_code: int = 200) -> None:
        self.routes[url] = FakeResponse(body, status_code)

    async def fetch(self, url: str) -> FakeResponse:
        self.calls.append(url)
        return self.routes.get(url, FakeResponse({"error": "Not Found"}, 404))


@pytest.fixture()
def site_urls() -> SiteUrls:
    return SiteUrls(base_url=BASE_URL, cdn_url=CDN_URL)


@pytest.fixture()
def catalog_payload() -> dict[str, Any]:
    return copy.deepcopy(CATALOG_PAYLOAD)


@pytest.fixture()
def media_payload() -> dict[str, Any]:
    return copy.deepcopy(MEDIA_PAYLOAD)


@pytest.fixture()
def episode_payload() -> dict[str, Any]:
    return copy.deepcopy(EPISODE_PAYLOAD)


@pytest.fixture()
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()
