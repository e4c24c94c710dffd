from __future__ import annotations

import pytest

from animeav1.domain.entities import (
    ProviderSettings,
    SearchQuery,
    is_number,
    normalize_variant,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("dub", "dub"),
        ("DUB", "dub"),
        (" Dub ", "dub"),
        ("sub", "sub"),
        ("", "sub"),
        (None, "sub"),
        (1, "sub"),
    ],
)
def test_normalize_variant(raw: object, expected: str) -> None:
    assert normalize_variant(raw) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1, True),
        (1.5, True),
        (10**400, True),
        (True, False),
        ("1", False),
        (None, False),
        (float("nan"), False),
        (float("inf"), False),
    ],
)
def test_is_number(value: object, expected: bool) -> None:
    assert is_number(value) is expected


def test_search_query_from_dub_flag() -> None:
    assert SearchQuery.from_dub_flag("naruto", True) == SearchQuery("naruto", "dub")
    assert SearchQuery.from_dub_flag(None, False) == SearchQuery(None, "sub")


def test_provider_settings_defaults() -> None:
    settings = ProviderSettings()
    assert settings.episode_servers == ("HLS",)
    assert settings.supports_dub is True
