"""Lowest-precedence configuration layer, in the sectioned YAML shape."""

from __future__ import annotations

from typing import Any

from animeav1.application.site import (
    DEFAULT_BASE_URL,
    DEFAULT_CDN_URL,
    DEFAULT_EPISODE_TITLE,
)

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "animeav1",
    "environment": "dev",
    "site": {
        "base_url": DEFAULT_BASE_URL,
        "cdn_url": DEFAULT_CDN_URL,
        "episode_title_template": DEFAULT_EPISODE_TITLE,
    },
    "http": {
        "timeout_seconds": 15.0,
        "follow_redirects": True,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
