"""Factory for the process-wide httpx client."""

from __future__ import annotations

import httpx

from animeav1.infrastructure.config import AppConfig


def create_http_client(config: AppConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=config.http_follow_redirects,
    )
