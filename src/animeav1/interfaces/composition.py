"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from animeav1.application.site import SiteUrls
from animeav1.infrastructure.config import AppConfig
from animeav1.infrastructure.http import HttpxPageDataFetcher
from animeav1.infrastructure.http.client import create_http_client
from animeav1.interfaces.app_state import AppState
from animeav1.interfaces.provider import AnimeAv1Provider

log = structlog.get_logger(__name__)


def build_provider(config: AppConfig, http_client: httpx.AsyncClient) -> AnimeAv1Provider:
    """Wire the provider from configuration and an open HTTP client."""
    return AnimeAv1Provider(
        fetcher=HttpxPageDataFetcher(http_client),
        urls=SiteUrls(base_url=config.site_base_url, cdn_url=config.site_cdn_url),
        episode_title_template=config.episode_title_template,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared HTTP client and provider; close the client on shutdown."""
    state = cast(AppState, app.state)
    config = state.config

    state.http_client = create_http_client(config)
    log.info(
        "http_client_initialized",
        timeout_seconds=config.http_timeout_seconds,
        follow_redirects=config.http_follow_redirects,
    )

    state.provider = build_provider(config, state.http_client)
    log.info("provider_initialized", base_url=config.site_base_url)

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")
