"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

import httpx
from starlette.datastructures import State

from animeav1.infrastructure.config import AppConfig
from animeav1.interfaces.provider import AnimeAv1Provider


class AppState(State):
    """FastAPI application state.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient

    # Host facade over the pipeline stages
    provider: AnimeAv1Provider
