"""Catalog API endpoints (settings, search, episodes, server)."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from animeav1.domain.entities import SearchQuery
from animeav1.domain.exceptions import ProviderError
from animeav1.interfaces.app_state import AppState

from .presenter import (
    render_episode,
    render_episode_server,
    render_error,
    render_search_result,
    render_settings,
)

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["catalog"])

_ERROR_STATUS: dict[str, int] = {
    "invalid_reference": 400,
    "record_not_found": 404,
    "no_content_for_variant": 404,
    "stream_not_found": 404,
    "fetch_failed": 502,
    "malformed_payload": 502,
}


def _error_response(exc: ProviderError) -> JSONResponse:
    status_code = _ERROR_STATUS.get(exc.kind, 500)
    log.info("catalog_request_failed", kind=exc.kind, status_code=status_code)
    return JSONResponse(content=render_error(exc), status_code=status_code)


@router.get("/settings")
async def catalog_settings(request: Request) -> JSONResponse:
    state = cast(AppState, request.app.state)
    return JSONResponse(content=render_settings(state.provider.get_settings()))


@router.get("/search")
async def catalog_search(
    request: Request,
    q: str | None = Query(None, description="Free-text title filter"),
    dub: bool = Query(False, description="Request the dub variant"),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    results = await state.provider.search(SearchQuery.from_dub_flag(q, dub))
    return JSONResponse(
        content={"results": [render_search_result(r) for r in results]}
    )


@router.get("/episodes")
async def catalog_episodes(
    request: Request,
    id: str = Query(..., description="Anime id returned by /search (or a slug)"),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    try:
        episodes = await state.provider.find_episodes(id)
    except ProviderError as exc:
        return _error_response(exc)
    return JSONResponse(content={"episodes": [render_episode(e) for e in episodes]})


@router.get("/server")
async def catalog_server(
    request: Request,
    id: str = Query(..., description="Episode id returned by /episodes"),
    server: str | None = Query(None, description="Ignored; HLS is always used"),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    try:
        episode_server = await state.provider.find_episode_server(id, server)
    except ProviderError as exc:
        return _error_response(exc)
    return JSONResponse(content=render_episode_server(episode_server))
