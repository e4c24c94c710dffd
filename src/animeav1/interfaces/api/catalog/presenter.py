"""Render domain records in the host's camelCase JSON shape."""

from __future__ import annotations

from typing import Any

from animeav1.domain.entities import (
    EpisodeDetails,
    EpisodeServer,
    ProviderSettings,
    SearchResult,
    VideoSource,
)
from animeav1.domain.exceptions import ProviderError


def render_settings(settings: ProviderSettings) -> dict[str, Any]:
    return {
        "episodeServers": list(settings.episode_servers),
        "supportsDub": settings.supports_dub,
    }


def render_search_result(result: SearchResult) -> dict[str, Any]:
    return {
        "id": result.id,
        "title": result.title,
        "url": result.url,
        "image": result.image,
        "subOrDub": result.sub_or_dub,
    }


def render_episode(episode: EpisodeDetails) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": episode.id,
        "number": episode.number,
        "title": episode.title,
        "url": episode.url,
    }
    if episode.image is not None:
        data["image"] = episode.image
    return data


def _render_video_source(source: VideoSource) -> dict[str, Any]:
    return {
        "url": source.url,
        "type": source.type,
        "quality": source.quality,
        "subtitles": list(source.subtitles),
    }


def render_episode_server(server: EpisodeServer) -> dict[str, Any]:
    return {
        "server": server.server,
        "headers": dict(server.headers),
        "videoSources": [_render_video_source(s) for s in server.video_sources],
    }


def render_error(exc: ProviderError) -> dict[str, str]:
    return {"error": exc.kind, "detail": str(exc)}
