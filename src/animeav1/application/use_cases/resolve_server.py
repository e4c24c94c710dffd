"""Stream server resolution use case: third stage of the pipeline."""

from __future__ import annotations

from typing import Any

import structlog

from animeav1.application.site import SiteUrls
from animeav1.domain.entities import (
    EpisodeServer,
    VideoSource,
    decode_episode_ref,
)
from animeav1.domain.exceptions import (
    InvalidReference,
    MalformedPayload,
    NoContentForVariant,
    RecordNotFound,
    StreamNotFound,
)
from animeav1.domain.graph import Pool, has_fields, is_pointer, locate_record
from animeav1.domain.ports import PageDataFetcherPort

from ._page_data import fetch_nodes

log = structlog.get_logger(__name__)

HLS_SERVER = "HLS"
_STREAM_HEADERS = {"Referer": "null"}


def select_hls_manifest(pool: Pool, server_pointers: list[Any]) -> str | None:
    """Manifest URL of the first server named ``HLS``, in list order.

    Servers whose name or URL does not resolve are skipped. The embed path
    ``/play/`` is rewritten to the manifest path ``/m3u8/``.
    """
    for pointer in server_pointers:
        server = pool.expect_object(pointer)
        if server is None:
            continue
        name = pool.field_string(server, "server")
        link = pool.field_string(server, "url")
        if not name or not link:
            continue
        if name == HLS_SERVER:
            return link.replace("/play/", "/m3u8/", 1)
    return None


class ResolveServerUseCase:
    """Resolves an episode reference to its HLS stream.

    The episode id must decode (slug, number, variant); there is no
    fallback at this stage. The variant picks the ``SUB``/``DUB`` entry of
    the page's embeds map.
    """

    def __init__(self, fetcher: PageDataFetcherPort, urls: SiteUrls) -> None:
        self._fetcher = fetcher
        self._urls = urls

    async def execute(self, episode_id: str) -> EpisodeServer:
        """Fetch the episode page and pick its HLS server.

        Raises:
            InvalidReference: *episode_id* is not an encoded episode reference.
            FetchFailed: page could not be fetched.
            MalformedPayload: payload or server list has the wrong shape.
            RecordNotFound: page carries no embeds record.
            NoContentForVariant: embeds map lacks the variant's category.
            StreamNotFound: no HLS server for the variant.
        """
        ref = decode_episode_ref(episode_id)
        if ref is None:
            raise InvalidReference(episode_id)

        url = self._urls.episode_data(ref.slug, ref.number)
        nodes = await fetch_nodes(self._fetcher, url)

        located = locate_record(nodes, has_fields("embeds"))
        if located is None:
            log.warning(
                "embeds_record_not_found",
                slug=ref.slug,
                number=ref.number,
            )
            raise RecordNotFound(ref.slug, what="embeds")

        pool = located.pool
        category = ref.variant.upper()
        embeds = pool.field_object(located.record, "embeds") or {}
        list_pointer = embeds.get(category)
        if not is_pointer(list_pointer):
            log.info(
                "variant_not_available",
                slug=ref.slug,
                number=ref.number,
                category=category,
                available=sorted(embeds),
            )
            raise NoContentForVariant(category)

        server_pointers = pool.expect_array(list_pointer)
        if server_pointers is None:
            raise MalformedPayload(f"Server list for {category} is not an array")

        manifest = select_hls_manifest(pool, server_pointers)
        if manifest is None:
            log.info(
                "hls_server_missing",
                slug=ref.slug,
                number=ref.number,
                servers=len(server_pointers),
            )
            raise StreamNotFound(ref.variant)

        log.info(
            "hls_server_selected",
            slug=ref.slug,
            number=ref.number,
            variant=ref.variant,
        )
        return EpisodeServer(
            server=HLS_SERVER,
            headers=dict(_STREAM_HEADERS),
            video_sources=[VideoSource(url=manifest)],
        )
