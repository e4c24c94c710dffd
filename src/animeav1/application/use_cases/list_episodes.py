"""Episode listing use case: second stage of the pipeline."""

from __future__ import annotations

import structlog

from animeav1.application.site import (
    DEFAULT_EPISODE_TITLE,
    SiteUrls,
    format_episode_title,
)
from animeav1.domain.entities import (
    AnimeRef,
    EpisodeDetails,
    EpisodeRef,
    decode_anime_ref,
    encode_episode_ref,
)
from animeav1.domain.exceptions import MalformedPayload, RecordNotFound
from animeav1.domain.graph import (
    Pool,
    all_of,
    field_equals,
    has_fields,
    is_present,
    locate_record,
)
from animeav1.domain.ports import PageDataFetcherPort

from ._page_data import fetch_nodes

log = structlog.get_logger(__name__)


class ListEpisodesUseCase:
    """Lists the episodes of one title.

    The anime id is decoded leniently: a raw slug or an undecodable id is
    treated as a slug with the ``sub`` variant. Unlike search, failures are
    raised, because the caller already holds a confirmed title.
    """

    def __init__(
        self,
        fetcher: PageDataFetcherPort,
        urls: SiteUrls,
        episode_title_template: str = DEFAULT_EPISODE_TITLE,
    ) -> None:
        self._fetcher = fetcher
        self._urls = urls
        self._title_template = episode_title_template

    async def execute(self, anime_id: str) -> list[EpisodeDetails]:
        """Fetch the media page of *anime_id* and materialize its episodes.

        Raises:
            FetchFailed: page could not be fetched.
            MalformedPayload: payload or episode list has the wrong shape.
            RecordNotFound: no media record with the requested slug.
        """
        ref = decode_anime_ref(anime_id)
        nodes = await fetch_nodes(self._fetcher, self._urls.media_data(ref.slug))

        # Only a record whose slug cell equals the requested slug matches.
        located = locate_record(
            nodes,
            all_of(has_fields("slug", "episodes"), field_equals("slug", ref.slug)),
        )
        if located is None:
            log.warning("media_record_not_found", slug=ref.slug, nodes=len(nodes))
            raise RecordNotFound(ref.slug)

        pool, media = located.pool, located.record
        pointers = pool.field_array(media, "episodes")
        if pointers is None:
            raise MalformedPayload(f"Episode list of '{ref.slug}' is not an array")

        media_id = pool.field(media, "id")
        image = self._urls.backdrop(media_id) if is_present(media_id) else None

        episodes = [
            self._episode(pool, pointer, index, ref, image)
            for index, pointer in enumerate(pointers)
        ]
        log.info(
            "episodes_listed",
            slug=ref.slug,
            variant=ref.variant,
            episodes=len(episodes),
            node_index=located.node_index,
        )
        return episodes

    def _episode(
        self,
        pool: Pool,
        pointer: object,
        index: int,
        ref: AnimeRef,
        image: str | None,
    ) -> EpisodeDetails:
        cell = pool.expect_object(pointer) or {}

        number = pool.field_number(cell, "number")
        if number is None:
            number = index + 1

        title = pool.field_text(cell, "title") or format_episode_title(
            self._title_template, number
        )

        return EpisodeDetails(
            id=encode_episode_ref(
                EpisodeRef(slug=ref.slug, number=number, variant=ref.variant)
            ),
            number=number,
            title=title,
            url=self._urls.episode_page(ref.slug, number),
            image=image,
        )
