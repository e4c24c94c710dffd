"""Catalog search use case: first stage of the pipeline."""

from __future__ import annotations

import structlog

from animeav1.application.site import SiteUrls
from animeav1.domain.entities import (
    AnimeRef,
    SearchQuery,
    SearchResult,
    Variant,
    encode_anime_ref,
)
from animeav1.domain.graph import (
    Node,
    Pool,
    field_is_array,
    is_present,
    locate_root,
    uses_flag,
)
from animeav1.domain.ports import PageDataFetcherPort

from ._page_data import fetch_nodes

log = structlog.get_logger(__name__)


class CatalogSearchUseCase:
    """Searches the catalog and issues anime references.

    This is the only stage where the variant comes from the caller; it is
    embedded into each result ``id`` so later stages can recover it.
    Search is best-effort: every failure ends in an empty list.
    """

    def __init__(self, fetcher: PageDataFetcherPort, urls: SiteUrls) -> None:
        self._fetcher = fetcher
        self._urls = urls

    async def execute(self, query: SearchQuery) -> list[SearchResult]:
        url = self._urls.catalog_search(query.text)
        try:
            nodes = await fetch_nodes(self._fetcher, url)
            results = self._materialize(nodes, query.variant)
        except Exception:
            log.warning(
                "catalog_search_failed",
                url=url,
                query=query.text,
                exc_info=True,
            )
            return []

        log.info(
            "catalog_search_results",
            query=query.text,
            variant=query.variant,
            results=len(results),
        )
        return results

    def _materialize(self, nodes: list[Node], variant: Variant) -> list[SearchResult]:
        located = locate_root(
            nodes,
            field_is_array("results"),
            node_filter=uses_flag("search_params"),
        )
        if located is None:
            log.debug("catalog_search_node_missing", nodes=len(nodes))
            return []

        pool = located.pool
        pointers = pool.field_array(located.record, "results") or []

        results: list[SearchResult] = []
        for pointer in pointers:
            result = self._candidate(pool, pointer, variant)
            if result is not None:
                results.append(result)
        return results

    def _candidate(
        self,
        pool: Pool,
        pointer: object,
        variant: Variant,
    ) -> SearchResult | None:
        raw = pool.expect_object(pointer)
        if raw is None:
            return None

        title = pool.field_string(raw, "title")
        slug = pool.field_string(raw, "slug")
        if not title or not slug:
            return None

        media_id = pool.field(raw, "id")

        return SearchResult(
            id=encode_anime_ref(AnimeRef(slug=slug, variant=variant)),
            title=title,
            url=self._urls.media_page(slug),
            image=self._urls.cover(media_id) if is_present(media_id) else "",
            sub_or_dub=variant,
        )
