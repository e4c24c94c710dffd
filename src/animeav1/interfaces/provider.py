"""Host-facing provider: the three pipeline stages behind one object.

Every call is independent. The only state that survives between calls is
the ``id`` strings handed back to the host.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Union

from animeav1.application.site import DEFAULT_EPISODE_TITLE, SiteUrls
from animeav1.application.use_cases import (
    CatalogSearchUseCase,
    ListEpisodesUseCase,
    ResolveServerUseCase,
)
from animeav1.domain.entities import (
    EpisodeDetails,
    EpisodeServer,
    ProviderSettings,
    SearchQuery,
    SearchResult,
)
from animeav1.domain.exceptions import InvalidReference
from animeav1.domain.ports import PageDataFetcherPort

EpisodeHandle = Union[str, Mapping[str, object], EpisodeDetails]


def episode_id_of(handle: EpisodeHandle) -> str:
    """Extract the id string from anything the host may pass for an episode."""
    if isinstance(handle, str):
        return handle
    if isinstance(handle, EpisodeDetails):
        return handle.id
    if isinstance(handle, Mapping):
        value = handle.get("id")
        if isinstance(value, str):
            return value
    raise InvalidReference(repr(handle))


class AnimeAv1Provider:
    """Catalog search, episode listing and HLS stream lookup."""

    def __init__(
        self,
        fetcher: PageDataFetcherPort,
        urls: SiteUrls | None = None,
        episode_title_template: str = DEFAULT_EPISODE_TITLE,
    ) -> None:
        urls = urls or SiteUrls()
        self._settings = ProviderSettings()
        self._search = CatalogSearchUseCase(fetcher, urls)
        self._episodes = ListEpisodesUseCase(fetcher, urls, episode_title_template)
        self._server = ResolveServerUseCase(fetcher, urls)

    def get_settings(self) -> ProviderSettings:
        return self._settings

    async def search(self, query: SearchQuery) -> list[SearchResult]:
        """Never raises; failures yield an empty list."""
        return await self._search.execute(query)

    async def find_episodes(self, anime_id: str) -> list[EpisodeDetails]:
        return await self._episodes.execute(anime_id)

    async def find_episode_server(
        self,
        episode: EpisodeHandle,
        server: str | None = None,
    ) -> EpisodeServer:
        """Resolve the HLS stream of *episode*.

        *server* is accepted for host compatibility and ignored: the HLS
        server is always chosen.
        """
        return await self._server.execute(episode_id_of(episode))
