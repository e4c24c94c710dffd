"""URL shapes and display defaults of the target site."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, urlencode

from animeav1.domain.entities import EpisodeNumber

DEFAULT_BASE_URL = "https://animeav1.com"
DEFAULT_CDN_URL = "https://cdn.animeav1.com"
DEFAULT_EPISODE_TITLE = "Episode {number}"


def _plain_number(number: EpisodeNumber) -> EpisodeNumber:
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def format_episode_number(number: EpisodeNumber) -> str:
    """Render ``12.0`` as ``12``; fractional numbers stay as-is."""
    return str(_plain_number(number))


def format_episode_title(template: str, number: EpisodeNumber) -> str:
    """Fill ``{number}`` in *template*; format specs such as ``{number:02}`` apply."""
    return template.format(number=_plain_number(number))


def _segment(value: str) -> str:
    return quote(value, safe="")


@dataclass(frozen=True)
class SiteUrls:
    """Builds every URL the pipeline fetches or hands back to the host."""

    base_url: str = DEFAULT_BASE_URL
    cdn_url: str = DEFAULT_CDN_URL

    def catalog_search(self, text: str | None = None) -> str:
        params = [("page", "1")]
        if text and text.strip():
            params.append(("search", text))
        return f"{self.base_url}/catalogo/__data.json?{urlencode(params)}"

    def media_page(self, slug: str) -> str:
        return f"{self.base_url}/media/{_segment(slug)}"

    def media_data(self, slug: str) -> str:
        return f"{self.media_page(slug)}/__data.json"

    def episode_page(self, slug: str, number: EpisodeNumber) -> str:
        return f"{self.media_page(slug)}/{format_episode_number(number)}"

    def episode_data(self, slug: str, number: EpisodeNumber) -> str:
        return f"{self.episode_page(slug, number)}/__data.json"

    def cover(self, media_id: object) -> str:
        return f"{self.cdn_url}/covers/{media_id}.jpg"

    def backdrop(self, media_id: object) -> str:
        return f"{self.cdn_url}/backdrops/{media_id}.jpg"
