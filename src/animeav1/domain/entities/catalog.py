"""Domain entities for the catalog pipeline.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal, Union

Variant = Literal["sub", "dub"]
EpisodeNumber = Union[int, float]

DEFAULT_VARIANT: Variant = "sub"


def normalize_variant(value: object) -> Variant:
    """Map any raw value to a variant; only ``"dub"`` selects the dub track."""
    if isinstance(value, str) and value.strip().lower() == "dub":
        return "dub"
    return DEFAULT_VARIANT


def is_number(value: object) -> bool:
    """True for finite int/float cells (``bool``, NaN and infinities are excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


@dataclass(frozen=True)
class SearchQuery:
    """Catalog search request as supplied by the host."""

    text: str | None = None
    variant: Variant = DEFAULT_VARIANT

    @classmethod
    def from_dub_flag(cls, text: str | None, dub: bool) -> SearchQuery:
        return cls(text=text, variant="dub" if dub else "sub")


@dataclass(frozen=True)
class SearchResult:
    """A catalog entry; ``id`` is an encoded anime reference."""

    id: str
    title: str
    url: str
    image: str
    sub_or_dub: Variant


@dataclass(frozen=True)
class EpisodeDetails:
    """A single episode; ``id`` is an encoded episode reference."""

    id: str
    number: EpisodeNumber
    title: str
    url: str
    image: str | None = None


@dataclass(frozen=True)
class VideoSource:
    url: str
    type: str = "m3u8"
    quality: str = "auto"
    subtitles: list[dict[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class EpisodeServer:
    """Playable stream description for one episode."""

    server: str
    headers: dict[str, str]
    video_sources: list[VideoSource]


@dataclass(frozen=True)
class ProviderSettings:
    """Capabilities advertised to the host."""

    episode_servers: tuple[str, ...] = ("HLS",)
    supports_dub: bool = True
