"""Opaque identifiers that carry query state between pipeline stages.

The pipeline keeps no session: whatever a later stage needs (slug, variant,
episode number) travels inside the ``id`` handed back to the host.

Wire format is a compact JSON object, identical to the identifiers the
site's original provider issued, so stored handles keep working::

    {"slug":"one-piece","type":"dub"}
    {"slug":"one-piece","number":12,"type":"dub"}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .catalog import (
    DEFAULT_VARIANT,
    EpisodeNumber,
    Variant,
    is_number,
    normalize_variant,
)

_SEPARATORS = (",", ":")


@dataclass(frozen=True)
class AnimeRef:
    slug: str
    variant: Variant = DEFAULT_VARIANT


@dataclass(frozen=True)
class EpisodeRef:
    slug: str
    number: EpisodeNumber
    variant: Variant = DEFAULT_VARIANT


def _load_object(value: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def encode_anime_ref(ref: AnimeRef) -> str:
    return json.dumps(
        {"slug": ref.slug, "type": ref.variant},
        separators=_SEPARATORS,
        ensure_ascii=False,
    )


def decode_anime_ref(value: str) -> AnimeRef:
    """Decode an anime id; never raises.

    Plain slugs and anything else that is not an encoded reference
    degrade to ``AnimeRef(slug=value, variant="sub")``.
    """
    parsed = _load_object(value)
    if parsed is None:
        return AnimeRef(slug=value)

    slug = parsed.get("slug")
    if not isinstance(slug, str) or not slug:
        return AnimeRef(slug=value)
    return AnimeRef(slug=slug, variant=normalize_variant(parsed.get("type")))


def encode_episode_ref(ref: EpisodeRef) -> str:
    return json.dumps(
        {"slug": ref.slug, "number": ref.number, "type": ref.variant},
        separators=_SEPARATORS,
        ensure_ascii=False,
    )


def decode_episode_ref(value: str) -> EpisodeRef | None:
    """Decode an episode id.

    Returns ``None`` when the value lacks a slug or a finite numeric
    episode number; callers decide whether that is fatal.
    """
    parsed = _load_object(value)
    if parsed is None:
        return None

    slug = parsed.get("slug")
    number = parsed.get("number")
    if not isinstance(slug, str) or not slug or not is_number(number):
        return None
    return EpisodeRef(
        slug=slug,
        number=number,
        variant=normalize_variant(parsed.get("type")),
    )
