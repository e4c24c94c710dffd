from .catalog import (
    DEFAULT_VARIANT,
    EpisodeDetails,
    EpisodeNumber,
    EpisodeServer,
    ProviderSettings,
    SearchQuery,
    SearchResult,
    Variant,
    VideoSource,
    is_number,
    normalize_variant,
)
from .references import (
    AnimeRef,
    EpisodeRef,
    decode_anime_ref,
    decode_episode_ref,
    encode_anime_ref,
    encode_episode_ref,
)

__all__ = [
    "DEFAULT_VARIANT",
    "AnimeRef",
    "EpisodeDetails",
    "EpisodeNumber",
    "EpisodeRef",
    "EpisodeServer",
    "ProviderSettings",
    "SearchQuery",
    "SearchResult",
    "Variant",
    "VideoSource",
    "decode_anime_ref",
    "decode_episode_ref",
    "encode_anime_ref",
    "encode_episode_ref",
    "is_number",
    "normalize_variant",
]
