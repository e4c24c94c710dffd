"""Pipeline failure taxonomy.

Every failure carries a stable ``kind`` so outer layers can map it
(HTTP status, CLI exit message) without matching on message text.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for all pipeline errors."""

    kind: str = "provider_error"


class FetchFailed(ProviderError):
    """Non-success HTTP status or transport error."""

    kind = "fetch_failed"

    def __init__(self, url: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        reason = f"HTTP {status_code}" if status_code is not None else "transport error"
        super().__init__(f"Fetching {url} failed ({reason})")


class MalformedPayload(ProviderError):
    """Payload is missing the expected node/pool shape."""

    kind = "malformed_payload"


class RecordNotFound(ProviderError):
    """No node/record matched the stage's structural predicate."""

    kind = "record_not_found"

    def __init__(self, slug: str, what: str = "media") -> None:
        self.slug = slug
        super().__init__(f"No {what} record found for '{slug}'")


class NoContentForVariant(ProviderError):
    """The embeds map has no entry for the requested variant."""

    kind = "no_content_for_variant"

    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(f"No content available in {category}")


class StreamNotFound(ProviderError):
    """No HLS server is listed for the requested variant."""

    kind = "stream_not_found"

    def __init__(self, variant: str) -> None:
        self.variant = variant
        super().__init__(f"No HLS stream found for {variant}")


class InvalidReference(ProviderError):
    """An identifier could not be decoded where decoding is mandatory."""

    kind = "invalid_reference"

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f"Invalid reference: {reference!r}")
