"""Port for fetching graph-encoded page data (``__data.json``)."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PageDataResponse(Protocol):
    """Minimal response surface the pipeline stages rely on."""

    @property
    def ok(self) -> bool:
        """True for 2xx status codes."""
        ...

    @property
    def status_code(self) -> int: ...

    def json(self) -> Any:
        """Decoded body. Raises ``ValueError`` on invalid JSON."""
        ...


@runtime_checkable
class PageDataFetcherPort(Protocol):
    """Issues a single GET for a page-data URL.

    Implementations raise ``FetchFailed`` on transport errors and return
    non-2xx responses as-is (``ok`` is ``False``). No retries, no caching.
    """

    async def fetch(self, url: str) -> PageDataResponse: ...
