"""httpx adapter for PageDataFetcherPort."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from animeav1.domain.exceptions import FetchFailed

log = structlog.get_logger(__name__)


class HttpxPageDataResponse:
    """Wraps ``httpx.Response`` in the port's ``ok``/``json()`` shape."""

    __slots__ = ("_response",)

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def ok(self) -> bool:
        return self._response.is_success

    @property
    def status_code(self) -> int:
        return self._response.status_code

    def json(self) -> Any:
        return self._response.json()


class HttpxPageDataFetcher:
    """Single-shot GET via a shared ``httpx.AsyncClient``.

    The client (timeouts, redirects, User-Agent) is owned by the caller;
    this adapter never closes it.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def fetch(self, url: str) -> HttpxPageDataResponse:
        try:
            resp = await self._http.get(url)
        except httpx.TimeoutException as exc:
            log.warning("page_data_timeout", url=url)
            raise FetchFailed(url) from exc
        except httpx.HTTPError as exc:
            log.warning("page_data_request_failed", url=url, error=str(exc))
            raise FetchFailed(url) from exc

        if not resp.is_success:
            log.warning("page_data_http_error", url=url, status=resp.status_code)
        else:
            log.debug("page_data_fetched", url=url, status=resp.status_code)
        return HttpxPageDataResponse(resp)
