"""Shared fetch step of every pipeline stage."""

from __future__ import annotations

from animeav1.domain.exceptions import FetchFailed, MalformedPayload
from animeav1.domain.graph import Node, parse_payload
from animeav1.domain.ports import PageDataFetcherPort


async def fetch_nodes(fetcher: PageDataFetcherPort, url: str) -> list[Node]:
    """Fetch *url* and split the body into payload nodes.

    Raises:
        FetchFailed: transport error or non-2xx status.
        MalformedPayload: body is not JSON or has no ``nodes`` list.
    """
    response = await fetcher.fetch(url)
    if not response.ok:
        raise FetchFailed(url, response.status_code)

    try:
        body = response.json()
    except ValueError as exc:
        raise MalformedPayload(f"Response from {url} is not valid JSON") from exc

    return parse_payload(body)
