"""Top-level page-data payload: an ordered list of nodes, each with its own pool."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from animeav1.domain.exceptions import MalformedPayload

from .pool import Pool


@dataclass(frozen=True)
class Node:
    """One payload element.

    ``uses`` hints which client-side logic the node feeds (e.g.
    ``search_params``); ``pool`` is ``None`` when the node carries no data.
    """

    uses: Mapping[str, Any] = field(default_factory=dict)
    pool: Pool | None = None

    def uses_flag(self, name: str) -> bool:
        return bool(self.uses.get(name))


def _parse_node(raw: object) -> Node:
    if not isinstance(raw, Mapping):
        return Node()
    uses = raw.get("uses")
    data = raw.get("data")
    return Node(
        uses=uses if isinstance(uses, Mapping) else {},
        pool=Pool(data) if isinstance(data, list) else None,
    )


def parse_payload(raw: object) -> list[Node]:
    """Split a decoded ``__data.json`` body into nodes.

    Node positions are preserved (unusable nodes become empty ``Node``
    objects) because scan order decides which node is authoritative.
    """
    if not isinstance(raw, Mapping):
        raise MalformedPayload(f"Payload must be an object, got {type(raw).__name__}")
    nodes = raw.get("nodes")
    if not isinstance(nodes, list):
        raise MalformedPayload("Payload has no 'nodes' list")
    return [_parse_node(n) for n in nodes]
