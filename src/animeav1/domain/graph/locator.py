"""Locate the record a stage needs inside a list of payload nodes.

Scan order is nodes first, then the cells of each node's pool. The first
match wins, which makes the earliest structurally matching node the
authoritative one. Absence is reported as ``None``; turning that into a
domain failure is the caller's decision.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from .payload import Node
from .pool import Pool, Record

RecordPredicate = Callable[[Pool, Record], bool]
NodeFilter = Callable[[Node], bool]


@dataclass(frozen=True)
class LocatedRecord:
    pool: Pool
    record: Record
    node_index: int


def _candidate_pools(
    nodes: Sequence[Node],
    node_filter: NodeFilter | None,
) -> Iterator[tuple[int, Pool]]:
    for index, node in enumerate(nodes):
        if node.pool is None or len(node.pool) == 0:
            continue
        if node_filter is not None and not node_filter(node):
            continue
        yield index, node.pool


def locate_record(
    nodes: Sequence[Node],
    predicate: RecordPredicate,
    *,
    node_filter: NodeFilter | None = None,
) -> LocatedRecord | None:
    """First object cell, across all pools, satisfying *predicate*."""
    for index, pool in _candidate_pools(nodes, node_filter):
        for record in pool.records():
            if predicate(pool, record):
                return LocatedRecord(pool=pool, record=record, node_index=index)
    return None


def locate_root(
    nodes: Sequence[Node],
    predicate: RecordPredicate,
    *,
    node_filter: NodeFilter | None = None,
) -> LocatedRecord | None:
    """Like :func:`locate_record`, but only a pool's first cell is considered."""
    for index, pool in _candidate_pools(nodes, node_filter):
        root = pool.expect_object(0)
        if root is not None and predicate(pool, root):
            return LocatedRecord(pool=pool, record=root, node_index=index)
    return None


# ----------------------------------------------------------------------
# Structural predicates
# ----------------------------------------------------------------------


def has_fields(*names: str) -> RecordPredicate:
    """Record declares every field in *names* (values unchecked)."""

    def _check(_pool: Pool, record: Record) -> bool:
        return all(name in record for name in names)

    return _check


def field_is_array(name: str) -> RecordPredicate:
    """``record[name]`` points at an array cell."""

    def _check(pool: Pool, record: Record) -> bool:
        return pool.field_array(record, name) is not None

    return _check


def field_equals(name: str, value: Any) -> RecordPredicate:
    """``record[name]`` points at a cell equal to *value*."""

    def _check(pool: Pool, record: Record) -> bool:
        return pool.field(record, name) == value

    return _check


def all_of(*predicates: RecordPredicate) -> RecordPredicate:
    def _check(pool: Pool, record: Record) -> bool:
        return all(p(pool, record) for p in predicates)

    return _check


def uses_flag(name: str) -> NodeFilter:
    def _check(node: Node) -> bool:
        return node.uses_flag(name)

    return _check

