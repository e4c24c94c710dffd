"""Pool resolver for pointer-encoded page data.

A pool is the flat cell list owned by one payload node. Composite cells
never embed their children; they hold integer indices ("pointers") into
the same pool::

    ["One Piece", {"title": 0, "slug": 2}, "one-piece"]

Every dereference goes through :class:`Pool`, which never raises on bad
indices or unexpected shapes: absence and wrong type both come back as
``MISSING`` / ``None`` so callers can treat them as one recoverable case.
Each field is followed by at most one hop; the resolver never walks
unknown depth, so cyclic pools are harmless.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Sequence
from typing import Any, Union

from animeav1.domain.entities.catalog import EpisodeNumber, is_number

Cell = Union[None, str, int, float, bool, list[Any], dict[str, Any]]
Record = dict[str, Any]


class _Missing(enum.Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing.MISSING


def is_pointer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_present(cell: object) -> bool:
    """Resolved to a usable scalar (not missing, null or empty)."""
    return cell is not MISSING and cell is not None and cell != ""


class Pool:
    """Index-addressed view over one node's cells."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Sequence[Cell]) -> None:
        self._cells = cells

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Pool(size={len(self._cells)})"

    # ------------------------------------------------------------------
    # Index access
    # ------------------------------------------------------------------

    def resolve(self, index: object) -> Cell | _Missing:
        """Return the cell at *index*, or ``MISSING`` if it is not a valid pointer."""
        if not isinstance(index, int) or isinstance(index, bool):
            return MISSING
        if index < 0 or index >= len(self._cells):
            return MISSING
        return self._cells[index]

    def expect_number(self, index: object) -> EpisodeNumber | None:
        cell = self.resolve(index)
        return cell if is_number(cell) else None  # type: ignore[return-value]

    def expect_string(self, index: object) -> str | None:
        cell = self.resolve(index)
        return cell if isinstance(cell, str) else None

    def expect_array(self, index: object) -> list[Any] | None:
        cell = self.resolve(index)
        return cell if isinstance(cell, list) else None

    def expect_object(self, index: object) -> Record | None:
        cell = self.resolve(index)
        return cell if isinstance(cell, dict) else None

    # ------------------------------------------------------------------
    # Record fields (one hop)
    # ------------------------------------------------------------------

    def field(self, record: Record, name: str) -> Cell | _Missing:
        """Follow the pointer stored in ``record[name]``."""
        return self.resolve(record.get(name))

    def field_number(self, record: Record, name: str) -> EpisodeNumber | None:
        return self.expect_number(record.get(name))

    def field_string(self, record: Record, name: str) -> str | None:
        return self.expect_string(record.get(name))

    def field_array(self, record: Record, name: str) -> list[Any] | None:
        return self.expect_array(record.get(name))

    def field_object(self, record: Record, name: str) -> Record | None:
        return self.expect_object(record.get(name))

    def field_text(self, record: Record, name: str) -> str | None:
        """String stored inline or one pointer away."""
        raw = record.get(name)
        if isinstance(raw, str):
            return raw
        return self.expect_string(raw)

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def records(self) -> Iterator[Record]:
        """Object cells, in pool order."""
        for cell in self._cells:
            if isinstance(cell, dict):
                yield cell
