"""craftgrid.encoders
====================

Textual encoding helpers for placements. The importer, the CLI and the tests
all need to go between a picture of a recipe and its sparse placement;
keeping the encoders here keeps the core free of presentation concerns.
"""

from __future__ import annotations

import re
from typing import List, Mapping, Protocol

from .constants import EMPTY_TOKEN
from .grid import Grid, placement_to_rows, rows_to_placement
from .types import ItemType, Placement, Position

TOKEN_SPLIT = re.compile(r"[,\s]+")


def tokenize(line: str) -> List[str]:
    """Split ``line`` on commas and/or whitespace, dropping empty tokens."""

    return [token for token in TOKEN_SPLIT.split(line.strip()) if token]


class PlacementEncoder(Protocol):
    """Interface for components converting placements to and from text.

    Implementations should be stateless; callers are free to reuse instances.
    """

    def to_text(self, placement: Mapping[Position, ItemType], grid: Grid) -> str:
        """Serialise ``placement`` into a human-readable picture."""

    def to_placement(self, text: str, grid: Grid) -> Placement:
        """Parse ``text`` back into a placement."""


class RowTextEncoder:
    """Rows of tokens, first row on top.

    Parameters
    ----------
    separator:
        Joins cells within a row when encoding. Decoding accepts commas and
        whitespace regardless.
    row_separator:
        Joins rows. ``"\\n"`` for tables, ``"/"`` for one-line queries.
    empty_token:
        Sentinel written for unoccupied cells.
    """

    def __init__(self, separator: str = " ", row_separator: str = "\n", empty_token: str = EMPTY_TOKEN) -> None:
        self.separator = separator
        self.row_separator = row_separator
        self.empty_token = empty_token

    def to_text(self, placement: Mapping[Position, ItemType], grid: Grid) -> str:
        rows = placement_to_rows(placement, grid, self.empty_token)
        width = max((len(token) for row in rows for token in row), default=1)
        if self.separator.strip():
            return self.row_separator.join(self.separator.join(row) for row in rows)
        return self.row_separator.join(
            self.separator.join(token.ljust(width) for token in row).rstrip() for row in rows
        )

    def to_placement(self, text: str, grid: Grid) -> Placement:
        lines = [line for line in text.strip().split(self.row_separator) if line.strip()]
        return rows_to_placement([tokenize(line) for line in lines], grid, self.empty_token)


DEFAULT_ENCODER: PlacementEncoder = RowTextEncoder()
"""Default encoder shared by modules that need a quick text representation."""


__all__ = [
    "tokenize",
    "PlacementEncoder",
    "RowTextEncoder",
    "DEFAULT_ENCODER",
]
