"""craftgrid.grid
================

The fixed-size coordinate space recipes live on, plus helpers converting
between token rows (the way recipes are written down) and sparse placements
(the way recipes are stored).

Orientation is fixed here and used by every caller: the **first row is the
highest ``y``**, and the column index within a row is ``x``. A 3x3 table
therefore reads like a picture, with ``(0, 0)`` in the bottom-left corner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence, Tuple

import numpy as np

from .constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, EMPTY_TOKEN
from .errors import ImportFormatError
from .types import ItemType, Placement, Position


@dataclass(frozen=True)
class Grid:
    """Width x height space that only knows whether a position is in bounds."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.width}x{self.height}")

    def contains(self, position: Any) -> bool:
        """Return ``True`` iff ``0 <= x < width`` and ``0 <= y < height``."""

        try:
            x, y = position
        except (TypeError, ValueError):
            return False
        for value in (x, y):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                return False
        return 0 <= x < self.width and 0 <= y < self.height

    @property
    def shape(self) -> Tuple[int, int]:
        """``(height, width)``, matching numpy's row-major convention."""

        return self.height, self.width


DEFAULT_GRID = Grid(DEFAULT_WIDTH, DEFAULT_HEIGHT)


# ---------------------------------------------------------------------------
# Row <-> placement conversion
# ---------------------------------------------------------------------------
def check_rows(
    rows: Sequence[Sequence[str]],
    grid: Grid,
    line_numbers: Sequence[int] | None = None,
) -> None:
    """Raise :class:`ImportFormatError` unless ``rows`` is ``height x width``.

    ``line_numbers`` holds the source line of each row, when known.
    """

    if len(rows) != grid.height:
        raise ImportFormatError(
            f"expected {grid.height} rows, got {len(rows)}",
            line_numbers[0] if line_numbers else None,
        )
    for index, row in enumerate(rows):
        if len(row) != grid.width:
            raise ImportFormatError(
                f"row {index + 1} has {len(row)} tokens, expected {grid.width}",
                line_numbers[index] if line_numbers else None,
            )


def rows_to_placement(
    rows: Sequence[Sequence[str]],
    grid: Grid,
    empty_token: str = EMPTY_TOKEN,
    line_numbers: Sequence[int] | None = None,
) -> Placement:
    """Convert ``height`` rows of ``width`` tokens into a sparse placement.

    Parameters
    ----------
    rows:
        Token rows, first row being the highest ``y``.
    grid:
        Grid the rows must fill exactly.
    empty_token:
        Sentinel marking an unoccupied cell. It never reaches the placement.
    line_numbers:
        Source line of each row, only used to annotate errors.

    Returns
    -------
    Placement
        Mapping of ``(x, y)`` to token for every non-empty cell, in row-major
        reading order.
    """

    check_rows(rows, grid, line_numbers)
    tokens = np.array([list(row) for row in rows], dtype=object)
    placement: Placement = {}
    for row, col in np.argwhere(tokens != empty_token):
        placement[(int(col), grid.height - 1 - int(row))] = tokens[row, col]
    return placement


def placement_to_rows(
    placement: Mapping[Position, ItemType],
    grid: Grid,
    empty_token: str = EMPTY_TOKEN,
) -> List[List[str]]:
    """Render ``placement`` as token rows, the inverse of :func:`rows_to_placement`."""

    canvas = np.full(grid.shape, empty_token, dtype=object)
    for (x, y), item in placement.items():
        canvas[grid.height - 1 - y, x] = str(item)
    return [list(row) for row in canvas.tolist()]


__all__ = [
    "Grid",
    "DEFAULT_GRID",
    "check_rows",
    "rows_to_placement",
    "placement_to_rows",
]
