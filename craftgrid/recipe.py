"""craftgrid.recipe
==================

:class:`Recipe` is a sparse placement of item types on a :class:`Grid` whose
identity is its *shape*, not its absolute position. Every in-bounds
translation of a recipe is a variant of it, and two recipes are equal when
their sets of variants are equal.

The expensive part, enumerating variants, is paid once per recipe. Insertion
keeps the four shift margins up to date incrementally so that the variant set
can be built directly from them, and the resulting frozenset is cached until
the next insertion. A recipe is therefore in one of two states:

``BUILDING``
    cells are still being inserted; no variant set is held.
``FINALIZED``
    the variant set has been computed and is served from the cache.

Any :meth:`Recipe.insert` moves a finalized recipe back to ``BUILDING``.

Recipes are mutable and hashable at the same time. That is only safe while a
recipe is not mutated after being used as a dictionary key, which is why
:class:`~craftgrid.registry.RecipeRegistry` stores private copies.
"""

from __future__ import annotations

import math
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .errors import EmptyRecipeError, OutOfBoundsError
from .grid import DEFAULT_GRID, Grid
from .types import ItemType, Margins, Placement, Position, Variant, VariantSet


class RecipeState(Enum):
    """Lifecycle of a recipe's variant cache."""

    BUILDING = "building"
    FINALIZED = "finalized"


class Recipe:
    """Sparse item placement compared by translation equivalence.

    Parameters
    ----------
    grid:
        Bounds every inserted position must respect. Defaults to 3x3.
    placement:
        Optional initial cells, applied through :meth:`insert` one by one so
        the margins are tracked exactly as for incremental construction.
    """

    def __init__(self, grid: Grid = DEFAULT_GRID, placement: Optional[Mapping[Position, ItemType]] = None) -> None:
        self.grid = grid
        self._placement: Placement = {}
        self._top = math.inf
        self._left = math.inf
        self._right = math.inf
        self._bottom = math.inf
        self._variants: VariantSet | None = None
        if placement:
            for position, item in placement.items():
                self.insert(position, item)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def insert(self, position: Position, item_type: ItemType) -> None:
        """Place ``item_type`` at ``position``.

        An occupied position is overwritten (last write wins). Out-of-bounds
        positions raise :class:`OutOfBoundsError` before anything changes.
        """

        if not self.grid.contains(position):
            raise OutOfBoundsError(position, self.grid.width, self.grid.height)
        x, y = int(position[0]), int(position[1])
        self._placement[(x, y)] = item_type
        self._left = min(self._left, x)
        self._right = min(self._right, self.grid.width - 1 - x)
        self._bottom = min(self._bottom, y)
        self._top = min(self._top, self.grid.height - 1 - y)
        self._variants = None

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    @property
    def state(self) -> RecipeState:
        return RecipeState.BUILDING if self._variants is None else RecipeState.FINALIZED

    @property
    def placement(self) -> Mapping[Position, ItemType]:
        """Read-only view of the occupied cells."""

        return MappingProxyType(self._placement)

    def margins(self) -> Margins:
        """Current shift bounds; :class:`EmptyRecipeError` before the first insert."""

        if not self._placement:
            raise EmptyRecipeError("Margins are undefined for a recipe with no items")
        return Margins(
            top=int(self._top),
            left=int(self._left),
            right=int(self._right),
            bottom=int(self._bottom),
        )

    def variants(self) -> VariantSet:
        """Return every in-bounds translation of the placement.

        The result has exactly ``(left + right + 1) * (bottom + top + 1)``
        elements, since distinct shifts of a non-empty placement never
        coincide. It is computed on first use and cached until the next
        :meth:`insert`.
        """

        if self._variants is None:
            margins = self.margins()
            cells = tuple(self._placement.items())
            self._variants = frozenset(
                _shift(cells, dx, dy)
                for dx in range(-margins.left, margins.right + 1)
                for dy in range(-margins.bottom, margins.top + 1)
            )
        return self._variants

    def normalized(self) -> Variant:
        """The variant pushed as far towards ``(0, 0)`` as the margins allow."""

        margins = self.margins()
        return _shift(tuple(self._placement.items()), -margins.left, -margins.bottom)

    def copy(self) -> "Recipe":
        clone = type(self)(self.grid)
        clone._placement = dict(self._placement)
        clone._top, clone._left = self._top, self._left
        clone._right, clone._bottom = self._right, self._bottom
        clone._variants = self._variants
        return clone

    # ------------------------------------------------------------------
    # Equality contract
    # ------------------------------------------------------------------
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        if self is other:
            return True
        return self.grid == other.grid and self.variants() == other.variants()

    def __hash__(self) -> int:
        # frozenset hashing is order independent and memoised by CPython.
        return hash(self.variants())

    def __len__(self) -> int:
        return len(self._placement)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        cells = ", ".join(f"{pos}: {item!r}" for pos, item in sorted(self._placement.items(), key=_cell_key))
        return f"Recipe({self.grid.width}x{self.grid.height}, {{{cells}}})"


def _shift(cells: tuple, dx: int, dy: int) -> Variant:
    return frozenset(((x + dx, y + dy), item) for (x, y), item in cells)


def _cell_key(cell: tuple) -> tuple:
    (x, y), _ = cell
    return (y, x)


__all__ = ["Recipe", "RecipeState"]
