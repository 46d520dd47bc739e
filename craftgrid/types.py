"""craftgrid.types
=================

Foundational type aliases and small value types used throughout the package.
Every module imports the same aliases from here so a reader jumping between the
recipe, registry and importer code always sees the same vocabulary.

The module stays definitions-only: importing it never triggers runtime side
effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Hashable, NamedTuple, Tuple

# ---------------------------------------------------------------------------
# Layout representations
# ---------------------------------------------------------------------------
ItemType = Hashable
Position = Tuple[int, int]
Placement = Dict[Position, ItemType]

# A variant is one concrete translation of a placement, frozen so that it can
# live inside a set. The variant set of a recipe is its equivalence class.
Cell = Tuple[Position, ItemType]
Variant = FrozenSet[Cell]
VariantSet = FrozenSet[Variant]


@dataclass(frozen=True)
class Margins:
    """Maximum shift of a placement in each direction while staying in bounds.

    ``left`` and ``bottom`` bound translations towards decreasing ``x`` and
    ``y``; ``right`` and ``top`` bound translations towards increasing ones.
    """

    top: int
    left: int
    right: int
    bottom: int

    def variant_count(self) -> int:
        """Number of distinct translations allowed by these margins."""

        return (self.left + self.right + 1) * (self.bottom + self.top + 1)


class Output(NamedTuple):
    """Payload registered against one equivalence class.

    Being a named tuple, ``Output("torch", 4) == ("torch", 4)`` holds, which
    keeps call sites that only care about the raw pair simple.
    """

    name: str
    quantity: int = 1


__all__ = [
    "ItemType",
    "Position",
    "Placement",
    "Cell",
    "Variant",
    "VariantSet",
    "Margins",
    "Output",
]
