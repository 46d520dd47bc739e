"""craftgrid.registry
====================

:class:`RecipeRegistry` associates exactly one output with each equivalence
class of recipes. Keys are :class:`~craftgrid.recipe.Recipe` objects, whose
equality and hash are defined over their variant sets, so a plain ``dict``
gives expected O(1) registration and lookup even though each key stands for up
to ``width * height`` concrete layouts.

Two variant sets are either identical or disjoint: if they shared a layout,
both would be the set of in-bounds translations of that layout. Checking a new
recipe for *equality* with the registered keys is therefore the same as
checking it for *overlap*.

The registry does no locking. Registration must not race with other
registrations or lookups; concurrent lookups are fine once the table is built.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from .errors import DuplicateRecipeError
from .recipe import Recipe
from .types import Output


class RecipeRegistry:
    """In-memory mapping from recipe equivalence classes to outputs."""

    def __init__(self) -> None:
        self._entries: Dict[Recipe, Output] = {}

    def register(self, recipe: Recipe, output: Output) -> None:
        """Register ``output`` for the equivalence class of ``recipe``.

        Raises
        ------
        EmptyRecipeError
            ``recipe`` has no cells.
        DuplicateRecipeError
            A recipe with the same shape is already registered. The existing
            entry is left untouched.
        """

        recipe.variants()
        if recipe in self._entries:
            raise DuplicateRecipeError(recipe, self._entries[recipe], output)
        # Stored keys must never change hash after insertion.
        self._entries[recipe.copy()] = output

    def lookup(self, recipe: Recipe) -> Optional[Output]:
        """Return the output registered for ``recipe``'s shape, or ``None``."""

        recipe.variants()
        return self._entries.get(recipe)

    def outputs(self) -> List[Output]:
        return list(self._entries.values())

    def __contains__(self, recipe: object) -> bool:
        return isinstance(recipe, Recipe) and recipe in self._entries

    def __iter__(self) -> Iterator[Tuple[Recipe, Output]]:
        return iter(self._entries.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"RecipeRegistry({len(self)} recipes)"


__all__ = ["RecipeRegistry"]
