"""craftgrid.errors
==================

Exception taxonomy. None of these conditions are transient, so nothing in the
package retries: each error is raised to the immediate caller, which decides
whether to skip a record or abort the whole import.
"""

from __future__ import annotations

from typing import Any


class CraftGridError(Exception):
    """Base class for every error raised by craftgrid."""


class OutOfBoundsError(CraftGridError, IndexError):
    """A position outside the grid was given to :meth:`Recipe.insert`."""

    def __init__(self, position: Any, width: int, height: int) -> None:
        super().__init__(f"Position {position!r} is outside the {width}x{height} grid")
        self.position = position
        self.width = width
        self.height = height


class EmptyRecipeError(CraftGridError, ValueError):
    """An equivalence operation was requested on a recipe with no cells."""

    def __init__(self, message: str = "Recipe has no items; nothing to match") -> None:
        super().__init__(message)


class DuplicateRecipeError(CraftGridError, ValueError):
    """A recipe's equivalence class is already registered.

    Two recipe rows that differ only by a shift describe the same recipe. The
    registry refuses the second one and reports both outputs so the operator
    can fix the table.
    """

    def __init__(self, recipe: Any, existing: Any, output: Any) -> None:
        super().__init__(
            f"Recipe for {output!r} has the same shape as the recipe already "
            f"registered for {existing!r}: {recipe!r}"
        )
        self.recipe = recipe
        self.existing = existing
        self.output = output


class ImportFormatError(CraftGridError, ValueError):
    """A recipe record could not be parsed."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        prefix = f"line {line_number}: " if line_number is not None else ""
        super().__init__(prefix + message)
        self.line_number = line_number


__all__ = [
    "CraftGridError",
    "OutOfBoundsError",
    "EmptyRecipeError",
    "DuplicateRecipeError",
    "ImportFormatError",
]
