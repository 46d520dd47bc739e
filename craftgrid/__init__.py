"""Public package interface for craftgrid."""

from .errors import DuplicateRecipeError, EmptyRecipeError, ImportFormatError, OutOfBoundsError
from .grid import DEFAULT_GRID, Grid
from .importer import ImporterConfig, import_recipes, load_recipes
from .recipe import Recipe, RecipeState
from .registry import RecipeRegistry
from .types import Margins, Output

__all__ = [
    "Grid",
    "DEFAULT_GRID",
    "Recipe",
    "RecipeState",
    "RecipeRegistry",
    "Margins",
    "Output",
    "ImporterConfig",
    "import_recipes",
    "load_recipes",
    "OutOfBoundsError",
    "EmptyRecipeError",
    "DuplicateRecipeError",
    "ImportFormatError",
]
