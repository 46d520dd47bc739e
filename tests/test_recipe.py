from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from craftgrid.encoders import DEFAULT_ENCODER
from craftgrid.errors import EmptyRecipeError, OutOfBoundsError
from craftgrid.grid import DEFAULT_GRID, Grid, placement_to_rows, rows_to_placement
from craftgrid.recipe import Recipe, RecipeState
from craftgrid.types import Margins


def make_recipe(placement, grid=DEFAULT_GRID):
    return Recipe(grid, placement)


def test_grid_contains_bounds():
    grid = Grid(3, 2)
    assert grid.contains((0, 0))
    assert grid.contains((2, 1))
    assert not grid.contains((3, 0))
    assert not grid.contains((0, 2))
    assert not grid.contains((-1, 0))
    assert not grid.contains("xy")


def test_grid_rejects_non_positive_dimensions():
    with pytest.raises(ValueError):
        Grid(0, 3)


def test_margins_two_cells_bottom_row():
    recipe = Recipe(Grid(3, 3))
    recipe.insert((0, 0), "plank")
    recipe.insert((1, 0), "plank")
    assert recipe.margins() == Margins(top=2, left=0, right=1, bottom=0)


def test_first_insert_sets_all_margins_exactly():
    recipe = Recipe(Grid(5, 4))
    recipe.insert((1, 3), "gem")
    assert recipe.margins() == Margins(top=0, left=1, right=3, bottom=3)


def test_center_item_has_nine_variants():
    recipe = make_recipe({(1, 1): "diamond"})
    assert recipe.margins() == Margins(top=1, left=1, right=1, bottom=1)
    variants = recipe.variants()
    assert len(variants) == 9
    assert frozenset({((0, 0), "diamond")}) in variants
    assert frozenset({((2, 2), "diamond")}) in variants


def test_variant_count_matches_margins():
    recipe = make_recipe({(0, 0): "a", (1, 1): "b"}, Grid(4, 3))
    margins = recipe.margins()
    assert margins == Margins(top=1, left=0, right=2, bottom=0)
    assert len(recipe.variants()) == margins.variant_count() == 6


def test_full_row_cannot_shift_sideways():
    recipe = make_recipe({(0, 2): "wool", (1, 2): "wool", (2, 2): "wool"})
    assert len(recipe.variants()) == 3


def test_translation_is_equal_and_hashes_alike():
    base = make_recipe({(0, 0): "stick", (0, 1): "coal"})
    shifted = make_recipe({(2, 1): "stick", (2, 2): "coal"})
    assert base == shifted
    assert shifted == base
    assert hash(base) == hash(shifted)


def test_different_shape_is_not_equal_even_when_cells_overlap():
    vertical = make_recipe({(1, 0): "stick", (1, 1): "coal"})
    diagonal = make_recipe({(1, 0): "stick", (2, 1): "coal"})
    assert vertical != diagonal


def test_swapped_items_are_not_equal():
    first = make_recipe({(1, 0): "stick", (1, 1): "coal"})
    second = make_recipe({(1, 0): "coal", (1, 1): "stick"})
    assert first != second


def test_mirror_image_is_not_equal():
    left_hand = make_recipe({(0, 0): "iron", (0, 1): "iron", (1, 1): "iron"})
    right_hand = make_recipe({(1, 0): "iron", (1, 1): "iron", (0, 1): "iron"})
    assert left_hand != right_hand


def test_variants_idempotent_and_cached():
    recipe = make_recipe({(1, 1): "coal"})
    assert recipe.state is RecipeState.BUILDING
    first = recipe.variants()
    assert recipe.state is RecipeState.FINALIZED
    assert recipe.variants() is first
    assert recipe.variants() == first


def test_insert_invalidates_cached_variants():
    recipe = make_recipe({(1, 1): "coal"})
    before = recipe.variants()
    recipe.insert((1, 2), "stick")
    assert recipe.state is RecipeState.BUILDING
    after = recipe.variants()
    assert after != before
    assert len(after) == 6


def test_reinsert_overwrites_item():
    recipe = Recipe()
    recipe.insert((1, 1), "coal")
    recipe.insert((1, 1), "charcoal")
    assert dict(recipe.placement) == {(1, 1): "charcoal"}
    assert len(recipe) == 1
    assert recipe == make_recipe({(0, 0): "charcoal"})


def test_out_of_bounds_insert_leaves_recipe_unchanged():
    recipe = make_recipe({(1, 1): "coal"})
    variants = recipe.variants()
    with pytest.raises(OutOfBoundsError):
        recipe.insert((3, 0), "stick")
    assert dict(recipe.placement) == {(1, 1): "coal"}
    assert recipe.margins() == Margins(top=1, left=1, right=1, bottom=1)
    assert recipe.state is RecipeState.FINALIZED
    assert recipe.variants() is variants


def test_out_of_bounds_is_an_index_error():
    with pytest.raises(IndexError):
        Recipe().insert((0, -1), "stick")


def test_empty_recipe_errors():
    recipe = Recipe()
    with pytest.raises(EmptyRecipeError):
        recipe.variants()
    with pytest.raises(EmptyRecipeError):
        recipe.margins()
    with pytest.raises(EmptyRecipeError):
        hash(recipe)


def test_recipes_on_different_grids_are_not_equal():
    small = make_recipe({(0, 0): "coal"}, Grid(2, 2))
    large = make_recipe({(0, 0): "coal"}, Grid(3, 3))
    assert small != large


def test_copy_is_independent():
    recipe = make_recipe({(0, 0): "coal"})
    clone = recipe.copy()
    recipe.insert((1, 0), "stick")
    assert dict(clone.placement) == {(0, 0): "coal"}
    assert clone != recipe


def test_normalized_anchors_at_origin():
    recipe = make_recipe({(2, 2): "coal", (2, 1): "stick"})
    assert recipe.normalized() == frozenset({((0, 1), "coal"), ((0, 0), "stick")})


def test_rows_use_top_row_as_highest_y():
    rows = [["-", "coal", "-"], ["-", "stick", "-"], ["-", "-", "-"]]
    placement = rows_to_placement(rows, DEFAULT_GRID)
    assert placement == {(1, 2): "coal", (1, 1): "stick"}
    assert placement_to_rows(placement, DEFAULT_GRID) == rows


def test_default_encoder_renders_picture():
    placement = DEFAULT_ENCODER.to_placement("- - -\n- coal -\n- stick -", DEFAULT_GRID)
    assert placement == {(1, 1): "coal", (1, 0): "stick"}
    text = DEFAULT_ENCODER.to_text(placement, DEFAULT_GRID)
    assert text.splitlines()[1].split() == ["-", "coal", "-"]


def test_bool_position_is_out_of_bounds():
    recipe = Recipe()
    assert not DEFAULT_GRID.contains((True, False))
    with pytest.raises(OutOfBoundsError):
        recipe.insert((True, False), "stick")
    assert len(recipe) == 0
