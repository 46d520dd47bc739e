"""craftgrid.cli
===============

Command-line front end: import a recipe table, then answer shape queries
against it. The CLI is a thin collaborator over the core and only ever calls
:func:`~craftgrid.importer.load_recipes`, :meth:`Recipe.variants`,
:meth:`RecipeRegistry.lookup` and the encoders.

Example::

    craftgrid recipes.txt --query "-,-,-/-,coal,-/-,stick,-"
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List

from .constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, EMPTY_TOKEN, REJECT_LOG
from .encoders import RowTextEncoder
from .errors import CraftGridError
from .importer import ImporterConfig, load_recipes
from .recipe import Recipe
from .registry import RecipeRegistry


def answer_query(layout: str, registry: RecipeRegistry, config: ImporterConfig) -> Dict[str, Any]:
    """Resolve one ``/``-separated layout against ``registry``."""

    grid = config.grid
    encoder = RowTextEncoder(separator=",", row_separator="/", empty_token=config.empty_token)
    recipe = Recipe(grid, encoder.to_placement(layout, grid))
    output = registry.lookup(recipe)
    return {
        "query": layout,
        "match": output is not None,
        "output": None if output is None else {"name": output.name, "quantity": output.quantity},
        "variants": len(recipe.variants()),
        "recipe": recipe,
    }


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, import the table and answer queries."""

    parser = argparse.ArgumentParser("craftgrid", description="Shape-equivalence recipe matcher")
    parser.add_argument("recipes", help="Recipe table (header line + grid rows per record)")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Grid width")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Grid height")
    parser.add_argument("--empty", default=EMPTY_TOKEN, help="Token marking an empty cell")
    parser.add_argument("--skip-invalid", action="store_true", help="Skip malformed or empty records")
    parser.add_argument("--reject-log", default=REJECT_LOG, help="JSONL file receiving skipped records")
    parser.add_argument(
        "--query",
        action="append",
        default=[],
        help="Layout to look up, rows separated by '/' (top row first); may be repeated",
    )
    parser.add_argument("--show-variants", action="store_true", help="Print every variant of each query")
    parser.add_argument("--outfile", default=None, help="Write query results as JSON")
    args = parser.parse_args(argv)

    try:
        config = ImporterConfig(
            width=args.width,
            height=args.height,
            empty_token=args.empty,
            skip_invalid=args.skip_invalid,
            reject_log=args.reject_log or None,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        report = load_recipes(args.recipes, config=config)
    except (CraftGridError, OSError) as exc:
        print(f"Import failed: {exc}")
        return 1
    print(f"Imported {report.imported} recipes from {args.recipes}.")
    if report.rejected:
        print(f"Skipped {len(report.rejected)} records (details in {config.reject_log}):")
        for entry in report.rejected:
            print(f"   -> {entry['reason']}")

    results: List[Dict[str, Any]] = []
    status = 0
    for index, layout in enumerate(args.query, start=1):
        try:
            result = answer_query(layout, report.registry, config)
        except CraftGridError as exc:
            print(f"[{index}/{len(args.query)}] Query {layout!r} rejected: {exc}")
            results.append({"query": layout, "match": False, "output": None, "error": str(exc)})
            status = 1
            continue
        recipe = result.pop("recipe")
        if result["match"]:
            output = result["output"]
            print(f"[{index}/{len(args.query)}] MATCH {output['name']} x{output['quantity']}")
        else:
            print(f"[{index}/{len(args.query)}] NO MATCH ({result['variants']} equivalent layouts)")
        if args.show_variants:
            display = RowTextEncoder(empty_token=config.empty_token)
            for variant in sorted(recipe.variants(), key=_variant_key):
                print(display.to_text(dict(variant), config.grid))
                print()
        results.append(result)

    if args.outfile:
        Path(args.outfile).write_text(json.dumps(results, indent=2))
        print(f"Query results saved to {args.outfile}")
    return status


def _variant_key(variant: frozenset) -> list:
    return sorted((y, x, str(item)) for (x, y), item in variant)


__all__ = ["main", "answer_query"]
