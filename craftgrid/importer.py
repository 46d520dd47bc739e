"""craftgrid.importer
===================

Reads recipe tables and fills a :class:`~craftgrid.registry.RecipeRegistry`.

A table is a sequence of records. Each record is a header line with the
output name and quantity, followed by exactly ``height`` rows of ``width``
tokens::

    # comments and blank lines are ignored
    torch, 4
    -     -     -
    -     coal  -
    -     stick -

Row tokens are separated by commas and/or whitespace. A header containing a
comma is split on the comma only, so output names may contain spaces
(``crafting table, 1``); without a comma the header splits on whitespace.
The empty token (``-`` by default) marks an unoccupied cell. The first row is
the top of the grid, see :mod:`craftgrid.grid` for the orientation rules.

Errors are raised to the caller by default. With ``skip_invalid`` enabled,
malformed and empty records are skipped, reported in the returned
:class:`ImportReport` and appended to the reject log. Duplicate shapes are
never skipped: they mean the table itself is inconsistent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, EMPTY_TOKEN, REJECT_LOG
from .encoders import tokenize
from .errors import EmptyRecipeError, ImportFormatError
from .grid import Grid, check_rows, rows_to_placement
from .logging_utils import log_rejected
from .recipe import Recipe
from .registry import RecipeRegistry
from .types import Output


@dataclass
class ImporterConfig:
    """Configuration for reading recipe tables.

    Parameters
    ----------
    width, height:
        Grid dimensions every record must match.
    empty_token:
        Sentinel for unoccupied cells.
    skip_invalid:
        Skip malformed or empty records instead of aborting the import.
    reject_log:
        JSONL file receiving skipped records. ``None`` disables the log.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    empty_token: str = EMPTY_TOKEN
    skip_invalid: bool = False
    reject_log: Optional[str] = REJECT_LOG

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.width}x{self.height}")
        if not self.empty_token or tokenize(self.empty_token) != [self.empty_token]:
            raise ValueError(f"Empty token must be a single non-blank token, got {self.empty_token!r}")

    @property
    def grid(self) -> Grid:
        return Grid(self.width, self.height)


@dataclass
class RecipeRecord:
    """One parsed record: the output and its raw token rows."""

    output: Output
    rows: List[List[str]]
    line_number: int
    row_lines: List[int] = field(default_factory=list)


@dataclass
class ImportReport:
    """Outcome of an import run."""

    registry: RecipeRegistry
    imported: int = 0
    rejected: List[Dict[str, Any]] = field(default_factory=list)


def split_header(line: str) -> List[str]:
    """Split a header into name and quantity.

    With a comma present only the comma separates, so names may contain
    spaces (``crafting table, 1``). Without one, whitespace separates.
    """

    if "," in line:
        return [part.strip() for part in line.split(",")]
    return tokenize(line)


def parse_header(tokens: List[str], line_number: int) -> Output:
    """Parse ``name, quantity`` into an :class:`Output`."""

    if len(tokens) != 2 or not tokens[0]:
        raise ImportFormatError(
            f"expected 'name, quantity' header, got {len(tokens)} tokens",
            line_number,
        )
    name, raw_quantity = tokens
    try:
        quantity = int(raw_quantity)
    except ValueError as exc:
        raise ImportFormatError(f"quantity {raw_quantity!r} is not an integer", line_number) from exc
    if quantity <= 0:
        raise ImportFormatError(f"quantity must be positive, got {quantity}", line_number)
    return Output(name, quantity)


def _blocks(lines: Iterable[str]) -> Iterator[List[Tuple[int, str]]]:
    """Group non-blank, non-comment lines into blank-line separated blocks."""

    block: List[Tuple[int, str]] = []
    for number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if stripped.startswith("#"):
            continue
        if not stripped:
            if block:
                yield block
                block = []
            continue
        block.append((number, stripped))
    if block:
        yield block


def _parse_block(block: List[Tuple[int, str]], grid: Grid) -> List[RecipeRecord]:
    """Split one block into records of a header plus ``grid.height`` rows."""

    span = grid.height + 1
    if len(block) % span:
        raise ImportFormatError(
            f"record block has {len(block)} lines, expected a multiple of {span} "
            f"(header + {grid.height} rows)",
            block[0][0],
        )
    records: List[RecipeRecord] = []
    for start in range(0, len(block), span):
        chunk = block[start:start + span]
        header_line, header = chunk[0]
        rows = [tokenize(text) for _, text in chunk[1:]]
        row_lines = [number for number, _ in chunk[1:]]
        output = parse_header(split_header(header), header_line)
        check_rows(rows, grid, row_lines)
        records.append(RecipeRecord(output=output, rows=rows, line_number=header_line, row_lines=row_lines))
    return records


def parse_records(lines: Iterable[str], config: ImporterConfig | None = None) -> Iterator[RecipeRecord]:
    """Yield one :class:`RecipeRecord` per record in ``lines``.

    Records may be separated by blank lines or written back to back; a block
    of consecutive lines must then hold a whole number of records. A
    malformed block raises :class:`ImportFormatError`.
    """

    config = config or ImporterConfig()
    grid = config.grid
    for block in _blocks(lines):
        yield from _parse_block(block, grid)


def build_recipe(record: RecipeRecord, grid: Grid, empty_token: str = EMPTY_TOKEN) -> Recipe:
    """Insert every non-empty token of ``record`` into a fresh recipe."""

    recipe = Recipe(grid)
    placement = rows_to_placement(record.rows, grid, empty_token, record.row_lines or None)
    for position, item in placement.items():
        recipe.insert(position, item)
    return recipe


def import_recipes(
    lines: Iterable[str],
    registry: RecipeRegistry | None = None,
    config: ImporterConfig | None = None,
) -> ImportReport:
    """Parse ``lines`` and register every record into ``registry``.

    Parameters
    ----------
    lines:
        Table text, one string per line.
    registry:
        Registry to fill; a new one is created when ``None``.
    config:
        Grid size, empty token and error policy.

    Raises
    ------
    ImportFormatError, EmptyRecipeError
        Unless ``config.skip_invalid`` is set.
    DuplicateRecipeError
        Always; two records with the same shape cannot both be honoured.
    """

    config = config or ImporterConfig()
    report = ImportReport(registry=registry if registry is not None else RecipeRegistry())
    grid = config.grid
    for block in _blocks(lines):
        try:
            records = _parse_block(block, grid)
        except ImportFormatError as exc:
            if not config.skip_invalid:
                raise
            _reject(report, config, exc.line_number, None, [tokenize(text) for _, text in block], str(exc))
            continue
        for record in records:
            try:
                recipe = build_recipe(record, grid, config.empty_token)
                report.registry.register(recipe, record.output)
            except (ImportFormatError, EmptyRecipeError) as exc:
                if not config.skip_invalid:
                    raise
                _reject(report, config, record.line_number, record.output, record.rows, str(exc))
                continue
            report.imported += 1
    return report


def load_recipes(
    path: str | Path,
    registry: RecipeRegistry | None = None,
    config: ImporterConfig | None = None,
) -> ImportReport:
    """Read the recipe table at ``path``; see :func:`import_recipes`."""

    with Path(path).open(encoding="utf-8") as handle:
        return import_recipes(handle, registry, config)


def _reject(
    report: ImportReport,
    config: ImporterConfig,
    line_number: int | None,
    output: Output | None,
    rows: List[List[str]],
    reason: str,
) -> None:
    report.rejected.append({"line": line_number, "output": output, "reason": reason})
    if config.reject_log:
        log_rejected(line_number, output, rows, reason, config.reject_log)


__all__ = [
    "ImporterConfig",
    "RecipeRecord",
    "ImportReport",
    "split_header",
    "parse_header",
    "parse_records",
    "build_recipe",
    "import_recipes",
    "load_recipes",
]
