"""craftgrid.constants
=====================

Global defaults shared across the package. Keeping them here avoids import
cycles between the importer, the encoders and the CLI, and makes the
configurable values easy to discover.
"""

from __future__ import annotations

DEFAULT_WIDTH = 3
DEFAULT_HEIGHT = 3
EMPTY_TOKEN = "-"
REJECT_LOG = "rejected_recipes.jsonl"

__all__ = ["DEFAULT_WIDTH", "DEFAULT_HEIGHT", "EMPTY_TOKEN", "REJECT_LOG"]
