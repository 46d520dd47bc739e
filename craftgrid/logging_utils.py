"""craftgrid.logging_utils
=========================

Simple logging utilities, mainly for recording rejected recipe records so the
recipe table can be audited and fixed later.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from .constants import REJECT_LOG


def log_rejected(
    line_number: int | None,
    output: Any,
    rows: Sequence[Sequence[str]],
    reason: str,
    path: str | Path = REJECT_LOG,
) -> None:
    """Append a JSON line describing a rejected record to ``path``."""

    entry = {
        "line": line_number,
        "output": list(output) if isinstance(output, tuple) else output,
        "rows": [list(row) for row in rows],
        "reason": reason,
    }
    with Path(path).open("a") as handle:
        handle.write(json.dumps(entry) + "\n")


__all__ = ["log_rejected"]
