"""Path helpers for analyzer input/output locations.

Environment-first, falling back to locations relative to the current
working directory.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_OUTPUT_NAME = "output.json"


def default_output_path() -> Path:
    """Where results go when no output path is given.

    Order: env var TTT_OUTPUT_PATH -> ``output.json`` in the CWD.
    """
    p = os.getenv("TTT_OUTPUT_PATH")
    return Path(p) if p else Path(DEFAULT_OUTPUT_NAME)


def resolve_output_path(explicit: Path | None) -> Path:
    return explicit if explicit is not None else default_output_path()


def ensure_parent_dir(path: Path) -> None:
    parent = path.parent
    if str(parent) not in ("", "."):
        parent.mkdir(parents=True, exist_ok=True)
