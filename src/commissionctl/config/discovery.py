"""Locate the ``commissionctl.toml`` that applies to a run.

``COMMISSIONCTL_CONFIG`` names a file explicitly; otherwise the nearest
``commissionctl.toml`` in the start directory or any of its ancestors wins.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "commissionctl.toml"
CONFIG_ENV_VAR = "COMMISSIONCTL_CONFIG"


def _search_dirs(start: Path) -> Iterator[Path]:
    resolved = start.resolve()
    yield resolved
    yield from resolved.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for a run started in *start* (default: cwd).

    An explicit ``COMMISSIONCTL_CONFIG`` that points nowhere yields None
    rather than falling back to the directory search.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        named = Path(explicit)
        return named if named.is_file() else None

    return next(
        (
            directory / CONFIG_FILENAME
            for directory in _search_dirs(start or Path.cwd())
            if (directory / CONFIG_FILENAME).is_file()
        ),
        None,
    )
