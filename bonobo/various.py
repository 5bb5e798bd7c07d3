"""Small file helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from bonobo.log import Logger, LogType


def slurp_file(path: str | Path, logger: Optional[Logger] = None) -> str:
    """Return the text of ``path`` up to any NUL, or "" if it cannot be opened."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as handle:
            content = handle.read()
    except OSError:
        if logger is not None:
            logger.report(
                0, __file__, "slurp_file", -1, LogType.ERROR,
                'Failed to open "%s"', str(path),
            )
        return ""
    return content.split("\0", 1)[0]