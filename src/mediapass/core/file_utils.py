"""Output file helpers."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def remove_partial_output(path: Path | str) -> None:
    """Remove a partially written output file, logging any errors.

    A missing file is not an error.

    Args:
        path: Output path of the failed encode.
    """
    path = Path(path)
    if path.exists():
        try:
            path.unlink()
            logger.debug("Removed partial output: %s", path)
        except OSError as e:
            logger.warning("Could not remove partial output %s: %s", path, e)
