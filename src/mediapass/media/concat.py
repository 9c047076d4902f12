"""Concat demuxer descriptor files.

A descriptor lists the segments ``Media.loop`` feeds to ffmpeg's concat
demuxer, one ``file '<path>'`` line per segment. Segments are written as
absolute paths, so a descriptor works wherever it is stored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from mediapass.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


def escape_concat_path(path: Path | str) -> str:
    """Quote a path for a concat descriptor line."""
    # Close the quote, emit an escaped quote, reopen
    return "'" + str(path).replace("'", "'\\''") + "'"


def write_concat_descriptor(
    segments: Iterable[Path | str], path: Path | str
) -> Path:
    """Write a concat descriptor listing segments in order.

    Args:
        segments: Segment files, in playback order. Relative paths are
            resolved against the current working directory.
        path: Descriptor file to create or overwrite.

    Returns:
        The descriptor path.

    Raises:
        InvalidInputError: If segments is empty.
    """
    lines = [
        f"file {escape_concat_path(Path(segment).resolve())}" for segment in segments
    ]
    if not lines:
        raise InvalidInputError("A concat descriptor needs at least one segment")

    path = Path(path)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.debug("Wrote concat descriptor %s (%d segments)", path, len(lines))
    return path
