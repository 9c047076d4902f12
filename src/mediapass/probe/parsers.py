"""Pure parsing functions for ffprobe JSON output.

All functions are pure (no I/O, no side effects) for easy testing.
"""

from __future__ import annotations

import logging
from typing import Any

from mediapass.probe.interface import StreamCollection, StreamDescriptor

logger = logging.getLogger(__name__)


def _parse_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed >= 0 else None


def _parse_float(value: Any) -> float | None:
    if value is None or value == "N/A":
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed >= 0 else None


def parse_stream(data: dict[str, Any]) -> StreamDescriptor:
    """Build a StreamDescriptor from one entry of ffprobe's ``streams`` list."""
    return StreamDescriptor(
        index=_parse_int(data.get("index")) or 0,
        codec_type=str(data.get("codec_type") or "data"),
        codec_name=data.get("codec_name"),
        width=_parse_int(data.get("width")),
        height=_parse_int(data.get("height")),
        channels=_parse_int(data.get("channels")),
        duration=_parse_float(data.get("duration")),
        bit_rate=_parse_int(data.get("bit_rate")),
    )


def parse_ffprobe_output(data: dict[str, Any]) -> StreamCollection:
    """Convert ffprobe ``-show_streams -show_format`` JSON into a StreamCollection.

    Container duration is taken from ``format.duration``; when absent the
    longest stream duration is used.

    Args:
        data: Parsed JSON document.

    Returns:
        StreamCollection with streams sorted by index.
    """
    streams = sorted(
        (parse_stream(s) for s in data.get("streams", []) if isinstance(s, dict)),
        key=lambda s: s.index,
    )

    duration = _parse_float(data.get("format", {}).get("duration"))
    if duration is None:
        durations = [s.duration for s in streams if s.duration is not None]
        if durations:
            duration = max(durations)
        else:
            logger.debug("No duration found in ffprobe output")

    return StreamCollection(streams=tuple(streams), duration=duration)
