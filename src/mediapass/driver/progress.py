"""ffmpeg progress extraction and pass-aware progress listeners.

Only simple pattern extraction is done on ffmpeg's stderr status lines
(``frame= ... time=00:01:23.45 bitrate=... speed=2.0x``).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass
class FFmpegProgress:
    """Parsed ffmpeg status line."""

    frame: int | None = None
    fps: float | None = None
    bitrate: str | None = None
    total_size: int | None = None
    out_time_us: int | None = None  # Output time in microseconds
    speed: str | None = None

    @property
    def out_time_seconds(self) -> float | None:
        if self.out_time_us is not None:
            return self.out_time_us / 1_000_000
        return None

    @property
    def speed_factor(self) -> float | None:
        """Speed as a float ("2.0x" -> 2.0), or None if unknown."""
        if not self.speed:
            return None
        try:
            value = float(self.speed.rstrip("x"))
        except ValueError:
            return None
        return value if value > 0 else None

    def get_percent(self, duration_seconds: float | None) -> float:
        """Progress through the input as 0.0-100.0, or 0.0 if unknown."""
        if duration_seconds is None or duration_seconds <= 0:
            return 0.0
        out_time = self.out_time_seconds
        if out_time is None:
            return 0.0
        return min(100.0, (out_time / duration_seconds) * 100)


PROGRESS_PATTERNS = {
    "frame": re.compile(r"frame=\s*(\d+)"),
    "fps": re.compile(r"fps=\s*([\d.]+)"),
    "bitrate": re.compile(r"bitrate=\s*([^\s]+)"),
    "total_size": re.compile(r"(?:total_)?size=\s*(\d+)"),
    "speed": re.compile(r"speed=\s*([^\s]+)"),
}

_TIME_PATTERN = re.compile(r"time=(\d+):(\d+):(\d+)\.(\d+)")


def _convert_progress_value(key: str, value: str) -> int | float | str | None:
    if key in ("frame", "total_size"):
        try:
            return int(value)
        except ValueError:
            return None
    if key == "fps":
        try:
            return float(value)
        except ValueError:
            return None
    return value if value != "N/A" else None


def parse_stderr_progress(line: str) -> FFmpegProgress | None:
    """Parse an ffmpeg stderr status line.

    Audio-only encodes print ``size=`` without ``frame=``, so either marker
    counts as a status line.

    Args:
        line: A line from ffmpeg stderr.

    Returns:
        Parsed FFmpegProgress or None if not a status line.
    """
    if "time=" not in line or ("frame=" not in line and "size=" not in line):
        return None

    result = FFmpegProgress()

    for key, pattern in PROGRESS_PATTERNS.items():
        match = pattern.search(line)
        if match:
            converted = _convert_progress_value(key, match.group(1))
            if converted is not None:
                setattr(result, key, converted)

    time_match = _TIME_PATTERN.search(line)
    if time_match:
        hours = int(time_match.group(1))
        minutes = int(time_match.group(2))
        seconds = int(time_match.group(3))
        centiseconds = int(time_match.group(4)[:2].ljust(2, "0"))
        result.out_time_us = (
            hours * 3600 + minutes * 60 + seconds
        ) * 1_000_000 + centiseconds * 10_000

    return result


class ProgressListener(Protocol):
    """Receives every stderr line the driver reads while a pass runs."""

    def handle(self, line: str) -> None: ...


@dataclass(frozen=True)
class PassProgress:
    """Progress event delivered to format callbacks."""

    current_pass: int
    total_passes: int
    pass_percent: float
    """Progress of the running pass, 0-100."""

    percent: float
    """Progress of the whole save across all passes, 0-100."""

    remaining_seconds: float | None
    """Estimated time left in the running pass."""

    progress: FFmpegProgress


ProgressCallback = Callable[[PassProgress], None]


class PassProgressListener:
    """Turn status lines into pass-weighted PassProgress events.

    Every pass counts for an equal share of the overall percentage, so the
    second of two passes reports 50-100%.
    """

    def __init__(
        self,
        duration: float | None,
        current_pass: int,
        total_passes: int,
        callbacks: Iterable[ProgressCallback],
    ) -> None:
        self.duration = duration
        self.current_pass = current_pass
        self.total_passes = total_passes
        self._callbacks = list(callbacks)
        self._last_percent: float | None = None

    def handle(self, line: str) -> None:
        progress = parse_stderr_progress(line)
        if progress is None:
            return

        pass_percent = progress.get_percent(self.duration)
        percent = (
            (self.current_pass - 1) * 100.0 + pass_percent
        ) / self.total_passes
        percent = round(percent, 2)

        if percent == self._last_percent:
            return
        self._last_percent = percent

        event = PassProgress(
            current_pass=self.current_pass,
            total_passes=self.total_passes,
            pass_percent=round(pass_percent, 2),
            percent=percent,
            remaining_seconds=self._remaining(progress),
            progress=progress,
        )
        for callback in self._callbacks:
            callback(event)

    def _remaining(self, progress: FFmpegProgress) -> float | None:
        out_time = progress.out_time_seconds
        speed = progress.speed_factor
        if self.duration is None or out_time is None or speed is None:
            return None
        return max(0.0, (self.duration - out_time) / speed)
