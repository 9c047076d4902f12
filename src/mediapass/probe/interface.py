"""Prober interface and stream descriptor types."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class StreamDescriptor:
    """One stream of a probed file."""

    index: int
    codec_type: str
    """"video", "audio", "subtitle", "data" or "attachment"."""

    codec_name: str | None = None
    width: int | None = None
    height: int | None = None
    channels: int | None = None
    duration: float | None = None
    bit_rate: int | None = None

    @property
    def is_video(self) -> bool:
        return self.codec_type == "video"

    @property
    def is_audio(self) -> bool:
        return self.codec_type == "audio"


@dataclass(frozen=True)
class StreamCollection:
    """All streams of a probed file plus container-level duration."""

    streams: tuple[StreamDescriptor, ...] = field(default_factory=tuple)
    duration: float | None = None

    def videos(self) -> list[StreamDescriptor]:
        """Return the video streams in index order."""
        return [s for s in self.streams if s.is_video]

    def audios(self) -> list[StreamDescriptor]:
        """Return the audio streams in index order."""
        return [s for s in self.streams if s.is_audio]

    def __len__(self) -> int:
        return len(self.streams)


class Prober(Protocol):
    """Protocol for probing services.

    A prober inspects stream metadata without decoding. Implementations
    return None (or raise ProbeError) when a file cannot be understood.
    """

    def streams(self, path: Path | str) -> StreamCollection | None:
        """Probe a file.

        Args:
            path: File to inspect.

        Returns:
            StreamCollection, or None if the file could not be probed.

        Raises:
            ProbeError: If the probe itself fails.
        """
        ...
