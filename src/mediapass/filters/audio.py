"""Audio filters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mediapass.exceptions import InvalidInputError

if TYPE_CHECKING:
    from mediapass.formats.base import Format
    from mediapass.media.base import Media


class AudioMixFilter:
    """Mix ``count`` audio inputs into one stream with ``amix``.

    The mix lasts as long as the first input.
    """

    def __init__(self, count: int, priority: int = 0) -> None:
        if count < 1:
            raise InvalidInputError(f"Input count must be at least 1, got {count}")
        self.count = count
        self._priority = priority

    @property
    def priority(self) -> int:
        return self._priority

    def apply(self, media: Media, format: Format) -> list[str]:
        return [
            "-filter_complex",
            f"amix=inputs={self.count}:duration=first:dropout_transition=3",
        ]
