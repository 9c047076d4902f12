"""Per-media filter registration helpers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from mediapass.exceptions import InvalidInputError
from mediapass.filters.audio import AudioMixFilter
from mediapass.filters.base import Filter, SimpleFilter
from mediapass.filters.coordinates import Dimension, Point
from mediapass.filters.video import PadFilter

if TYPE_CHECKING:
    from mediapass.media.base import Media


class MediaFilters:
    """Register filters on a media's chain.

    Returned by ``Media.filters()``. Every method returns this object so
    registrations can be chained::

        media.filters().pad(Dimension(1280, 720)).custom(["-an"])
    """

    def __init__(self, media: Media) -> None:
        self._media = media

    def add(self, item: Filter) -> MediaFilters:
        self._media.add_filter(item)
        return self

    def custom(self, params: Iterable[object], priority: int = 0) -> MediaFilters:
        """Add raw tokens as a filter."""
        return self.add(SimpleFilter(params, priority))

    def pad(
        self, dimension: Dimension, point: Point | None = None, priority: int = 0
    ) -> MediaFilters:
        """Scale and pad the picture to ``dimension``.

        Raises:
            InvalidInputError: If the media has no video.
        """
        if not self._media.has_video:
            raise InvalidInputError(
                f"Cannot pad {self._media.kind.value} media without video"
            )
        return self.add(PadFilter(dimension, point, priority))

    def audio_mix(self, count: int | None = None, priority: int = 0) -> MediaFilters:
        """Mix the audio of ``count`` inputs.

        Defaults to the primary input plus every auxiliary input registered
        so far.

        Raises:
            InvalidInputError: If the media has no audio.
        """
        if not self._media.has_audio:
            raise InvalidInputError(
                f"Cannot mix audio on {self._media.kind.value} media"
            )
        if count is None:
            count = 1 + len(self._media.input_files)
        return self.add(AudioMixFilter(count, priority))
