"""Video filters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mediapass.filters.coordinates import Dimension, Point

if TYPE_CHECKING:
    from mediapass.formats.base import Format
    from mediapass.media.base import Media


class PadFilter:
    """Scale to fit inside a frame, then pad to exactly that frame.

    Aspect ratio is preserved; the picture is placed at ``point`` inside
    the padded frame.
    """

    def __init__(
        self, dimension: Dimension, point: Point | None = None, priority: int = 0
    ) -> None:
        self.dimension = dimension
        self.point = point or Point()
        self._priority = priority

    @property
    def priority(self) -> int:
        return self._priority

    def apply(self, media: Media, format: Format) -> list[str]:
        w = self.dimension.width
        h = self.dimension.height
        # Commas inside min() must be escaped for the filtergraph parser
        scale = f"scale=iw*min({w}/iw\\,{h}/ih):ih*min({w}/iw\\,{h}/ih)"
        pad = f"pad={w}:{h}:{self.point.x}:{self.point.y}"
        return ["-vf", f"{scale},{pad}"]
