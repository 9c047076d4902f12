"""mediapass - ordered ffmpeg command assembly and multi-pass execution.

Usage:
    from mediapass import MediaPass, get_config
    from mediapass.formats import presets

    mediapass = MediaPass.create(get_config())
    video = mediapass.open("in.mp4")
    video.filters().pad(Dimension(1280, 720))
    video.save(presets.x264(), "out.mp4")
"""

from mediapass.config import get_config
from mediapass.domain import Capability, MediaKind
from mediapass.exceptions import (
    EncodingError,
    ExecutableNotFoundError,
    ExecutionFailureError,
    InvalidInputError,
    MediaPassError,
    ProbeError,
)
from mediapass.filters import Dimension, Point
from mediapass.formats import Format
from mediapass.media import Media, MediaPass, write_concat_descriptor

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Entry points
    "MediaPass",
    "Media",
    "Format",
    "get_config",
    "write_concat_descriptor",
    # Types
    "Capability",
    "Dimension",
    "MediaKind",
    "Point",
    # Errors
    "EncodingError",
    "ExecutableNotFoundError",
    "ExecutionFailureError",
    "InvalidInputError",
    "MediaPassError",
    "ProbeError",
]
