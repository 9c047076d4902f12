"""Output formats and presets."""

from mediapass.formats.base import AUDIO_ONLY, AUDIO_VIDEO, Format, with_overrides
from mediapass.formats.presets import PRESETS, get_preset

__all__ = [
    "AUDIO_ONLY",
    "AUDIO_VIDEO",
    "Format",
    "PRESETS",
    "get_preset",
    "with_overrides",
]
