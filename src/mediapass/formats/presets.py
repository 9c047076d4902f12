"""Ready-made formats for common containers.

Each preset is a factory so callers get a fresh Format they can attach
progress callbacks to.
"""

from __future__ import annotations

from collections.abc import Callable

from mediapass.exceptions import InvalidInputError
from mediapass.formats.base import AUDIO_ONLY, AUDIO_VIDEO, Format


def x264(
    audio_codec: str = "aac", video_codec: str = "libx264", passes: int = 2
) -> Format:
    """H.264 video; two passes by default."""
    return Format(
        video_codec=video_codec,
        audio_codec=audio_codec,
        passes=passes,
        capabilities=AUDIO_VIDEO,
    )


def webm(audio_codec: str = "libvorbis", video_codec: str = "libvpx") -> Format:
    return Format(
        video_codec=video_codec,
        audio_codec=audio_codec,
        extra_params=("-f", "webm"),
        capabilities=AUDIO_VIDEO,
    )


def wmv(audio_codec: str = "wmav2", video_codec: str = "wmv2") -> Format:
    return Format(
        video_codec=video_codec, audio_codec=audio_codec, capabilities=AUDIO_VIDEO
    )


def ogg(audio_codec: str = "libvorbis", video_codec: str = "libtheora") -> Format:
    return Format(
        video_codec=video_codec, audio_codec=audio_codec, capabilities=AUDIO_VIDEO
    )


def mp3(audio_codec: str = "libmp3lame") -> Format:
    return Format(audio_codec=audio_codec, capabilities=AUDIO_ONLY)


def aac(audio_codec: str = "aac") -> Format:
    return Format(audio_codec=audio_codec, capabilities=AUDIO_ONLY)


def flac(audio_codec: str = "flac") -> Format:
    return Format(audio_codec=audio_codec, capabilities=AUDIO_ONLY)


def vorbis(audio_codec: str = "vorbis") -> Format:
    # The native vorbis encoder is experimental in ffmpeg
    return Format(
        audio_codec=audio_codec,
        extra_params=("-strict", "-2"),
        capabilities=AUDIO_ONLY,
    )


def wav(audio_codec: str = "pcm_s16le") -> Format:
    return Format(audio_codec=audio_codec, capabilities=AUDIO_ONLY)


PRESETS: dict[str, Callable[[], Format]] = {
    "x264": x264,
    "webm": webm,
    "wmv": wmv,
    "ogg": ogg,
    "mp3": mp3,
    "aac": aac,
    "flac": flac,
    "vorbis": vorbis,
    "wav": wav,
}


def get_preset(name: str) -> Format:
    """Build the preset registered under name.

    Raises:
        InvalidInputError: If name is not a known preset.
    """
    try:
        factory = PRESETS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(PRESETS))
        raise InvalidInputError(
            f"Unknown format preset '{name}'. Known presets: {known}"
        ) from None
    return factory()
