"""Format options shared by the transcode and loop commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from mediapass.formats.base import AUDIO_ONLY, AUDIO_VIDEO, Format, with_overrides
from mediapass.formats.presets import PRESETS, get_preset


def format_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add --preset, codec, bitrate, channel, pass and parameter options."""
    options = [
        click.option(
            "--preset",
            type=click.Choice(sorted(PRESETS), case_sensitive=False),
            default=None,
            help="Start from a format preset; other options override it.",
        ),
        click.option("--video-codec", default=None, help="Video codec, e.g. libx264."),
        click.option("--audio-codec", default=None, help="Audio codec, e.g. aac."),
        click.option(
            "--bitrate",
            type=click.IntRange(min=1),
            default=None,
            help="Video bitrate in kbit/s (default: 1000).",
        ),
        click.option(
            "--audio-bitrate",
            type=click.IntRange(min=1),
            default=None,
            help="Audio bitrate in kbit/s (default: 128).",
        ),
        click.option(
            "--channels",
            type=click.IntRange(min=1),
            default=None,
            help="Audio channel count.",
        ),
        click.option(
            "--passes",
            type=int,
            default=None,
            help="Number of encoding passes (default: 1, x264 preset: 2).",
        ),
        click.option(
            "--extra",
            "extra_params",
            multiple=True,
            help="Extra token placed after filters. Repeatable.",
        ),
        click.option(
            "--param",
            "additional_parameters",
            multiple=True,
            help="Token placed just before the output. Repeatable.",
        ),
        click.option(
            "--audio-only",
            is_flag=True,
            help="Without --preset, build an audio-only format.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_cli_format(
    *,
    preset: str | None,
    video_codec: str | None,
    audio_codec: str | None,
    bitrate: int | None,
    audio_bitrate: int | None,
    channels: int | None,
    passes: int | None,
    extra_params: tuple[str, ...],
    additional_parameters: tuple[str, ...],
    audio_only: bool,
) -> Format:
    """Build a Format from format options.

    Raises:
        InvalidInputError: If the resulting format is invalid.
    """
    if preset is not None:
        base = get_preset(preset)
    else:
        base = Format(capabilities=AUDIO_ONLY if audio_only else AUDIO_VIDEO)

    return with_overrides(
        base,
        video_codec=video_codec,
        audio_codec=audio_codec,
        kilo_bitrate=bitrate,
        audio_kilo_bitrate=audio_bitrate,
        audio_channels=channels,
        extra_params=extra_params or None,
        additional_parameters=additional_parameters or None,
        passes=passes,
    )
