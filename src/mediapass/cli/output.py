"""CLI output helpers: errors, progress and probe summaries."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any, NoReturn

import click

from mediapass.core.formatting import format_bitrate, format_duration

if TYPE_CHECKING:
    from mediapass.driver.progress import PassProgress
    from mediapass.probe.interface import StreamCollection

    from .exit_codes import ExitCode


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Exit with formatted error message.

    Args:
        message: Error message to display.
        code: Exit code to use (ExitCode enum or int).
        json_output: Whether to format output as JSON.

    Note:
        This function never returns; it always calls sys.exit().
    """
    from .exit_codes import ExitCode

    if isinstance(code, ExitCode):
        code_name = code.name
        exit_value = int(code)
    else:
        code_name = "UNKNOWN_ERROR"
        exit_value = code

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed",
                    "error": {
                        "code": code_name,
                        "message": message,
                    },
                }
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(exit_value)


def echo_progress(event: PassProgress) -> None:
    """Progress callback rewriting a single stderr line."""
    remaining = (
        f", {format_duration(event.remaining_seconds)} left"
        if event.remaining_seconds is not None
        else ""
    )
    click.echo(
        f"\rPass {event.current_pass}/{event.total_passes}: "
        f"{event.percent:5.1f}%{remaining}",
        nl=False,
        err=True,
    )


def streams_to_dict(path: str, streams: StreamCollection) -> dict[str, Any]:
    return {
        "path": path,
        "duration": streams.duration,
        "streams": [
            {
                "index": s.index,
                "type": s.codec_type,
                "codec": s.codec_name,
                "width": s.width,
                "height": s.height,
                "channels": s.channels,
                "duration": s.duration,
                "bit_rate": s.bit_rate,
            }
            for s in streams.streams
        ],
    }


def format_streams_human(path: str, streams: StreamCollection) -> str:
    lines = [f"File: {path}", f"Duration: {format_duration(streams.duration)}"]
    lines.append(f"Streams ({len(streams)}):")
    for s in streams.streams:
        if s.is_video:
            size = f"{s.width}x{s.height}" if s.width and s.height else "?"
            detail = f"{size}"
        elif s.is_audio:
            detail = f"{s.channels or '?'} ch"
        else:
            detail = ""
        lines.append(
            f"  #{s.index} {s.codec_type:<9} {s.codec_name or '?':<10} "
            f"{detail:<11} {format_bitrate(s.bit_rate)}".rstrip()
        )
    return "\n".join(lines)
