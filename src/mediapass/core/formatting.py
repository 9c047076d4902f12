"""Formatting utilities for display output."""

import shlex


def format_duration(seconds: float | None) -> str:
    """Format a duration as H:MM:SS.ss.

    Args:
        seconds: Duration in seconds.

    Returns:
        Formatted string (e.g., "0:01:23.45") or "\u2014" if unknown.
    """
    if seconds is None or seconds < 0:
        return "\u2014"
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{int(hours)}:{int(minutes):02d}:{secs:05.2f}"


def format_bitrate(bits_per_second: int | None) -> str:
    """Format a bitrate in human-readable form.

    Args:
        bits_per_second: Bitrate in bit/s.

    Returns:
        Formatted string (e.g., "4.2 Mb/s", "128 kb/s") or "\u2014".
    """
    if bits_per_second is None:
        return "\u2014"
    if bits_per_second >= 1_000_000:
        return f"{bits_per_second / 1_000_000:.1f} Mb/s"
    elif bits_per_second >= 1000:
        return f"{bits_per_second // 1000} kb/s"
    else:
        return f"{bits_per_second} b/s"


def format_command(tokens: list[str]) -> str:
    """Join tokens into a copy-pasteable shell line."""
    return shlex.join(tokens)
