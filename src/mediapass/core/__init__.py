"""Core utilities package.

Pure helpers with no dependency on the rest of mediapass.
"""

from mediapass.core.file_utils import remove_partial_output
from mediapass.core.formatting import format_bitrate, format_command, format_duration
from mediapass.core.subprocess_utils import run_command

__all__ = [
    "format_bitrate",
    "format_command",
    "format_duration",
    "remove_partial_output",
    "run_command",
]
