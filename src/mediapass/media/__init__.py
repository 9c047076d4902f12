"""Media objects, command assembly and pass execution.

Module organization:
- base.py: Media (add_input_file, add_command, save, loop)
- builder.py: CommandBuilder and token helpers
- passes.py: PassOrchestrator state machine and scoped temp directories
- concat.py: Concat descriptor writer
- opener.py: MediaPass (open, open_images)
"""

from mediapass.media.base import Media
from mediapass.media.builder import (
    VIDEO_QUALITY_FLAGS,
    CommandBuilder,
    CommandSnapshot,
    assemble_filters,
    bitrate_tokens,
)
from mediapass.media.concat import escape_concat_path, write_concat_descriptor
from mediapass.media.opener import DEFAULT_FRAMERATE, MediaPass
from mediapass.media.passes import (
    PassDescriptor,
    PassOrchestrator,
    PassOutcome,
    PassState,
    build_pass_descriptors,
    scoped_temp_directory,
    validate_pass_count,
)

__all__ = [
    # Media
    "Media",
    "MediaPass",
    "DEFAULT_FRAMERATE",
    # Builder
    "CommandBuilder",
    "CommandSnapshot",
    "VIDEO_QUALITY_FLAGS",
    "assemble_filters",
    "bitrate_tokens",
    # Passes
    "PassDescriptor",
    "PassOrchestrator",
    "PassOutcome",
    "PassState",
    "build_pass_descriptors",
    "scoped_temp_directory",
    "validate_pass_count",
    # Concat
    "escape_concat_path",
    "write_concat_descriptor",
]
