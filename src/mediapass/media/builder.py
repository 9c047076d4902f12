"""Command assembly for a single ffmpeg pass.

Token order matters to ffmpeg, so the builder always emits, in order:

1. ``-y``, input options, ``-i <primary>``
2. ``-i <path>`` per auxiliary input, in registration order
3. the media's filters plus extra-params, thread and codec filters,
   applied as one priority-ordered chain
4. raw commands, verbatim
5. bitrate, quality and channel flags
6. the format's additional parameters

The output path (and any ``-pass`` tokens) is appended by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mediapass.domain import Capability
from mediapass.filters.base import EXTRA_PARAMS_PRIORITY, SimpleFilter
from mediapass.filters.chain import FilterChain, FrozenFilterChain

if TYPE_CHECKING:
    from mediapass.formats.base import Format
    from mediapass.media.base import Media

logger = logging.getLogger(__name__)

# Fixed x264-style tuning emitted after the video bitrate
VIDEO_QUALITY_FLAGS: tuple[str, ...] = (
    "-refs", "6",
    "-coder", "1",
    "-sc_threshold", "40",
    "-flags", "+loop",
    "-me_range", "16",
    "-subq", "7",
    "-i_qfactor", "0.71",
    "-qcomp", "0.6",
    "-qdiff", "4",
    "-trellis", "1",
)  # fmt: skip


@dataclass(frozen=True)
class CommandSnapshot:
    """Media state captured when a save starts.

    Later add_input_file/add_command calls on the media do not affect a
    snapshot already taken.
    """

    path: str
    input_options: tuple[str, ...]
    input_files: tuple[str, ...]
    commands: tuple[tuple[str, ...], ...]
    capabilities: frozenset[Capability]


def assemble_filters(
    base: FilterChain,
    format: Format,
    capabilities: frozenset[Capability],
    threads: int | None = None,
) -> FrozenFilterChain:
    """Clone the media chain, add the per-save filters and freeze it.

    Args:
        base: The media's own chain. Never modified.
        format: Target format.
        capabilities: Capabilities shared by the media and the format.
        threads: Thread count from the driver configuration, if any.

    Returns:
        Frozen chain owned by the calling save.
    """
    chain = base.clone()
    chain.add(SimpleFilter(format.extra_params, EXTRA_PARAMS_PRIORITY))

    if threads is not None:
        chain.add(SimpleFilter(["-threads", threads]))

    if Capability.VIDEO in capabilities and format.video_codec is not None:
        chain.add(SimpleFilter(["-vcodec", format.video_codec]))
    if Capability.AUDIO in capabilities and format.audio_codec is not None:
        chain.add(SimpleFilter(["-acodec", format.audio_codec]))

    return chain.freeze()


def bitrate_tokens(format: Format, capabilities: frozenset[Capability]) -> list[str]:
    """Video bitrate and quality flags, then audio bitrate and channels."""
    tokens: list[str] = []
    if Capability.VIDEO in capabilities:
        tokens.extend(["-b:v", f"{format.kilo_bitrate}k"])
        tokens.extend(VIDEO_QUALITY_FLAGS)
    if Capability.AUDIO in capabilities:
        if format.audio_kilo_bitrate is not None:
            tokens.extend(["-b:a", f"{format.audio_kilo_bitrate}k"])
        if format.audio_channels is not None:
            tokens.extend(["-ac", str(format.audio_channels)])
    return tokens


def audio_tokens(format: Format) -> list[str]:
    """Audio bitrate and channel flags only."""
    return bitrate_tokens(format, frozenset({Capability.AUDIO}))


def pass_tokens(pass_index: int, log_prefix: str) -> list[str]:
    return ["-pass", str(pass_index), "-passlogfile", log_prefix]


class CommandBuilder:
    """Build the base token sequence of one save.

    The base sequence is shared by every pass; only the pass tokens and
    the output path differ between passes.
    """

    def __init__(
        self,
        media: Media,
        format: Format,
        snapshot: CommandSnapshot,
        threads: int | None = None,
    ) -> None:
        self.media = media
        self.format = format
        self.snapshot = snapshot
        self.threads = threads
        # Tokens a media kind cannot carry are never emitted
        self.capabilities = snapshot.capabilities & format.capabilities

    def build_base(self, filters: FilterChain) -> list[str]:
        """Everything up to, but excluding, pass tokens and output path."""
        snapshot = self.snapshot
        tokens = ["-y", *snapshot.input_options, "-i", snapshot.path]
        for path in snapshot.input_files:
            tokens.extend(["-i", path])

        frozen = assemble_filters(
            filters, self.format, self.capabilities, self.threads
        )
        tokens.extend(frozen.apply(self.media, self.format))

        for command in snapshot.commands:
            tokens.extend(command)

        tokens.extend(bitrate_tokens(self.format, self.capabilities))
        tokens.extend(self.format.additional_parameters)

        logger.debug(
            "Built base command",
            extra={"token_count": len(tokens), "filter_count": len(frozen)},
        )
        return tokens

    @staticmethod
    def finalize(
        base: list[str],
        output: str,
        pass_index: int | None = None,
        log_prefix: str | None = None,
    ) -> list[str]:
        """Append pass tokens (when given) and the output path."""
        tokens = list(base)
        if pass_index is not None and log_prefix is not None:
            tokens.extend(pass_tokens(pass_index, log_prefix))
        tokens.append(output)
        return tokens
