"""Media: the caller-facing transcoding subject."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from mediapass.core.file_utils import remove_partial_output
from mediapass.domain import Capability, MediaKind
from mediapass.driver.interface import ProcessDriver
from mediapass.driver.progress import ProgressListener
from mediapass.exceptions import (
    EncodingError,
    ExecutionFailureError,
    InvalidInputError,
    ProbeError,
)
from mediapass.filters.base import Filter
from mediapass.filters.chain import FilterChain
from mediapass.filters.facade import MediaFilters
from mediapass.formats.base import Format
from mediapass.logging.context import pass_context
from mediapass.media.builder import CommandBuilder, CommandSnapshot, audio_tokens
from mediapass.media.passes import PassOrchestrator, validate_pass_count
from mediapass.probe.interface import Prober

logger = logging.getLogger(__name__)


class Media:
    """One primary input plus everything needed to encode it.

    Auxiliary inputs, raw commands and filters are append-only. Each
    ``save`` works on a snapshot taken when it starts, so a Media can be
    saved repeatedly, but not from several threads at once.

    Every public operation returns the Media for chaining::

        media.add_input_file(["b.mp4"]).add_command(["-map", "0"]).save(fmt, out)
    """

    def __init__(
        self,
        path: Path | str,
        driver: ProcessDriver,
        prober: Prober,
        kind: MediaKind = MediaKind.VIDEO,
        *,
        input_options: Iterable[str] = (),
        temp_root: Path | None = None,
    ) -> None:
        self._path = str(path)
        self._kind = kind
        self._input_options = tuple(str(o) for o in input_options)
        self.driver = driver
        self.prober = prober
        self.temp_root = temp_root

        self._input_files: list[str] = []
        self._commands: list[tuple[str, ...]] = []
        self._filters = FilterChain()

    def __repr__(self) -> str:
        return f"Media({self._path!r}, kind={self._kind.value})"

    @property
    def path(self) -> str:
        """Primary input path."""
        return self._path

    @property
    def kind(self) -> MediaKind:
        return self._kind

    @property
    def capabilities(self) -> frozenset[Capability]:
        return self._kind.capabilities

    @property
    def has_video(self) -> bool:
        return Capability.VIDEO in self.capabilities

    @property
    def has_audio(self) -> bool:
        return Capability.AUDIO in self.capabilities

    @property
    def input_options(self) -> tuple[str, ...]:
        return self._input_options

    @property
    def input_files(self) -> tuple[str, ...]:
        """Auxiliary inputs, in registration order."""
        return tuple(self._input_files)

    @property
    def commands(self) -> tuple[tuple[str, ...], ...]:
        """Raw command fragments, in registration order."""
        return tuple(self._commands)

    @property
    def filter_chain(self) -> FilterChain:
        """A copy of the media's filter chain."""
        return self._filters.clone()

    def filters(self) -> MediaFilters:
        """Filter registration helpers bound to this media."""
        return MediaFilters(self)

    def add_filter(self, item: Filter) -> Media:
        self._filters.add(item)
        return self

    def add_input_file(self, paths: Iterable[Path | str]) -> Media:
        """Register auxiliary inputs, each emitted as ``-i <path>``.

        Every path is probed before any is accepted; on failure the input
        list is left unchanged.

        Raises:
            InvalidInputError: If paths is empty.
            ProbeError: If any path cannot be probed.
        """
        candidates = [str(p) for p in paths]
        if not candidates:
            raise InvalidInputError("No input files given")

        for candidate in candidates:
            try:
                streams = self.prober.streams(candidate)
            except ProbeError as e:
                raise ProbeError(
                    f'Unable to probe "{candidate}".', path=candidate
                ) from e
            if streams is None:
                raise ProbeError(f'Unable to probe "{candidate}".', path=candidate)

        self._input_files.extend(candidates)
        logger.debug("Added %d input file(s) to %s", len(candidates), self._path)
        return self

    def add_command(self, tokens: Iterable[object]) -> Media:
        """Register a raw command fragment, emitted verbatim after filters.

        Raises:
            InvalidInputError: If tokens is empty.
        """
        fragment = tuple(str(t) for t in tokens)
        if not fragment:
            raise InvalidInputError('Empty "command".')
        self._commands.append(fragment)
        return self

    def snapshot(self) -> CommandSnapshot:
        return CommandSnapshot(
            path=self._path,
            input_options=self._input_options,
            input_files=tuple(self._input_files),
            commands=tuple(self._commands),
            capabilities=self.capabilities,
        )

    def base_command(self, format: Format) -> list[str]:
        """Tokens shared by every pass of a save, without the output path."""
        builder = CommandBuilder(
            self, format, self.snapshot(), threads=self.driver.configuration.threads
        )
        return builder.build_base(self._filters)

    def save(self, format: Format, output_path: Path | str) -> Media:
        """Encode to output_path, running as many passes as format declares.

        Audio media always run a single pass without a pass directory.

        Raises:
            InvalidInputError: If the pass count is not positive.
            EncodingError: If a pass fails. Raised after cleanup; the
                driver's ExecutionFailureError is the cause.
        """
        validate_pass_count(format.passes)
        output = str(output_path)
        base = self.base_command(format)
        multi_pass = self.has_video

        def listener_factory(current: int, total: int) -> ProgressListener | None:
            return format.create_progress_listener(self, self.prober, current, total)

        orchestrator = PassOrchestrator(
            self.driver, temp_root=self.temp_root, media_path=self._path
        )
        outcome = orchestrator.run(
            base,
            output,
            format.passes,
            listener_factory=listener_factory,
            multi_pass=multi_pass,
        )

        if not outcome.succeeded:
            failure = outcome.failure
            if not multi_pass:
                remove_partial_output(output)
            raise EncodingError(
                f"Encoding failed: {failure}",
                return_code=failure.return_code if failure else None,
                pass_index=outcome.failed_pass if multi_pass else None,
            ) from failure

        logger.info(
            "Saved %s",
            output,
            extra={"passes": outcome.passes_attempted, "kind": self._kind.value},
        )
        return self

    def loop_command(
        self, format: Format, descriptor_path: Path | str, repeat_count: int
    ) -> list[str]:
        """Tokens for a concat run, without the output path.

        Segment paths in the descriptor may be absolute, so the demuxer runs
        with ``-safe 0``.

        Raises:
            InvalidInputError: If repeat_count is not a positive integer.
        """
        if (
            isinstance(repeat_count, bool)
            or not isinstance(repeat_count, int)
            or repeat_count < 1
        ):
            raise InvalidInputError(
                f"Repeat count should be a positive value, got {repeat_count!r}"
            )
        tokens: list[str] = []
        if repeat_count > 1:
            tokens.extend(["-stream_loop", str(repeat_count - 1)])
        tokens.extend(["-f", "concat", "-safe", "0", "-i", str(descriptor_path)])
        tokens.extend(audio_tokens(format))
        return tokens

    def loop(
        self,
        format: Format,
        descriptor_path: Path | str,
        repeat_count: int,
        output_path: Path | str,
    ) -> Media:
        """Encode the segments listed in a concat descriptor, in one run.

        Args:
            format: Supplies the audio bitrate and channel count.
            descriptor_path: Concat descriptor (see write_concat_descriptor).
            repeat_count: How many times the whole sequence plays.
            output_path: Output file; removed if the run fails.

        Raises:
            InvalidInputError: If repeat_count is not a positive integer.
            EncodingError: If ffmpeg fails.
        """
        output = str(output_path)
        tokens = self.loop_command(format, descriptor_path, repeat_count)
        tokens.append(output)

        with pass_context(self._path, 1, 1):
            try:
                self.driver.command(tokens, use_error_pipe=False, listener=None)
            except ExecutionFailureError as e:
                logger.error("Concat encode failed: %s", e)
                remove_partial_output(output)
                raise EncodingError(
                    f"Encoding failed: {e}", return_code=e.return_code
                ) from e

        logger.info("Saved %s", output, extra={"repeat_count": repeat_count})
        return self
