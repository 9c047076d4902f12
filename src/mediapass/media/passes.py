"""Multi-pass execution with scoped temporary state.

A save moves through ``IDLE -> PREPARING -> RUNNING -> CLEANING`` and
ends in ``DONE`` or ``FAILED``. Passes run strictly in order because each
pass reads the log files the previous one wrote. The first failing pass
ends the run; the temporary directory holding the pass logs is removed
before the outcome is returned, whatever happened.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
import uuid
from collections.abc import Callable, Iterator
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from mediapass.driver.interface import ProcessDriver
from mediapass.driver.progress import ProgressListener
from mediapass.exceptions import ExecutionFailureError, InvalidInputError
from mediapass.logging.context import pass_context
from mediapass.media.builder import CommandBuilder

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "mediapass-passes-"

ListenerFactory = Callable[[int, int], ProgressListener | None]
"""Called with (current_pass, total_passes) before each pass."""


class PassState(Enum):
    IDLE = "idle"
    PREPARING = "preparing"
    RUNNING = "running"
    CLEANING = "cleaning"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class PassDescriptor:
    """One pass of a save."""

    index: int
    """1-based pass number."""

    total: int
    log_prefix: str | None
    """Shared ``-passlogfile`` prefix, or None for single-pass runs."""

    command: tuple[str, ...]


@dataclass(frozen=True)
class PassOutcome:
    """Result of a run: final state and the failure, if any."""

    state: PassState
    passes_attempted: int
    total_passes: int
    failure: ExecutionFailureError | None = None
    failed_pass: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.state == PassState.DONE


@contextmanager
def scoped_temp_directory(root: Path | None = None) -> Iterator[Path]:
    """Create a uniquely named directory and remove it on every exit path.

    Args:
        root: Parent directory. None uses the system temp directory.

    Yields:
        Path of the new directory.
    """
    path = Path(
        tempfile.mkdtemp(
            prefix=TEMP_DIR_PREFIX, dir=str(root) if root is not None else None
        )
    )
    logger.debug("Created pass directory %s", path)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        if path.exists():
            logger.warning("Could not remove pass directory %s", path)
        else:
            logger.debug("Removed pass directory %s", path)


def validate_pass_count(passes: int) -> None:
    """Raise InvalidInputError unless passes is a positive integer."""
    if isinstance(passes, bool) or not isinstance(passes, int) or passes < 1:
        raise InvalidInputError(
            f"Pass number should be a positive value, got {passes!r}"
        )


def build_pass_descriptors(
    base: list[str],
    output: str,
    total: int,
    log_prefix: str | None,
) -> list[PassDescriptor]:
    """Expand a base command into one descriptor per pass.

    With a single pass no ``-pass``/``-passlogfile`` tokens are added.
    """
    validate_pass_count(total)
    descriptors = []
    for index in range(1, total + 1):
        if total > 1:
            if log_prefix is None:
                raise InvalidInputError("Multi-pass runs need a pass log prefix")
            command = CommandBuilder.finalize(base, output, index, log_prefix)
        else:
            command = CommandBuilder.finalize(base, output)
        descriptors.append(
            PassDescriptor(
                index=index,
                total=total,
                log_prefix=log_prefix if total > 1 else None,
                command=tuple(command),
            )
        )
    return descriptors


class PassOrchestrator:
    """Run the passes of one save through a process driver.

    One orchestrator per save; instances are not reusable.
    """

    def __init__(
        self,
        driver: ProcessDriver,
        temp_root: Path | None = None,
        media_path: str | None = None,
    ) -> None:
        self.driver = driver
        self.temp_root = temp_root
        self.media_path = media_path
        self._state = PassState.IDLE

    @property
    def state(self) -> PassState:
        return self._state

    def run(
        self,
        base: list[str],
        output: str,
        total_passes: int,
        listener_factory: ListenerFactory | None = None,
        multi_pass: bool = True,
    ) -> PassOutcome:
        """Execute every pass and clean up.

        Args:
            base: Base tokens from CommandBuilder.build_base.
            output: Output path, always the last token.
            total_passes: Declared pass count.
            listener_factory: Builds the progress listener of each pass.
            multi_pass: False runs exactly one pass without a temporary
                directory; the declared count is still validated.

        Returns:
            The outcome. Execution failures are reported here, not raised.

        Raises:
            InvalidInputError: If total_passes is not positive. Nothing has
                been created or spawned at that point.
        """
        if self._state != PassState.IDLE:
            raise RuntimeError(
                f"Orchestrator already used (state {self._state.value})"
            )

        self._state = PassState.PREPARING
        try:
            validate_pass_count(total_passes)
        except InvalidInputError:
            self._state = PassState.FAILED
            raise

        total = total_passes if multi_pass else 1

        try:
            with ExitStack() as stack:
                log_prefix: str | None = None
                if multi_pass:
                    directory = stack.enter_context(
                        scoped_temp_directory(self.temp_root)
                    )
                    log_prefix = str(directory / f"pass-{uuid.uuid4().hex}")

                descriptors = build_pass_descriptors(base, output, total, log_prefix)

                self._state = PassState.RUNNING
                outcome = self._run_passes(descriptors, listener_factory)

                # Leaving the stack removes the pass directory
                self._state = PassState.CLEANING
        except BaseException:
            self._state = PassState.FAILED
            raise

        self._state = outcome.state
        return outcome

    def _run_passes(
        self,
        descriptors: list[PassDescriptor],
        listener_factory: ListenerFactory | None,
    ) -> PassOutcome:
        attempted = 0
        total = len(descriptors)
        for descriptor in descriptors:
            attempted += 1
            with pass_context(self.media_path, descriptor.index, descriptor.total):
                listener = (
                    listener_factory(descriptor.index, descriptor.total)
                    if listener_factory is not None
                    else None
                )
                logger.info(
                    "Starting pass %d of %d",
                    descriptor.index,
                    descriptor.total,
                    extra={"log_prefix": descriptor.log_prefix},
                )
                try:
                    self.driver.command(
                        list(descriptor.command), use_error_pipe=False, listener=listener
                    )
                except ExecutionFailureError as e:
                    logger.error(
                        "Pass %d of %d failed: %s",
                        descriptor.index,
                        descriptor.total,
                        e,
                        extra={"returncode": e.return_code},
                    )
                    return PassOutcome(
                        state=PassState.FAILED,
                        passes_attempted=attempted,
                        total_passes=total,
                        failure=e,
                        failed_pass=descriptor.index,
                    )

        return PassOutcome(
            state=PassState.DONE, passes_attempted=attempted, total_passes=total
        )
