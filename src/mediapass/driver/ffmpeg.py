"""Subprocess drivers for ffmpeg and other command-line binaries."""

from __future__ import annotations

import logging
import queue
import subprocess  # nosec B404 - subprocess is required for ffmpeg invocation
import threading
import time
from collections import deque
from pathlib import Path
from typing import IO, TYPE_CHECKING

from mediapass.driver.binaries import require_binary
from mediapass.driver.interface import DriverConfiguration
from mediapass.driver.progress import ProgressListener
from mediapass.exceptions import ExecutableNotFoundError, ExecutionFailureError

if TYPE_CHECKING:
    from mediapass.config.models import MediaPassConfig

logger = logging.getLogger(__name__)


class BinaryDriver:
    """Run a binary with threaded stderr reading, timeout and listeners.

    Subclasses set ``name`` and ``default_binaries``.
    """

    name: str = "binary"
    default_binaries: tuple[str, ...] = ()

    STDERR_TAIL_LINES: int = 10
    STDERR_DRAIN_TIMEOUT: float = 5.0

    def __init__(
        self,
        binary: Path,
        configuration: DriverConfiguration | None = None,
    ) -> None:
        self.binary = binary
        self.configuration = configuration or DriverConfiguration()

    @classmethod
    def load(
        cls,
        configured: Path | str | None = None,
        configuration: DriverConfiguration | None = None,
    ) -> BinaryDriver:
        """Resolve the binary and build a driver.

        Tries the configured path, then every name in default_binaries.

        Raises:
            ExecutableNotFoundError: If no candidate can be resolved.
        """
        candidates = cls.default_binaries or (cls.name,)
        error: ExecutableNotFoundError | None = None
        for candidate in candidates:
            try:
                binary = require_binary(candidate, configured)
            except ExecutableNotFoundError as e:
                error = e
                continue
            logger.debug("Loaded %s driver: %s", cls.name, binary)
            return cls(binary, configuration)
        assert error is not None
        raise error

    def command(
        self,
        args: list[str],
        use_error_pipe: bool = False,
        listener: ProgressListener | None = None,
    ) -> str:
        """Run the binary with args and wait for it.

        Args:
            args: Arguments, in order.
            use_error_pipe: Return the captured stderr instead of stdout.
            listener: Receives each stderr line while the process runs.

        Returns:
            Captured stdout (or stderr with use_error_pipe).

        Raises:
            ExecutionFailureError: If the process cannot start, exits non-zero,
                or exceeds the configured timeout.
        """
        cmd = [str(self.binary), *(str(a) for a in args)]
        timeout = self.configuration.timeout

        logger.info(
            "Running %s",
            self.name,
            extra={"command": " ".join(cmd), "arg_count": len(args)},
        )

        try:
            process = subprocess.Popen(  # nosec B603 - args are a token list
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise ExecutionFailureError(
                f"Could not start {self.name}: {e}", command=cmd
            ) from e

        stdout_chunks: list[str] = []
        stderr_lines: list[str] = []
        stderr_queue: queue.Queue[str | None] = queue.Queue()
        stop_event = threading.Event()

        def read_stderr() -> None:
            try:
                assert process.stderr is not None
                for line in process.stderr:
                    if stop_event.is_set():
                        break
                    stderr_queue.put(line)
            except (ValueError, OSError) as e:
                logger.debug("Stderr reader stopped: %s", e)
            finally:
                stderr_queue.put(None)

        def read_stdout(stream: IO[str]) -> None:
            try:
                stdout_chunks.append(stream.read())
            except (ValueError, OSError) as e:
                logger.debug("Stdout reader stopped: %s", e)

        assert process.stdout is not None
        stderr_thread = threading.Thread(target=read_stderr, daemon=True)
        stdout_thread = threading.Thread(
            target=read_stdout, args=(process.stdout,), daemon=True
        )
        stderr_thread.start()
        stdout_thread.start()

        timed_out = False
        start_time = time.monotonic()

        try:
            while True:
                if timeout is not None and time.monotonic() - start_time >= timeout:
                    timed_out = True
                    break

                try:
                    line = stderr_queue.get(timeout=0.5)
                except queue.Empty:
                    if process.poll() is not None and not stderr_thread.is_alive():
                        break
                    continue

                if line is None:
                    break
                stderr_lines.append(line)
                if listener is not None:
                    try:
                        listener.handle(line)
                    except Exception as e:
                        logger.warning("Progress listener error: %s", e)
        except BaseException:
            # Interrupted mid-run: never leave the child behind
            self._kill(process)
            raise

        if timed_out:
            stop_event.set()
            self._kill(process)
            stderr_thread.join(timeout=2.0)
            logger.warning("%s timed out after %s seconds", self.name, timeout)
            raise ExecutionFailureError(
                f"{self.name} timed out after {timeout} seconds",
                command=cmd,
                return_code=-1,
                stderr_tail=self._tail(stderr_lines),
            )

        stop_event.set()
        stderr_thread.join(timeout=self.STDERR_DRAIN_TIMEOUT)
        while True:
            try:
                line = stderr_queue.get_nowait()
            except queue.Empty:
                break
            if line is None:
                break
            stderr_lines.append(line)

        process.wait()
        stdout_thread.join(timeout=self.STDERR_DRAIN_TIMEOUT)

        elapsed = time.monotonic() - start_time
        if process.returncode != 0:
            tail = self._tail(stderr_lines)
            logger.error(
                "%s exited with code %d: %s",
                self.name,
                process.returncode,
                tail,
                extra={"returncode": process.returncode},
            )
            raise ExecutionFailureError(
                f"{self.name} failed with exit code {process.returncode}",
                command=cmd,
                return_code=process.returncode,
                stderr_tail=tail,
            )

        logger.debug(
            "%s completed",
            self.name,
            extra={"elapsed_seconds": round(elapsed, 3)},
        )

        if use_error_pipe:
            return "".join(stderr_lines)
        return "".join(stdout_chunks)

    def _kill(self, process: subprocess.Popen) -> None:
        if process.poll() is None:
            process.kill()
        process.wait()

    def _tail(self, lines: list[str]) -> str:
        return "".join(deque(lines, maxlen=self.STDERR_TAIL_LINES)).strip()


class FFmpegDriver(BinaryDriver):
    """Driver for the ffmpeg binary."""

    name = "ffmpeg"
    default_binaries = ("ffmpeg", "avconv")

    @classmethod
    def create(cls, config: MediaPassConfig) -> FFmpegDriver:
        """Build an ffmpeg driver from a MediaPassConfig.

        Raises:
            ExecutableNotFoundError: If ffmpeg cannot be found.
        """
        configuration = DriverConfiguration(
            threads=config.ffmpeg.threads,
            timeout=config.ffmpeg.timeout,
        )
        return cls.load(config.tools.ffmpeg, configuration)  # type: ignore[return-value]


class VolumeDriver(BinaryDriver):
    """Driver for the ``volume`` binary."""

    name = "volume"
    default_binaries = ("volume",)
