"""Process driver protocol."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from mediapass.driver.progress import ProgressListener


@dataclass(frozen=True)
class DriverConfiguration:
    """Options a driver applies to every command it runs."""

    threads: int | None = None
    """Thread count Media objects forward as ``-threads``."""

    timeout: float | None = None
    """Per-command timeout in seconds. None means no limit."""


class ProcessDriver(Protocol):
    """Protocol for drivers that execute a token sequence as a subprocess.

    The driver prepends its own binary path; callers pass arguments only.
    """

    configuration: DriverConfiguration

    def command(
        self,
        args: list[str],
        use_error_pipe: bool = False,
        listener: ProgressListener | None = None,
    ) -> str:
        """Run the binary synchronously.

        Args:
            args: Arguments, in order.
            use_error_pipe: Return the captured stderr instead of stdout.
            listener: Receives each stderr line while the process runs.

        Returns:
            Captured stdout (or stderr with use_error_pipe).

        Raises:
            ExecutionFailureError: If the process exits abnormally or times out.
        """
        ...


@dataclass(frozen=True)
class CommandRecord:
    """One invocation recorded by a driver, used for dry runs."""

    binary: Path
    args: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        return [str(self.binary), *self.args]
