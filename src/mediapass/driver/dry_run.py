"""Driver that records commands instead of running them."""

from __future__ import annotations

import logging
from pathlib import Path

from mediapass.driver.interface import CommandRecord, DriverConfiguration
from mediapass.driver.progress import ProgressListener

logger = logging.getLogger(__name__)


class DryRunDriver:
    """Record every command; never spawn a process.

    Used by ``mediapass transcode --dry-run`` to print the argument
    sequences a save would execute.
    """

    name = "dry-run"

    def __init__(
        self,
        binary: Path = Path("ffmpeg"),
        configuration: DriverConfiguration | None = None,
    ) -> None:
        self.binary = binary
        self.configuration = configuration or DriverConfiguration()
        self.records: list[CommandRecord] = []

    def command(
        self,
        args: list[str],
        use_error_pipe: bool = False,
        listener: ProgressListener | None = None,
    ) -> str:
        record = CommandRecord(binary=self.binary, args=tuple(str(a) for a in args))
        self.records.append(record)
        logger.debug("Dry run: %s", " ".join(record.argv))
        return ""
