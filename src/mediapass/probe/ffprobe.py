"""ffprobe-based implementation of the Prober protocol."""

from __future__ import annotations

import json
import logging
import subprocess  # nosec B404 - only used for TimeoutExpired
from pathlib import Path
from typing import TYPE_CHECKING

from mediapass.core.subprocess_utils import run_command
from mediapass.driver.binaries import require_binary
from mediapass.exceptions import ProbeError
from mediapass.probe.interface import StreamCollection
from mediapass.probe.parsers import parse_ffprobe_output

if TYPE_CHECKING:
    from mediapass.config.models import MediaPassConfig

logger = logging.getLogger(__name__)


class FFprobeProber:
    """Probe media files by running ffprobe with JSON output.

    Files that ffprobe rejects yield None; a hung ffprobe raises ProbeError.
    """

    def __init__(self, ffprobe_path: Path | None = None, timeout: int = 120) -> None:
        """Initialize the prober.

        Args:
            ffprobe_path: Explicit path to ffprobe. Resolved from PATH if None.
            timeout: Seconds to wait for a single ffprobe call.

        Raises:
            ExecutableNotFoundError: If ffprobe cannot be found.
        """
        self._ffprobe_path = require_binary("ffprobe", ffprobe_path)
        self._timeout = timeout

    @classmethod
    def create(cls, config: MediaPassConfig) -> FFprobeProber:
        """Build a prober from a MediaPassConfig."""
        return cls(
            ffprobe_path=config.tools.ffprobe,
            timeout=config.ffmpeg.probe_timeout,
        )

    @property
    def ffprobe_path(self) -> Path:
        return self._ffprobe_path

    def streams(self, path: Path | str) -> StreamCollection | None:
        """Probe a file and return its streams.

        Args:
            path: File to inspect.

        Returns:
            StreamCollection, or None if ffprobe could not read the file.

        Raises:
            ProbeError: If ffprobe timed out.
        """
        path = Path(path)
        if not path.exists():
            logger.warning("Cannot probe missing file: %s", path)
            return None

        try:
            stdout, stderr, returncode = run_command(
                [
                    self._ffprobe_path,
                    "-v",
                    "error",
                    "-print_format",
                    "json",
                    "-show_streams",
                    "-show_format",
                    path,
                ],
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeError(
                f"ffprobe timed out for {path} after {e.timeout}s", path=str(path)
            ) from e

        if returncode != 0:
            logger.warning(
                "ffprobe failed for %s (rc=%d): %s",
                path,
                returncode,
                stderr.strip(),
            )
            return None

        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as e:
            logger.warning("Invalid ffprobe output for %s: %s", path, e)
            return None

        if not isinstance(data, dict) or "streams" not in data:
            logger.warning("Missing 'streams' in ffprobe output for %s", path)
            return None

        return parse_ffprobe_output(data)
