"""External binary resolution.

A configured path wins when it points at an executable file; otherwise the
binary is looked up on PATH.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from mediapass.exceptions import ExecutableNotFoundError

logger = logging.getLogger(__name__)

INSTALL_HINTS: dict[str, str] = {
    "ffmpeg": "Install ffmpeg (https://ffmpeg.org/download.html).",
    "ffprobe": "ffprobe ships with ffmpeg (https://ffmpeg.org/download.html).",
}


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def resolve_binary(name: str, configured: Path | str | None = None) -> Path | None:
    """Find an executable.

    Args:
        name: Binary name to search on PATH (e.g. "ffmpeg").
        configured: Explicit path from configuration, if any.

    Returns:
        Path to the executable, or None if not found.
    """
    if configured is not None:
        configured_path = Path(configured).expanduser()
        if _is_executable(configured_path):
            return configured_path
        logger.warning(
            "Configured %s path is not executable: %s, falling back to PATH",
            name,
            configured_path,
        )

    found = shutil.which(name)
    return Path(found) if found else None


def require_binary(name: str, configured: Path | str | None = None) -> Path:
    """Find an executable or raise.

    Raises:
        ExecutableNotFoundError: If the binary cannot be found.
    """
    path = resolve_binary(name, configured)
    if path is None:
        hint = INSTALL_HINTS.get(name, "")
        raise ExecutableNotFoundError(
            f"Required tool not available: {name}. {hint}".strip()
        )
    return path
