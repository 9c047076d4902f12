"""Pass context for structured logging.

Provides context propagation using contextvars, so every log record
emitted while a pass runs carries the media path and pass position.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_media_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "media_path", default=None
)
_pass_index: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "pass_index", default=None
)
_total_passes: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "total_passes", default=None
)


def set_pass_context(
    media_path: Path | str | None,
    pass_index: int | None = None,
    total_passes: int | None = None,
) -> None:
    """Set the current pass context.

    Args:
        media_path: Primary input of the media being encoded.
        pass_index: 1-based index of the running pass.
        total_passes: Number of passes in this save.
    """
    _media_path.set(str(media_path) if media_path is not None else None)
    _pass_index.set(pass_index)
    _total_passes.set(total_passes)


def clear_pass_context() -> None:
    """Clear the current pass context."""
    _media_path.set(None)
    _pass_index.set(None)
    _total_passes.set(None)


@contextmanager
def pass_context(
    media_path: Path | str | None,
    pass_index: int | None = None,
    total_passes: int | None = None,
) -> Generator[None, None, None]:
    """Context manager that sets pass context on entry and restores it on exit.

    Example:
        with pass_context("/videos/in.mp4", 1, 2):
            logger.info("Running pass")  # Record carries [P1/2]
    """
    old_media_path = _media_path.get()
    old_pass_index = _pass_index.get()
    old_total_passes = _total_passes.get()
    try:
        set_pass_context(media_path, pass_index, total_passes)
        yield
    finally:
        _media_path.set(old_media_path)
        _pass_index.set(old_pass_index)
        _total_passes.set(old_total_passes)


def get_pass_context() -> tuple[str | None, int | None, int | None]:
    """Get current pass context as (media_path, pass_index, total_passes)."""
    return _media_path.get(), _pass_index.get(), _total_passes.get()


class PassContextFilter(logging.Filter):
    """Logging filter that injects pass context into log records.

    Adds media_path, pass_index and total_passes attributes, plus a compact
    pass_tag such as "[P2/3] " for the text formatter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        media_path, pass_index, total_passes = get_pass_context()

        record.media_path = media_path
        record.pass_index = pass_index
        record.total_passes = total_passes

        if pass_index is not None:
            if total_passes is not None:
                record.pass_tag = f"[P{pass_index}/{total_passes}] "
            else:
                record.pass_tag = f"[P{pass_index}] "
        else:
            record.pass_tag = ""

        return True
