"""Filter protocol and the generic token filter."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from mediapass.formats.base import Format
    from mediapass.media.base import Media

EXTRA_PARAMS_PRIORITY = 10
"""Priority of the filter carrying a format's extra parameters.

Higher than the default user priority, so extra parameters follow user
filters on the command line.
"""


class Filter(Protocol):
    """A unit of command-token production.

    Filters derive tokens from their own configuration and the target
    format only; they never mutate the media they are applied to.
    """

    @property
    def priority(self) -> int: ...

    def apply(self, media: Media, format: Format) -> list[str]: ...


class SimpleFilter:
    """Emit a fixed list of tokens."""

    def __init__(self, params: Iterable[object], priority: int = 0) -> None:
        self._params = tuple(str(p) for p in params)
        self._priority = priority

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def params(self) -> tuple[str, ...]:
        return self._params

    def apply(self, media: Media, format: Format) -> list[str]:
        return list(self._params)

    def __repr__(self) -> str:
        return f"SimpleFilter({list(self._params)!r}, priority={self._priority})"
