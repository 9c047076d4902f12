"""Priority-ordered filter collections.

A ``FilterChain`` is append-only. Filters are kept in ascending priority
order; filters sharing a priority keep their registration order. A save
never applies the media's own chain directly: it clones it, adds the
per-save filters to the clone and freezes the result.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterator
from typing import TYPE_CHECKING

from mediapass.filters.base import Filter

if TYPE_CHECKING:
    from mediapass.formats.base import Format
    from mediapass.media.base import Media


def _apply_all(
    filters: tuple[Filter, ...] | list[Filter], media: Media, format: Format
) -> list[str]:
    tokens: list[str] = []
    for item in filters:
        tokens.extend(str(t) for t in item.apply(media, format))
    return tokens


class FilterChain:
    """Mutable, append-only collection of filters."""

    def __init__(self) -> None:
        # (priority, registration index) -> sorted storage
        self._keys: list[tuple[int, int]] = []
        self._filters: list[Filter] = []
        self._counter = 0

    def add(self, item: Filter) -> FilterChain:
        """Register a filter.

        Args:
            item: Filter to add.

        Returns:
            This chain, for chaining.
        """
        key = (item.priority, self._counter)
        self._counter += 1
        position = bisect.bisect_right(self._keys, key)
        self._keys.insert(position, key)
        self._filters.insert(position, item)
        return self

    def clone(self) -> FilterChain:
        """Return an independent copy; adding to it leaves this chain alone."""
        copy = FilterChain()
        copy._keys = list(self._keys)
        copy._filters = list(self._filters)
        copy._counter = self._counter
        return copy

    def freeze(self) -> FrozenFilterChain:
        """Return an immutable snapshot of the current ordering."""
        return FrozenFilterChain(tuple(self._filters))

    def apply(self, media: Media, format: Format) -> list[str]:
        """Concatenate every filter's tokens in priority order."""
        return _apply_all(self._filters, media, format)

    def __iter__(self) -> Iterator[Filter]:
        return iter(list(self._filters))

    def __len__(self) -> int:
        return len(self._filters)

    def __repr__(self) -> str:
        return f"FilterChain({self._filters!r})"


class FrozenFilterChain:
    """Immutable, already-ordered filter snapshot owned by one save call."""

    __slots__ = ("_filters",)

    def __init__(self, filters: tuple[Filter, ...]) -> None:
        self._filters = filters

    def apply(self, media: Media, format: Format) -> list[str]:
        return _apply_all(self._filters, media, format)

    def __iter__(self) -> Iterator[Filter]:
        return iter(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    def __repr__(self) -> str:
        return f"FrozenFilterChain({list(self._filters)!r})"
