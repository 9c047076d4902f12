"""Frame geometry value objects used by video filters."""

from __future__ import annotations

from dataclasses import dataclass

from mediapass.exceptions import InvalidInputError


@dataclass(frozen=True)
class Dimension:
    """Frame size in pixels."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidInputError(
                f"Width and height should be positive integers, "
                f"got {self.width}x{self.height}"
            )

    @classmethod
    def parse(cls, value: str) -> Dimension:
        """Parse ``WxH`` (e.g. ``1280x720``).

        Raises:
            InvalidInputError: If the value is malformed or not positive.
        """
        width, sep, height = value.lower().partition("x")
        if not sep:
            raise InvalidInputError(f"Invalid dimension '{value}', expected WxH")
        try:
            w, h = int(width), int(height)
        except ValueError as e:
            raise InvalidInputError(
                f"Invalid dimension '{value}', expected WxH"
            ) from e
        return cls(w, h)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class Point:
    """Offset of the top-left corner in pixels."""

    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise InvalidInputError(
                f"Point coordinates cannot be negative, got ({self.x}, {self.y})"
            )
