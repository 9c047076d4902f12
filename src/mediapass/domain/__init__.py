"""Domain enums for mediapass.

Usage:
    from mediapass.domain import Capability, MediaKind
"""

from .enums import Capability, MediaKind

__all__ = [
    "Capability",
    "MediaKind",
]
