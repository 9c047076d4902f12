"""Domain enums shared by formats, filters and media."""

from enum import Enum


class Capability(Enum):
    """Stream kinds a media object or format can carry."""

    VIDEO = "video"
    AUDIO = "audio"


class MediaKind(Enum):
    """What a Media object was opened from.

    The kind fixes the media's capability set; the command builder
    branches on capabilities, never on the kind itself, except for
    the input options image batches need.
    """

    AUDIO = "audio"  # Audio-only file; never multi-pass
    VIDEO = "video"  # Video file, usually with audio
    IMAGES = "images"  # Numbered image sequence, e.g. frame-%04d.png

    @property
    def capabilities(self) -> frozenset[Capability]:
        return _KIND_CAPABILITIES[self]


_KIND_CAPABILITIES: dict[MediaKind, frozenset[Capability]] = {
    MediaKind.AUDIO: frozenset({Capability.AUDIO}),
    MediaKind.VIDEO: frozenset({Capability.VIDEO, Capability.AUDIO}),
    MediaKind.IMAGES: frozenset({Capability.VIDEO}),
}
