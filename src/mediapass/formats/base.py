"""Output format value object."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mediapass.domain import Capability
from mediapass.driver.progress import PassProgressListener, ProgressCallback
from mediapass.exceptions import InvalidInputError, ProbeError

if TYPE_CHECKING:
    from mediapass.media.base import Media
    from mediapass.probe.interface import Prober

logger = logging.getLogger(__name__)

AUDIO_VIDEO = frozenset({Capability.VIDEO, Capability.AUDIO})
AUDIO_ONLY = frozenset({Capability.AUDIO})


@dataclass
class Format:
    """Desired output of a save: codecs, bitrates, passes and extras.

    A Format is read-only while a save runs. Progress callbacks are the
    only state that can be added after construction.
    """

    video_codec: str | None = None
    audio_codec: str | None = None

    kilo_bitrate: int = 1000
    """Video bitrate in kbit/s."""

    audio_kilo_bitrate: int | None = 128
    audio_channels: int | None = None

    extra_params: tuple[str, ...] = ()
    """Tokens placed after user filters, before codec and raw commands."""

    additional_parameters: tuple[str, ...] = ()
    """Tokens placed after the bitrate flags, just before the output."""

    passes: int = 1
    """Number of passes. Validated when a save starts, not here."""

    capabilities: frozenset[Capability] = AUDIO_VIDEO

    _callbacks: list[ProgressCallback] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.extra_params = tuple(str(p) for p in self.extra_params)
        self.additional_parameters = tuple(
            str(p) for p in self.additional_parameters
        )
        self.capabilities = frozenset(self.capabilities)

        if self.kilo_bitrate < 1:
            raise InvalidInputError(
                f"Wrong kilo bitrate value: {self.kilo_bitrate}"
            )
        if self.audio_kilo_bitrate is not None and self.audio_kilo_bitrate < 1:
            raise InvalidInputError(
                f"Wrong audio kilo bitrate value: {self.audio_kilo_bitrate}"
            )
        if self.audio_channels is not None and self.audio_channels < 1:
            raise InvalidInputError(
                f"Wrong channels value: {self.audio_channels}"
            )
        if not self.capabilities:
            raise InvalidInputError("A format needs at least one capability")

    @property
    def is_video(self) -> bool:
        return Capability.VIDEO in self.capabilities

    @property
    def is_audio(self) -> bool:
        return Capability.AUDIO in self.capabilities

    def on_progress(self, callback: ProgressCallback) -> Format:
        """Register a callback receiving PassProgress events during saves."""
        self._callbacks.append(callback)
        return self

    @property
    def progress_callbacks(self) -> tuple[ProgressCallback, ...]:
        return tuple(self._callbacks)

    def create_progress_listener(
        self,
        media: Media,
        prober: Prober,
        current_pass: int,
        total_passes: int,
    ) -> PassProgressListener | None:
        """Build a listener for one pass, or None without callbacks.

        The media's primary input is probed for its duration. When the
        duration is unknown, events still fire with 0% pass progress.
        """
        if not self._callbacks:
            return None

        duration: float | None = None
        try:
            streams = prober.streams(media.path)
        except ProbeError as e:
            logger.debug("Duration unavailable for %s: %s", media.path, e)
            streams = None
        if streams is not None:
            duration = streams.duration

        return PassProgressListener(
            duration=duration,
            current_pass=current_pass,
            total_passes=total_passes,
            callbacks=self._callbacks,
        )


def with_overrides(
    base: Format,
    *,
    video_codec: str | None = None,
    audio_codec: str | None = None,
    kilo_bitrate: int | None = None,
    audio_kilo_bitrate: int | None = None,
    audio_channels: int | None = None,
    extra_params: Iterable[str] | None = None,
    additional_parameters: Iterable[str] | None = None,
    passes: int | None = None,
) -> Format:
    """Return a copy of base with every non-None argument replaced.

    Progress callbacks are carried over.

    Raises:
        InvalidInputError: If an override fails validation.
    """
    result = Format(
        video_codec=video_codec if video_codec is not None else base.video_codec,
        audio_codec=audio_codec if audio_codec is not None else base.audio_codec,
        kilo_bitrate=kilo_bitrate if kilo_bitrate is not None else base.kilo_bitrate,
        audio_kilo_bitrate=(
            audio_kilo_bitrate
            if audio_kilo_bitrate is not None
            else base.audio_kilo_bitrate
        ),
        audio_channels=(
            audio_channels if audio_channels is not None else base.audio_channels
        ),
        extra_params=(
            tuple(extra_params) if extra_params is not None else base.extra_params
        ),
        additional_parameters=(
            tuple(additional_parameters)
            if additional_parameters is not None
            else base.additional_parameters
        ),
        passes=passes if passes is not None else base.passes,
        capabilities=base.capabilities,
    )
    for callback in base.progress_callbacks:
        result.on_progress(callback)
    return result
