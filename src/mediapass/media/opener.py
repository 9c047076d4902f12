"""Entry point that opens files as Media objects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from mediapass.domain import MediaKind
from mediapass.driver.interface import ProcessDriver
from mediapass.exceptions import InvalidInputError, ProbeError
from mediapass.media.base import Media
from mediapass.probe.interface import Prober

if TYPE_CHECKING:
    from mediapass.config.models import MediaPassConfig

logger = logging.getLogger(__name__)

DEFAULT_FRAMERATE = 25


class MediaPass:
    """Open inputs with a shared driver and prober.

    Example:
        mediapass = MediaPass.create(get_config())
        video = mediapass.open("in.mp4")
        video.save(presets.x264(), "out.mp4")
    """

    def __init__(
        self,
        driver: ProcessDriver,
        prober: Prober,
        temp_root: Path | None = None,
    ) -> None:
        self.driver = driver
        self.prober = prober
        self.temp_root = temp_root

    @classmethod
    def create(cls, config: MediaPassConfig) -> MediaPass:
        """Resolve ffmpeg and ffprobe from config.

        Raises:
            ExecutableNotFoundError: If either binary cannot be found.
        """
        from mediapass.config.loader import get_temp_directory
        from mediapass.driver.ffmpeg import FFmpegDriver
        from mediapass.probe.ffprobe import FFprobeProber

        return cls(
            driver=FFmpegDriver.create(config),
            prober=FFprobeProber.create(config),
            temp_root=get_temp_directory(config),
        )

    def open(self, path: Path | str) -> Media:
        """Probe path and open it as video or audio media.

        Files with at least one video stream open as video; files with only
        audio open as audio.

        Raises:
            ProbeError: If the file cannot be probed.
            InvalidInputError: If the file has neither video nor audio.
        """
        path = str(path)
        try:
            streams = self.prober.streams(path)
        except ProbeError as e:
            raise ProbeError(f'Unable to probe "{path}".', path=path) from e
        if streams is None:
            raise ProbeError(f'Unable to probe "{path}".', path=path)

        if streams.videos():
            kind = MediaKind.VIDEO
        elif streams.audios():
            kind = MediaKind.AUDIO
        else:
            raise InvalidInputError(
                "Unable to detect file format, only audio and video supported"
            )

        logger.debug("Opened %s as %s", path, kind.value)
        return Media(path, self.driver, self.prober, kind, temp_root=self.temp_root)

    def open_images(
        self, pattern: Path | str, framerate: int | float = DEFAULT_FRAMERATE
    ) -> Media:
        """Open a numbered image sequence such as ``frames/img-%04d.png``.

        The pattern is not probed; ffmpeg expands it when the save runs.

        Raises:
            InvalidInputError: If framerate is not positive.
        """
        if framerate <= 0:
            raise InvalidInputError(f"Framerate must be positive, got {framerate}")
        return Media(
            pattern,
            self.driver,
            self.prober,
            MediaKind.IMAGES,
            input_options=("-framerate", str(framerate)),
            temp_root=self.temp_root,
        )
