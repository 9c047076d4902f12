"""Integration test fixtures that need real ffmpeg and ffprobe binaries.

Media is generated with ffmpeg's lavfi sources, so no sample files are
checked in.
"""

from __future__ import annotations

import subprocess  # nosec B404 - generates test media
from collections.abc import Callable
from pathlib import Path

import pytest

from mediapass.config.models import MediaPassConfig, TempConfig
from mediapass.media.opener import MediaPass


@pytest.fixture
def generate_tone(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a sine tone WAV file and returning its path."""

    def _generate(name: str = "tone.wav", duration: float = 1.0) -> Path:
        path = tmp_path / name
        subprocess.run(  # nosec B603 B607 - fixed test command
            [
                "ffmpeg",
                "-v",
                "error",
                "-y",
                "-f",
                "lavfi",
                "-i",
                f"sine=frequency=440:duration={duration}",
                str(path),
            ],
            check=True,
            capture_output=True,
        )
        return path

    return _generate


@pytest.fixture
def real_mediapass(tmp_path: Path) -> MediaPass:
    """MediaPass wired to the ffmpeg and ffprobe found on PATH."""
    temp_root = tmp_path / "passes"
    temp_root.mkdir()
    return MediaPass.create(MediaPassConfig(temp=TempConfig(directory=temp_root)))
