"""Shared test fixtures for mediapass."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mediapass.config.loader import clear_config_cache
from mediapass.config.models import MediaPassConfig
from mediapass.domain import MediaKind
from mediapass.driver.interface import DriverConfiguration
from mediapass.driver.progress import ProgressListener
from mediapass.exceptions import ExecutionFailureError
from mediapass.media.base import Media
from mediapass.media.opener import MediaPass
from mediapass.probe.interface import StreamCollection, StreamDescriptor

VIDEO_STREAMS = StreamCollection(
    streams=(
        StreamDescriptor(index=0, codec_type="video", codec_name="h264",
                         width=1920, height=1080, duration=60.0),
        StreamDescriptor(index=1, codec_type="audio", codec_name="aac",
                         channels=2, duration=60.0),
    ),
    duration=60.0,
)  # fmt: skip

AUDIO_STREAMS = StreamCollection(
    streams=(
        StreamDescriptor(index=0, codec_type="audio", codec_name="mp3",
                         channels=2, duration=30.0, bit_rate=128000),
    ),
    duration=30.0,
)  # fmt: skip


class FakeDriver:
    """ProcessDriver that records commands instead of running ffmpeg.

    ``fail_on`` holds 1-based call numbers that raise ExecutionFailureError.
    ``stderr_lines`` are fed to the listener of every call.
    """

    def __init__(
        self,
        threads: int | None = None,
        fail_on: set[int] | None = None,
        stderr_lines: list[str] | None = None,
    ) -> None:
        self.configuration = DriverConfiguration(threads=threads)
        self.fail_on = fail_on or set()
        self.stderr_lines = stderr_lines or []
        self.calls: list[list[str]] = []
        self.listeners: list[ProgressListener | None] = []
        self.prefix_dirs_existed: list[bool] = []

    def command(
        self,
        args: list[str],
        use_error_pipe: bool = False,
        listener: ProgressListener | None = None,
    ) -> str:
        self.calls.append(list(args))
        self.listeners.append(listener)
        if "-passlogfile" in args:
            prefix = Path(args[args.index("-passlogfile") + 1])
            self.prefix_dirs_existed.append(prefix.parent.is_dir())
        if listener is not None:
            for line in self.stderr_lines:
                listener.handle(line)
        if len(self.calls) in self.fail_on:
            raise ExecutionFailureError(
                f"ffmpeg failed with exit code 1 on call {len(self.calls)}",
                command=list(args),
                return_code=1,
                stderr_tail=f"Error while encoding (call {len(self.calls)})",
            )
        return ""


class FakeProber:
    """Prober answering from a dict; unknown paths get video streams."""

    def __init__(
        self,
        results: dict[str, StreamCollection | None] | None = None,
        default: StreamCollection | None = VIDEO_STREAMS,
    ) -> None:
        self.results = results or {}
        self.default = default
        self.calls: list[str] = []

    def streams(self, path: Path | str) -> StreamCollection | None:
        self.calls.append(str(path))
        return self.results.get(str(path), self.default)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point config loading at an empty file and clear MEDIAPASS_* vars."""
    import os

    for name in list(os.environ):
        if name.startswith("MEDIAPASS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MEDIAPASS_CONFIG_PATH", str(tmp_path / "no-config.toml"))
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def fake_driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def make_driver():
    """Factory for FakeDriver with custom threads/failures."""
    return FakeDriver


@pytest.fixture
def fake_prober() -> FakeProber:
    return FakeProber()


@pytest.fixture
def make_prober():
    """Factory for FakeProber with custom results."""
    return FakeProber


@pytest.fixture
def audio_streams() -> StreamCollection:
    return AUDIO_STREAMS


@pytest.fixture
def video_streams() -> StreamCollection:
    return VIDEO_STREAMS


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    """Empty directory used as the parent of pass directories."""
    root = tmp_path / "passes"
    root.mkdir()
    return root


@pytest.fixture
def video_media(fake_driver: FakeDriver, fake_prober: FakeProber, temp_root: Path):
    return Media("a.mp4", fake_driver, fake_prober, MediaKind.VIDEO, temp_root=temp_root)


@pytest.fixture
def audio_media(fake_driver: FakeDriver, fake_prober: FakeProber, temp_root: Path):
    return Media("a.mp3", fake_driver, fake_prober, MediaKind.AUDIO, temp_root=temp_root)


@pytest.fixture
def mediapass(fake_driver: FakeDriver, fake_prober: FakeProber, temp_root: Path):
    return MediaPass(fake_driver, fake_prober, temp_root=temp_root)


@pytest.fixture
def default_config() -> MediaPassConfig:
    return MediaPassConfig()


@pytest.fixture
def ffprobe_fixtures_dir() -> Path:
    """Return the path to the ffprobe fixtures directory."""
    return Path(__file__).parent / "fixtures" / "ffprobe"


@pytest.fixture
def load_ffprobe_fixture(ffprobe_fixtures_dir: Path):
    """Return a loader for ffprobe JSON fixtures by name (without .json)."""

    def load(name: str) -> dict:
        return json.loads((ffprobe_fixtures_dir / f"{name}.json").read_text())

    return load
