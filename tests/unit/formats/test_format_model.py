"""Unit tests for the Format value object."""

from pathlib import Path

import pytest

from mediapass.domain import Capability
from mediapass.driver.progress import PassProgressListener
from mediapass.exceptions import InvalidInputError, ProbeError
from mediapass.formats.base import AUDIO_ONLY, AUDIO_VIDEO, Format, with_overrides


class TestFormatValidation:
    """Tests for Format construction checks."""

    def test_defaults(self) -> None:
        fmt = Format()
        assert fmt.kilo_bitrate == 1000
        assert fmt.audio_kilo_bitrate == 128
        assert fmt.audio_channels is None
        assert fmt.passes == 1
        assert fmt.capabilities == AUDIO_VIDEO

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"kilo_bitrate": 0}, "kilo bitrate"),
            ({"audio_kilo_bitrate": 0}, "audio kilo bitrate"),
            ({"audio_channels": 0}, "channels"),
            ({"capabilities": frozenset()}, "capability"),
        ],
    )
    def test_rejects_invalid_values(self, kwargs: dict, message: str) -> None:
        with pytest.raises(InvalidInputError, match=message):
            Format(**kwargs)

    def test_pass_count_not_checked_at_construction(self) -> None:
        """Passes are validated when a save starts."""
        assert Format(passes=0).passes == 0

    def test_params_normalized_to_string_tuples(self) -> None:
        fmt = Format(extra_params=["-crf", 23], additional_parameters=["-y"])
        assert fmt.extra_params == ("-crf", "23")
        assert fmt.additional_parameters == ("-y",)

    def test_capability_flags(self) -> None:
        audio = Format(capabilities=AUDIO_ONLY)
        assert audio.is_audio
        assert not audio.is_video
        video = Format(capabilities={Capability.VIDEO})
        assert video.is_video
        assert not video.is_audio


class TestWithOverrides:
    """Tests for with_overrides."""

    def test_none_keeps_base_values(self) -> None:
        base = Format(video_codec="libx264", audio_codec="aac", passes=2)
        result = with_overrides(base)
        assert result == base
        assert result is not base

    def test_overrides_replace_values(self) -> None:
        base = Format(video_codec="libx264", kilo_bitrate=1000)
        result = with_overrides(
            base, kilo_bitrate=2500, extra_params=["-preset", "slow"], passes=3
        )
        assert result.kilo_bitrate == 2500
        assert result.extra_params == ("-preset", "slow")
        assert result.passes == 3
        assert result.video_codec == "libx264"

    def test_keeps_capabilities(self) -> None:
        base = Format(audio_codec="flac", capabilities=AUDIO_ONLY)
        assert with_overrides(base, audio_channels=1).capabilities == AUDIO_ONLY

    def test_carries_progress_callbacks(self) -> None:
        def callback(event):
            pass

        base = Format().on_progress(callback)
        assert with_overrides(base, kilo_bitrate=10).progress_callbacks == (callback,)

    def test_invalid_override_raises(self) -> None:
        with pytest.raises(InvalidInputError):
            with_overrides(Format(), kilo_bitrate=0)


class TestCreateProgressListener:
    """Tests for Format.create_progress_listener."""

    def test_none_without_callbacks(self, video_media, fake_prober) -> None:
        assert Format().create_progress_listener(video_media, fake_prober, 1, 2) is None
        assert fake_prober.calls == []

    def test_listener_uses_probed_duration(self, video_media, fake_prober) -> None:
        fmt = Format().on_progress(lambda event: None)

        listener = fmt.create_progress_listener(video_media, fake_prober, 2, 3)

        assert isinstance(listener, PassProgressListener)
        assert listener.duration == 60.0
        assert listener.current_pass == 2
        assert listener.total_passes == 3
        assert fake_prober.calls == ["a.mp4"]

    def test_probe_error_leaves_duration_unknown(self, video_media) -> None:
        class FailingProber:
            def streams(self, path: Path | str):
                raise ProbeError("boom", path=str(path))

        fmt = Format().on_progress(lambda event: None)
        listener = fmt.create_progress_listener(video_media, FailingProber(), 1, 1)

        assert listener is not None
        assert listener.duration is None

    def test_on_progress_returns_format(self) -> None:
        fmt = Format()
        assert fmt.on_progress(lambda event: None) is fmt
        assert len(fmt.progress_callbacks) == 1
