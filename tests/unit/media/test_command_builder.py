"""Unit tests for command assembly."""

import pytest

from mediapass.domain import Capability, MediaKind
from mediapass.filters.base import SimpleFilter
from mediapass.formats import presets
from mediapass.formats.base import AUDIO_ONLY, Format
from mediapass.media.base import Media
from mediapass.media.builder import (
    VIDEO_QUALITY_FLAGS,
    CommandBuilder,
    audio_tokens,
    bitrate_tokens,
    pass_tokens,
)


class TestBaseCommand:
    """Tests for the token order of Media.base_command."""

    def test_minimal_video_command(self, video_media) -> None:
        tokens = video_media.base_command(Format())
        assert tokens == [
            "-y", "-i", "a.mp4",
            "-b:v", "1000k", *VIDEO_QUALITY_FLAGS,
            "-b:a", "128k",
        ]  # fmt: skip

    def test_full_token_order(self, video_media) -> None:
        """Inputs, filters, commands, bitrates and additional params in order."""
        video_media.add_input_file(["b.mp3"])
        video_media.filters().custom(["-map", "0:v"])
        video_media.add_command(["-shortest"])
        fmt = Format(
            video_codec="libx264",
            audio_codec="aac",
            kilo_bitrate=2000,
            audio_kilo_bitrate=96,
            audio_channels=2,
            extra_params=["-preset", "slow"],
            additional_parameters=["-movflags", "+faststart"],
        )

        tokens = video_media.base_command(fmt)

        assert tokens == [
            "-y", "-i", "a.mp4",
            "-i", "b.mp3",
            "-map", "0:v",
            "-vcodec", "libx264",
            "-acodec", "aac",
            "-preset", "slow",
            "-shortest",
            "-b:v", "2000k", *VIDEO_QUALITY_FLAGS,
            "-b:a", "96k", "-ac", "2",
            "-movflags", "+faststart",
        ]  # fmt: skip

    def test_extra_params_follow_user_filters(self, video_media) -> None:
        """User filters below the extra params priority come first."""
        video_media.filters().custom(["-late"], priority=20)
        video_media.filters().custom(["-early"])

        tokens = video_media.base_command(Format(extra_params=["-extra"]))

        assert tokens.index("-early") < tokens.index("-extra") < tokens.index("-late")

    def test_threads_from_driver_configuration(
        self, make_driver, fake_prober, temp_root
    ) -> None:
        media = Media("a.mp4", make_driver(threads=4), fake_prober, temp_root=temp_root)

        tokens = media.base_command(Format(video_codec="libx264"))

        assert tokens[3:7] == ["-threads", "4", "-vcodec", "libx264"]

    def test_audio_media_omits_video_tokens(self, audio_media) -> None:
        """Video codec and bitrate are never emitted for audio media."""
        tokens = audio_media.base_command(presets.x264())

        assert "-vcodec" not in tokens
        assert "-b:v" not in tokens
        assert tokens == ["-y", "-i", "a.mp3", "-acodec", "aac", "-b:a", "128k"]

    def test_audio_format_omits_video_tokens(self, video_media) -> None:
        """An audio-only format strips video flags from video media too."""
        fmt = Format(video_codec="libx264", audio_codec="libmp3lame",
                     capabilities=AUDIO_ONLY)  # fmt: skip

        tokens = video_media.base_command(fmt)

        assert "-vcodec" not in tokens
        assert "-b:v" not in tokens
        assert "-acodec" in tokens

    def test_image_sequence_input_options(self, mediapass) -> None:
        """Image sequences get -framerate before -i and no audio flags."""
        media = mediapass.open_images("img-%04d.png", framerate=30)

        tokens = media.base_command(Format(video_codec="libx264", audio_codec="aac"))

        assert tokens[:5] == ["-y", "-framerate", "30", "-i", "img-%04d.png"]
        assert "-acodec" not in tokens
        assert "-b:a" not in tokens

    def test_does_not_modify_media_chain(self, video_media) -> None:
        """Building a command leaves the media's own filters unchanged."""
        video_media.filters().custom(["-an"])

        video_media.base_command(presets.webm())
        video_media.base_command(presets.webm())

        assert len(video_media.filter_chain) == 1

    def test_repeated_builds_are_identical(self, video_media) -> None:
        video_media.add_command(["-map", "0"])
        fmt = presets.x264()
        assert video_media.base_command(fmt) == video_media.base_command(fmt)


class TestTokenHelpers:
    """Tests for the token helper functions."""

    def test_bitrate_tokens_video_only(self) -> None:
        tokens = bitrate_tokens(Format(kilo_bitrate=500), frozenset({Capability.VIDEO}))
        assert tokens == ["-b:v", "500k", *VIDEO_QUALITY_FLAGS]

    def test_audio_tokens_skip_unset_values(self) -> None:
        assert audio_tokens(Format(audio_kilo_bitrate=None)) == []

    def test_audio_tokens_with_channels(self) -> None:
        fmt = Format(audio_kilo_bitrate=64, audio_channels=1)
        assert audio_tokens(fmt) == ["-b:a", "64k", "-ac", "1"]

    def test_pass_tokens(self) -> None:
        assert pass_tokens(2, "/tmp/x/pass") == [
            "-pass", "2", "-passlogfile", "/tmp/x/pass",
        ]  # fmt: skip


class TestFinalize:
    """Tests for CommandBuilder.finalize."""

    def test_output_is_last(self) -> None:
        assert CommandBuilder.finalize(["-y"], "out.mp4") == ["-y", "out.mp4"]

    def test_pass_tokens_before_output(self) -> None:
        tokens = CommandBuilder.finalize(["-y"], "out.mp4", 1, "/tmp/p")
        assert tokens == ["-y", "-pass", "1", "-passlogfile", "/tmp/p", "out.mp4"]

    def test_does_not_modify_base(self) -> None:
        base = ["-y"]
        CommandBuilder.finalize(base, "out.mp4", 1, "/tmp/p")
        assert base == ["-y"]


@pytest.mark.parametrize("kind", [MediaKind.VIDEO, MediaKind.AUDIO])
def test_custom_filter_tokens_pass_through(kind, fake_driver, fake_prober) -> None:
    """Custom filter tokens reach the command unchanged for every kind."""
    media = Media("in", fake_driver, fake_prober, kind)
    media.add_filter(SimpleFilter(["-metadata", "title=a b"]))

    tokens = media.base_command(Format())

    assert tokens[3:5] == ["-metadata", "title=a b"]
