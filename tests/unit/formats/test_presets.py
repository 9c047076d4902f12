"""Unit tests for format presets."""

import pytest

from mediapass.exceptions import InvalidInputError
from mediapass.formats import presets
from mediapass.formats.base import AUDIO_ONLY, AUDIO_VIDEO
from mediapass.formats.presets import PRESETS, get_preset


class TestPresets:
    """Tests for the preset factories."""

    def test_x264_defaults_to_two_passes(self) -> None:
        fmt = presets.x264()
        assert fmt.video_codec == "libx264"
        assert fmt.audio_codec == "aac"
        assert fmt.passes == 2
        assert fmt.capabilities == AUDIO_VIDEO

    def test_webm_forces_container(self) -> None:
        assert presets.webm().extra_params == ("-f", "webm")

    def test_vorbis_enables_experimental_encoder(self) -> None:
        fmt = presets.vorbis()
        assert fmt.audio_codec == "vorbis"
        assert fmt.extra_params == ("-strict", "-2")

    @pytest.mark.parametrize("name", ["mp3", "aac", "flac", "vorbis", "wav"])
    def test_audio_presets_are_audio_only(self, name: str) -> None:
        fmt = get_preset(name)
        assert fmt.capabilities == AUDIO_ONLY
        assert fmt.video_codec is None

    @pytest.mark.parametrize("name", ["x264", "webm", "wmv", "ogg"])
    def test_video_presets_carry_both_codecs(self, name: str) -> None:
        fmt = get_preset(name)
        assert fmt.video_codec is not None
        assert fmt.audio_codec is not None

    def test_factories_return_fresh_formats(self) -> None:
        """Callbacks attached to one preset instance do not leak to the next."""
        first = get_preset("mp3").on_progress(lambda event: None)
        second = get_preset("mp3")
        assert first is not second
        assert second.progress_callbacks == ()


class TestGetPreset:
    """Tests for get_preset."""

    def test_case_insensitive(self) -> None:
        assert get_preset("X264").passes == 2

    def test_unknown_preset(self) -> None:
        with pytest.raises(InvalidInputError, match="Unknown format preset 'mkv'"):
            get_preset("mkv")

    def test_registry_names(self) -> None:
        assert set(PRESETS) == {
            "x264", "webm", "wmv", "ogg", "mp3", "aac", "flac", "vorbis", "wav",
        }  # fmt: skip
