"""Tests for cli/output.py module."""

import json

import pytest

from mediapass.cli.exit_codes import ExitCode
from mediapass.cli.output import (
    echo_progress,
    error_exit,
    format_streams_human,
    streams_to_dict,
)
from mediapass.driver.progress import FFmpegProgress, PassProgress


class TestErrorExit:
    """Tests for error_exit function."""

    def test_human_format_exit(self, capsys) -> None:
        """Human format should print 'Error: message' and exit."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("Something failed", ExitCode.ENCODING_FAILED)

        assert exc_info.value.code == 40
        assert capsys.readouterr().err == "Error: Something failed\n"

    def test_json_format_exit(self, capsys) -> None:
        """JSON format should print JSON error and exit."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("Something failed", ExitCode.TARGET_NOT_FOUND, json_output=True)

        assert exc_info.value.code == 20

        parsed = json.loads(capsys.readouterr().err)
        assert parsed["status"] == "failed"
        assert parsed["error"]["code"] == "TARGET_NOT_FOUND"
        assert parsed["error"]["message"] == "Something failed"

    def test_int_exit_code(self) -> None:
        """Should work with integer exit codes."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("Failed", 42)

        assert exc_info.value.code == 42


class TestEchoProgress:
    """Tests for echo_progress."""

    def test_rewrites_line(self, capsys) -> None:
        event = PassProgress(
            current_pass=1,
            total_passes=2,
            pass_percent=50.0,
            percent=25.0,
            remaining_seconds=75.0,
            progress=FFmpegProgress(),
        )

        echo_progress(event)

        assert capsys.readouterr().err == "\rPass 1/2:  25.0%, 0:01:15.00 left"

    def test_without_estimate(self, capsys) -> None:
        event = PassProgress(1, 1, 0.0, 0.0, None, FFmpegProgress())

        echo_progress(event)

        assert capsys.readouterr().err == "\rPass 1/1:   0.0%"


class TestStreamsOutput:
    """Tests for probe output helpers."""

    def test_streams_to_dict(self, video_streams) -> None:
        data = streams_to_dict("in.mp4", video_streams)

        assert data["path"] == "in.mp4"
        assert data["duration"] == 60.0
        assert [s["type"] for s in data["streams"]] == ["video", "audio"]
        assert data["streams"][0]["width"] == 1920

    def test_format_streams_human(self, audio_streams) -> None:
        text = format_streams_human("song.mp3", audio_streams)

        lines = text.splitlines()
        assert lines[0] == "File: song.mp3"
        assert lines[1] == "Duration: 0:00:30.00"
        assert lines[2] == "Streams (1):"
        assert "mp3" in lines[3]
        assert "2 ch" in lines[3]
        assert lines[3].endswith("128 kb/s")
