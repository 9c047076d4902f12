"""Tests for the mediapass CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from mediapass.cli import main
from mediapass.config.models import MediaPassConfig
from mediapass.media.opener import MediaPass


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep CLI invocations from reconfiguring the root logger."""
    with patch("mediapass.cli._configure_logging"):
        yield


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    path = tmp_path / "in.mp4"
    path.write_bytes(b"\x00")
    return path


@pytest.fixture
def invoke(runner: CliRunner, tmp_path: Path):
    """Invoke main with an injected config and a fake-backed MediaPass."""

    def _invoke(args: list[str], driver=None, prober=None):
        return runner.invoke(
            main,
            args,
            obj={
                "config": MediaPassConfig(),
                "mediapass": MediaPass(driver, prober, temp_root=tmp_path),
            },
        )

    return _invoke


@pytest.fixture
def ffmpeg_on_path():
    with patch(
        "mediapass.cli.context.resolve_binary", return_value=Path("/usr/bin/ffmpeg")
    ):
        yield


class TestTranscodeCommand:
    """Tests for the transcode command."""

    def test_missing_input(self, invoke, fake_driver, fake_prober, tmp_path) -> None:
        result = invoke(
            ["transcode", str(tmp_path / "nope.mp4"), str(tmp_path / "out.mp4")],
            fake_driver,
            fake_prober,
        )

        assert result.exit_code == 20
        assert "File not found" in result.output
        assert fake_driver.calls == []

    def test_writes_output(
        self, invoke, fake_driver, fake_prober, input_file, tmp_path
    ) -> None:
        output = tmp_path / "out.mp4"

        result = invoke(
            ["transcode", str(input_file), str(output), "--bitrate", "800"],
            fake_driver,
            fake_prober,
        )

        assert result.exit_code == 0, result.output
        assert f"Wrote {output}" in result.output
        assert len(fake_driver.calls) == 1
        args = fake_driver.calls[0]
        assert args[:3] == ["-y", "-i", str(input_file)]
        assert "800k" in args
        assert args[-1] == str(output)

    def test_pad_mix_and_command(
        self, invoke, fake_driver, fake_prober, input_file, tmp_path
    ) -> None:
        music = tmp_path / "music.mp3"
        result = invoke(
            [
                "transcode",
                str(input_file),
                str(tmp_path / "out.mp4"),
                "-i",
                str(music),
                "--pad",
                "1280x720",
                "--mix-audio",
                "--command",
                "-map_metadata -1",
            ],
            fake_driver,
            fake_prober,
        )

        assert result.exit_code == 0, result.output
        args = fake_driver.calls[0]
        assert args[3:5] == ["-i", str(music)]
        assert "-vf" in args
        assert "-filter_complex" in args
        position = args.index("-map_metadata")
        assert args[position + 1] == "-1"

    def test_x264_preset_runs_two_passes(
        self, invoke, fake_driver, fake_prober, input_file, tmp_path
    ) -> None:
        result = invoke(
            [
                "transcode",
                str(input_file),
                str(tmp_path / "out.mp4"),
                "--preset",
                "x264",
            ],
            fake_driver,
            fake_prober,
        )

        assert result.exit_code == 0, result.output
        assert len(fake_driver.calls) == 2
        assert "-pass" in fake_driver.calls[0]
        assert fake_driver.calls[1][fake_driver.calls[1].index("-pass") + 1] == "2"

    def test_dry_run_prints_commands(
        self, invoke, fake_driver, fake_prober, input_file, tmp_path, ffmpeg_on_path
    ) -> None:
        output = tmp_path / "out.mp4"

        result = invoke(
            ["transcode", str(input_file), str(output), "--passes", "2", "--dry-run"],
            fake_driver,
            fake_prober,
        )

        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("/usr/bin/ffmpeg -y -i ")
        assert "-pass 1 -passlogfile" in lines[0]
        assert "-pass 2 -passlogfile" in lines[1]
        assert lines[1].endswith(str(output))
        assert fake_driver.calls == []

    def test_invalid_pass_count(
        self, invoke, fake_driver, fake_prober, input_file, tmp_path
    ) -> None:
        result = invoke(
            ["transcode", str(input_file), str(tmp_path / "out.mp4"), "--passes", "0"],
            fake_driver,
            fake_prober,
        )

        assert result.exit_code == 10
        assert fake_driver.calls == []

    def test_invalid_pad(
        self, invoke, fake_driver, fake_prober, input_file, tmp_path
    ) -> None:
        result = invoke(
            ["transcode", str(input_file), str(tmp_path / "out.mp4"), "--pad", "wide"],
            fake_driver,
            fake_prober,
        )

        assert result.exit_code == 10
        assert "Invalid dimension" in result.output

    def test_unbalanced_command_quote(
        self, invoke, fake_driver, fake_prober, input_file, tmp_path
    ) -> None:
        result = invoke(
            [
                "transcode",
                str(input_file),
                str(tmp_path / "out.mp4"),
                "--command",
                "-metadata 'title",
            ],
            fake_driver,
            fake_prober,
        )

        assert result.exit_code == 10
        assert "Cannot parse command" in result.output

    def test_encoding_failure(
        self, invoke, make_driver, fake_prober, input_file, tmp_path
    ) -> None:
        driver = make_driver(fail_on={1})

        result = invoke(
            ["transcode", str(input_file), str(tmp_path / "out.mp4")],
            driver,
            fake_prober,
        )

        assert result.exit_code == 40
        assert "Encoding failed" in result.output

    def test_unprobeable_input(
        self, invoke, fake_driver, make_prober, input_file, tmp_path
    ) -> None:
        result = invoke(
            ["transcode", str(input_file), str(tmp_path / "out.mp4")],
            fake_driver,
            make_prober(default=None),
        )

        assert result.exit_code == 50
        assert "Unable to probe" in result.output


class TestLoopCommand:
    """Tests for the loop command."""

    def test_writes_descriptor_from_segments(
        self, invoke, fake_driver, fake_prober, tmp_path
    ) -> None:
        descriptor = tmp_path / "list.txt"
        output = tmp_path / "out.mp3"

        result = invoke(
            [
                "loop",
                str(descriptor),
                str(output),
                "--times",
                "3",
                "--segment",
                "intro.mp3",
                "--segment",
                "body.mp3",
                "--preset",
                "mp3",
            ],
            fake_driver,
            fake_prober,
        )

        assert result.exit_code == 0, result.output
        intro, body = Path("intro.mp3").resolve(), Path("body.mp3").resolve()
        assert descriptor.read_text() == f"file '{intro}'\nfile '{body}'\n"
        args = fake_driver.calls[0]
        assert args[:4] == ["-stream_loop", "2", "-f", "concat"]
        assert args[4:8] == ["-safe", "0", "-i", str(descriptor)]
        assert args[-1] == str(output)
        assert fake_prober.calls == []

    def test_missing_descriptor(
        self, invoke, fake_driver, fake_prober, tmp_path
    ) -> None:
        result = invoke(
            ["loop", str(tmp_path / "list.txt"), str(tmp_path / "out.mp3")],
            fake_driver,
            fake_prober,
        )

        assert result.exit_code == 20
        assert fake_driver.calls == []

    def test_invalid_times(self, invoke, fake_driver, fake_prober, tmp_path) -> None:
        descriptor = tmp_path / "list.txt"
        descriptor.write_text("file 'a.mp3'\n")

        result = invoke(
            ["loop", str(descriptor), str(tmp_path / "out.mp3"), "--times", "0"],
            fake_driver,
            fake_prober,
        )

        assert result.exit_code == 10
        assert "Repeat count" in result.output


class TestRunCommand:
    """Tests for the run command."""

    @pytest.fixture
    def job_file(self, tmp_path: Path, input_file: Path) -> Path:
        path = tmp_path / "job.yaml"
        path.write_text(
            f"input: {input_file}\n"
            "output: out.mp4\n"
            "format:\n"
            "  bitrate: 500\n"
        )
        return path

    def test_validate_only(self, invoke, fake_driver, fake_prober, job_file) -> None:
        result = invoke(
            ["run", str(job_file), "--validate-only"], fake_driver, fake_prober
        )

        assert result.exit_code == 0, result.output
        assert "Job is valid" in result.output
        assert fake_driver.calls == []

    def test_runs_job(
        self, invoke, fake_driver, fake_prober, job_file, tmp_path
    ) -> None:
        result = invoke(["run", str(job_file)], fake_driver, fake_prober)

        assert result.exit_code == 0, result.output
        assert f"Wrote {tmp_path / 'out.mp4'}" in result.output
        assert "500k" in fake_driver.calls[0]

    def test_invalid_job(self, invoke, fake_driver, fake_prober, tmp_path) -> None:
        path = tmp_path / "job.yaml"
        path.write_text("output: out.mp4\nformat:\n  preset: nope\n")

        result = invoke(["run", str(path)], fake_driver, fake_prober)

        assert result.exit_code == 12
        assert "Job validation failed" in result.output

    def test_missing_job(self, invoke, fake_driver, fake_prober, tmp_path) -> None:
        result = invoke(
            ["run", str(tmp_path / "missing.yaml")], fake_driver, fake_prober
        )

        assert result.exit_code == 20


class TestProbeCommand:
    """Tests for the probe command."""

    def test_human_output(
        self, invoke, fake_driver, fake_prober, input_file
    ) -> None:
        result = invoke(["probe", str(input_file)], fake_driver, fake_prober)

        assert result.exit_code == 0, result.output
        assert f"File: {input_file}" in result.output
        assert "Streams (2):" in result.output
        assert "1920x1080" in result.output

    def test_json_output(self, invoke, fake_driver, fake_prober, input_file) -> None:
        result = invoke(
            ["probe", str(input_file), "--format", "json"], fake_driver, fake_prober
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["path"] == str(input_file)
        assert [s["type"] for s in data["streams"]] == ["video", "audio"]

    def test_missing_file(self, invoke, fake_driver, fake_prober, tmp_path) -> None:
        result = invoke(
            ["probe", str(tmp_path / "nope.mp4")], fake_driver, fake_prober
        )

        assert result.exit_code == 20
        assert "File not found" in result.output

    def test_unprobeable_file(
        self, invoke, fake_driver, make_prober, input_file
    ) -> None:
        result = invoke(
            ["probe", str(input_file), "-f", "json"],
            fake_driver,
            make_prober(default=None),
        )

        assert result.exit_code == 50
        assert '"PROBE_FAILED"' in result.output


class TestMainGroup:
    """Tests for the top-level group options."""

    def test_bad_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        config_path = tmp_path / "config.toml"
        config_path.write_text("[ffmpeg\nthreads = ")
        media = tmp_path / "in.mp4"
        media.write_bytes(b"\x00")

        result = runner.invoke(
            main, ["--config", str(config_path), "probe", str(media)]
        )

        assert result.exit_code == 11
        assert "Could not load config file" in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        for name in ("transcode", "loop", "run", "probe"):
            assert name in result.output
