"""CLI transcode command."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

import click

from mediapass.cli.context import get_dry_run_mediapass, get_mediapass
from mediapass.cli.exit_codes import ExitCode, exit_code_for
from mediapass.cli.format_options import build_cli_format, format_options
from mediapass.cli.output import echo_progress, error_exit
from mediapass.core.formatting import format_command
from mediapass.driver.dry_run import DryRunDriver
from mediapass.exceptions import InvalidInputError, MediaPassError
from mediapass.filters.coordinates import Dimension
from mediapass.media.opener import DEFAULT_FRAMERATE

logger = logging.getLogger(__name__)


def _split_command(value: str) -> list[str]:
    try:
        return shlex.split(value)
    except ValueError as e:
        raise InvalidInputError(f"Cannot parse command '{value}': {e}") from e


@click.command("transcode")
@click.argument("input_path", metavar="INPUT", type=click.Path(path_type=Path))
@click.argument("output_path", metavar="OUTPUT", type=click.Path(path_type=Path))
@click.option(
    "--input",
    "-i",
    "extra_inputs",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Auxiliary input, added as another -i. Repeatable.",
)
@format_options
@click.option(
    "--command",
    "commands",
    multiple=True,
    help="Raw tokens (shell-quoted) placed after filters. Repeatable.",
)
@click.option("--pad", default=None, metavar="WxH", help="Scale and pad to WxH.")
@click.option("--mix-audio", is_flag=True, help="Mix the audio of all inputs.")
@click.option(
    "--images",
    is_flag=True,
    help="Treat INPUT as an image sequence pattern (e.g. img-%04d.png).",
)
@click.option(
    "--framerate",
    type=float,
    default=DEFAULT_FRAMERATE,
    show_default=True,
    help="Input framerate for --images.",
)
@click.option("--dry-run", is_flag=True, help="Print the ffmpeg commands only.")
@click.option("--progress", is_flag=True, help="Show progress on stderr.")
@click.pass_context
def transcode_command(
    ctx: click.Context,
    input_path: Path,
    output_path: Path,
    extra_inputs: tuple[Path, ...],
    preset: str | None,
    video_codec: str | None,
    audio_codec: str | None,
    bitrate: int | None,
    audio_bitrate: int | None,
    channels: int | None,
    passes: int | None,
    extra_params: tuple[str, ...],
    additional_parameters: tuple[str, ...],
    audio_only: bool,
    commands: tuple[str, ...],
    pad: str | None,
    mix_audio: bool,
    images: bool,
    framerate: float,
    dry_run: bool,
    progress: bool,
) -> None:
    """Transcode INPUT into OUTPUT.

    INPUT is probed to decide between video and audio handling. Video
    inputs honour --passes; audio inputs always run a single pass.
    """
    if not images and not input_path.exists():
        error_exit(f"File not found: {input_path}", ExitCode.TARGET_NOT_FOUND)

    driver: DryRunDriver | None = None
    try:
        target_format = build_cli_format(
            preset=preset,
            video_codec=video_codec,
            audio_codec=audio_codec,
            bitrate=bitrate,
            audio_bitrate=audio_bitrate,
            channels=channels,
            passes=passes,
            extra_params=extra_params,
            additional_parameters=additional_parameters,
            audio_only=audio_only,
        )
        if progress:
            target_format.on_progress(echo_progress)

        if dry_run:
            mediapass, driver = get_dry_run_mediapass(ctx)
        else:
            mediapass = get_mediapass(ctx)

        if images:
            media = mediapass.open_images(input_path, framerate)
        else:
            media = mediapass.open(input_path)

        if extra_inputs:
            media.add_input_file(extra_inputs)
        if pad is not None:
            media.filters().pad(Dimension.parse(pad))
        if mix_audio:
            media.filters().audio_mix()
        for command in commands:
            media.add_command(_split_command(command))

        media.save(target_format, output_path)
    except MediaPassError as e:
        if progress:
            click.echo("", err=True)
        error_exit(str(e), exit_code_for(e))
    except KeyboardInterrupt:
        error_exit("Interrupted", ExitCode.INTERRUPTED)

    if progress:
        click.echo("", err=True)

    if driver is not None:
        for record in driver.records:
            click.echo(format_command(record.argv))
    else:
        click.echo(f"Wrote {output_path}")
