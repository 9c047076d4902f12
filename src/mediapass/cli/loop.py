"""CLI loop command: encode a concat descriptor."""

from __future__ import annotations

from pathlib import Path

import click

from mediapass.cli.context import get_dry_run_mediapass, get_mediapass
from mediapass.cli.exit_codes import ExitCode, exit_code_for
from mediapass.cli.format_options import build_cli_format, format_options
from mediapass.cli.output import error_exit
from mediapass.core.formatting import format_command
from mediapass.driver.dry_run import DryRunDriver
from mediapass.exceptions import MediaPassError
from mediapass.jobs.runner import loop_media
from mediapass.media.concat import write_concat_descriptor


@click.command("loop")
@click.argument("descriptor", type=click.Path(path_type=Path))
@click.argument("output_path", metavar="OUTPUT", type=click.Path(path_type=Path))
@click.option(
    "--times",
    "-n",
    type=int,
    default=1,
    show_default=True,
    help="How many times the whole sequence plays.",
)
@click.option(
    "--segment",
    "segments",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Write DESCRIPTOR from these segments first. Repeatable.",
)
@format_options
@click.option("--dry-run", is_flag=True, help="Print the ffmpeg command only.")
@click.pass_context
def loop_command(
    ctx: click.Context,
    descriptor: Path,
    output_path: Path,
    times: int,
    segments: tuple[Path, ...],
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
    dry_run: bool,
) -> None:
    """Encode the segments listed in DESCRIPTOR into OUTPUT.

    DESCRIPTOR is an ffmpeg concat file (``file 'path'`` lines). Only the
    audio bitrate and channel options apply; the run is always one pass.
    """
    driver: DryRunDriver | None = None
    try:
        if segments:
            write_concat_descriptor(segments, descriptor)
        elif not descriptor.exists():
            error_exit(f"File not found: {descriptor}", ExitCode.TARGET_NOT_FOUND)

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

        if dry_run:
            mediapass, driver = get_dry_run_mediapass(ctx)
        else:
            mediapass = get_mediapass(ctx)

        loop_media(descriptor, mediapass).loop(
            target_format, descriptor, times, output_path
        )
    except MediaPassError as e:
        error_exit(str(e), exit_code_for(e))
    except KeyboardInterrupt:
        error_exit("Interrupted", ExitCode.INTERRUPTED)

    if driver is not None:
        for record in driver.records:
            click.echo(format_command(record.argv))
    else:
        click.echo(f"Wrote {output_path}")
