"""CLI run command: execute a YAML job file."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from mediapass.cli.context import get_dry_run_mediapass, get_mediapass
from mediapass.cli.exit_codes import ExitCode, exit_code_for
from mediapass.cli.output import echo_progress, error_exit
from mediapass.core.formatting import format_command
from mediapass.driver.dry_run import DryRunDriver
from mediapass.exceptions import MediaPassError
from mediapass.jobs.loader import load_job
from mediapass.jobs.runner import build_format, run_job

logger = logging.getLogger(__name__)


@click.command("run")
@click.argument("job_file", metavar="JOB", type=click.Path(path_type=Path))
@click.option("--dry-run", is_flag=True, help="Print the ffmpeg commands only.")
@click.option("--progress", is_flag=True, help="Show progress on stderr.")
@click.option(
    "--validate-only",
    is_flag=True,
    help="Validate the job file and exit without running it.",
)
@click.pass_context
def run_command(
    ctx: click.Context,
    job_file: Path,
    dry_run: bool,
    progress: bool,
    validate_only: bool,
) -> None:
    """Run the encode described by a YAML JOB file."""
    try:
        job = load_job(job_file)
    except FileNotFoundError as e:
        error_exit(str(e), ExitCode.TARGET_NOT_FOUND)
    except MediaPassError as e:
        error_exit(str(e), exit_code_for(e))

    if validate_only:
        click.echo(f"Job is valid: {job_file}")
        return

    driver: DryRunDriver | None = None
    try:
        target_format = build_format(job.format)
        if progress:
            target_format.on_progress(echo_progress)

        if dry_run:
            mediapass, driver = get_dry_run_mediapass(ctx)
        else:
            mediapass = get_mediapass(ctx)

        run_job(job, mediapass, target_format)
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
        click.echo(f"Wrote {job.output}")
