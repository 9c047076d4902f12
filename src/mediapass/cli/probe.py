"""CLI probe command."""

from __future__ import annotations

import json
from pathlib import Path

import click

from mediapass.cli.context import get_prober
from mediapass.cli.exit_codes import ExitCode, exit_code_for
from mediapass.cli.output import error_exit, format_streams_human, streams_to_dict
from mediapass.exceptions import MediaPassError


@click.command("probe")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def probe_command(ctx: click.Context, file: Path, output_format: str) -> None:
    """Show the streams of a media FILE."""
    json_output = output_format == "json"

    if not file.exists():
        error_exit(f"File not found: {file}", ExitCode.TARGET_NOT_FOUND, json_output)

    try:
        streams = get_prober(ctx).streams(file)
    except MediaPassError as e:
        error_exit(str(e), exit_code_for(e), json_output)

    if streams is None:
        error_exit(f'Unable to probe "{file}".', ExitCode.PROBE_FAILED, json_output)

    if json_output:
        click.echo(json.dumps(streams_to_dict(str(file), streams), indent=2))
    else:
        click.echo(format_streams_human(str(file), streams))
