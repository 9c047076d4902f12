"""CLI module for mediapass."""

import logging
from pathlib import Path

import click

from mediapass.cli.exit_codes import ExitCode
from mediapass.cli.output import error_exit
from mediapass.exceptions import ConfigError

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from CLI options.

    Args:
        config_path: Config file to read the [logging] section from.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    from mediapass.config.logging_factory import (
        configure_logging_from_cli,
    )

    configure_logging_from_cli(
        config_path=config_path,
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )
    _logging_configured = True


@click.group()
@click.version_option(package_name="mediapass")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.mediapass/config.toml).",
)
@click.option(
    "--ffmpeg",
    "ffmpeg_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to the ffmpeg binary.",
)
@click.option(
    "--ffprobe",
    "ffprobe_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to the ffprobe binary.",
)
@click.option(
    "--threads",
    type=click.IntRange(min=1),
    default=None,
    help="Thread count passed to ffmpeg as -threads.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Per-pass timeout in seconds.",
)
@click.option(
    "--temp-dir",
    type=click.Path(path_type=Path),
    default=None,
    help="Parent directory for pass log directories.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    ffmpeg_path: Path | None,
    ffprobe_path: Path | None,
    threads: int | None,
    timeout: float | None,
    temp_dir: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """mediapass - Multi-pass ffmpeg transcoding."""
    ctx.ensure_object(dict)

    from mediapass.config import get_config

    # Preserve a config injected by tests
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(
                config_path=config_path,
                ffmpeg_path=ffmpeg_path,
                ffprobe_path=ffprobe_path,
                threads=threads,
                timeout=timeout,
                temp_directory=temp_dir,
                strict=config_path is not None,
            )
        except (ConfigError, ValueError) as e:
            error_exit(str(e), ExitCode.CONFIG_ERROR)

    _configure_logging(config_path, log_level, log_file, log_json)


# Defer import to avoid circular dependency
def _register_commands():
    from mediapass.cli.loop import loop_command
    from mediapass.cli.probe import probe_command
    from mediapass.cli.run import run_command
    from mediapass.cli.transcode import transcode_command

    main.add_command(transcode_command)
    main.add_command(loop_command)
    main.add_command(run_command)
    main.add_command(probe_command)


_register_commands()
