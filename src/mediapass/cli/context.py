"""Shared CLI state: configuration and the MediaPass opener.

Commands read everything from ``ctx.obj``. Tests pre-populate
``obj["config"]``, ``obj["mediapass"]`` or ``obj["prober"]`` to avoid
touching real binaries.
"""

from __future__ import annotations

from pathlib import Path

import click

from mediapass.config.loader import get_config, get_temp_directory
from mediapass.config.models import MediaPassConfig
from mediapass.driver.binaries import resolve_binary
from mediapass.driver.dry_run import DryRunDriver
from mediapass.driver.interface import DriverConfiguration
from mediapass.media.opener import MediaPass
from mediapass.probe.interface import Prober


def get_cli_config(ctx: click.Context) -> MediaPassConfig:
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        obj["config"] = get_config()
    return obj["config"]


def get_prober(ctx: click.Context) -> Prober:
    """Return the injected prober, the opener's prober, or a new ffprobe one.

    Raises:
        ExecutableNotFoundError: If ffprobe cannot be found.
    """
    obj = ctx.ensure_object(dict)
    if "prober" in obj:
        return obj["prober"]
    if "mediapass" in obj:
        return obj["mediapass"].prober

    from mediapass.probe.ffprobe import FFprobeProber

    obj["prober"] = FFprobeProber.create(get_cli_config(ctx))
    return obj["prober"]


def get_mediapass(ctx: click.Context) -> MediaPass:
    """Return the opener used for real encodes.

    Raises:
        ExecutableNotFoundError: If ffmpeg or ffprobe cannot be found.
    """
    obj = ctx.ensure_object(dict)
    if "mediapass" not in obj:
        config = get_cli_config(ctx)
        if "prober" in obj:
            from mediapass.driver.ffmpeg import FFmpegDriver

            obj["mediapass"] = MediaPass(
                FFmpegDriver.create(config),
                obj["prober"],
                temp_root=get_temp_directory(config),
            )
        else:
            obj["mediapass"] = MediaPass.create(config)
    return obj["mediapass"]


def get_dry_run_mediapass(ctx: click.Context) -> tuple[MediaPass, DryRunDriver]:
    """Return an opener whose driver records commands instead of running them.

    Inputs are still probed, so ffprobe must be available.
    """
    config = get_cli_config(ctx)
    binary = resolve_binary("ffmpeg", config.tools.ffmpeg) or Path("ffmpeg")
    driver = DryRunDriver(
        binary,
        DriverConfiguration(
            threads=config.ffmpeg.threads, timeout=config.ffmpeg.timeout
        ),
    )
    mediapass = MediaPass(
        driver, get_prober(ctx), temp_root=get_temp_directory(config)
    )
    return mediapass, driver
