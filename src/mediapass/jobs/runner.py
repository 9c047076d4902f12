"""Turn validated jobs into Format and Media objects and run them."""

from __future__ import annotations

import logging
from pathlib import Path

from mediapass.domain import MediaKind
from mediapass.filters.coordinates import Dimension, Point
from mediapass.formats.base import AUDIO_ONLY, AUDIO_VIDEO, Format, with_overrides
from mediapass.formats.presets import get_preset
from mediapass.jobs.models import FilterEntryModel, FormatModel, JobModel
from mediapass.media.base import Media
from mediapass.media.concat import write_concat_descriptor
from mediapass.media.opener import MediaPass

logger = logging.getLogger(__name__)


def build_format(model: FormatModel) -> Format:
    """Build a Format from a job's format section.

    With a preset, explicit fields override the preset's values.

    Raises:
        InvalidInputError: If the resulting format is invalid.
    """
    if model.preset is not None:
        base = get_preset(model.preset)
    else:
        base = Format(capabilities=AUDIO_ONLY if model.audio_only else AUDIO_VIDEO)

    return with_overrides(
        base,
        video_codec=model.video_codec,
        audio_codec=model.audio_codec,
        kilo_bitrate=model.bitrate,
        audio_kilo_bitrate=model.audio_bitrate,
        audio_channels=model.channels,
        extra_params=model.extra_params,
        additional_parameters=model.additional_parameters,
        passes=model.passes,
    )


def apply_filters(media: Media, entries: list[FilterEntryModel]) -> None:
    """Register job filters on media, in file order."""
    filters = media.filters()
    for entry in entries:
        if entry.pad is not None:
            filters.pad(
                Dimension(entry.pad.width, entry.pad.height),
                Point(entry.pad.x, entry.pad.y),
                entry.pad.priority,
            )
        elif entry.mix is not None:
            filters.audio_mix(entry.mix.count, entry.mix.priority)
        elif entry.custom is not None:
            filters.custom(entry.custom.params, entry.custom.priority)


def prepare_media(job: JobModel, mediapass: MediaPass) -> Media:
    """Open the job's input and register inputs, filters and commands.

    Raises:
        ProbeError: If an input cannot be probed.
        InvalidInputError: If a filter does not fit the media.
    """
    assert job.input is not None
    if job.images:
        media = mediapass.open_images(job.input, job.framerate)
    else:
        media = mediapass.open(job.input)

    if job.inputs:
        media.add_input_file(job.inputs)
    apply_filters(media, job.filters)
    for command in job.commands:
        media.add_command(command)
    return media


def loop_media(descriptor: Path, mediapass: MediaPass) -> Media:
    """Media for a concat run; the descriptor is never probed."""
    return Media(
        descriptor,
        mediapass.driver,
        mediapass.prober,
        MediaKind.AUDIO,
        temp_root=mediapass.temp_root,
    )


def run_job(
    job: JobModel, mediapass: MediaPass, format: Format | None = None
) -> Media:
    """Run a job to completion.

    Args:
        job: Validated job.
        mediapass: Opener supplying the driver and prober.
        format: Prebuilt format, e.g. with progress callbacks attached.
            Built from the job when None.

    Raises:
        InvalidInputError, ProbeError, EncodingError: As raised by Media.
    """
    format = format or build_format(job.format)

    if job.loop is not None:
        descriptor = job.loop.descriptor
        if descriptor is None:
            assert job.loop.segments is not None
            descriptor = write_concat_descriptor(
                job.loop.segments, job.output.with_suffix(".concat.txt")
            )
        logger.info("Running concat job", extra={"output": str(job.output)})
        try:
            return loop_media(descriptor, mediapass).loop(
                format, descriptor, job.loop.times, job.output
            )
        finally:
            if job.loop.descriptor is None:
                descriptor.unlink(missing_ok=True)

    media = prepare_media(job, mediapass)
    logger.info(
        "Running job",
        extra={"input": media.path, "output": str(job.output), "passes": format.passes},
    )
    return media.save(format, job.output)
