"""YAML job files: models, loading and execution."""

from mediapass.jobs.loader import load_job, load_job_from_dict, resolve_job_paths
from mediapass.jobs.models import (
    CustomFilterModel,
    FilterEntryModel,
    FormatModel,
    JobModel,
    LoopModel,
    MixFilterModel,
    PadFilterModel,
)
from mediapass.jobs.runner import (
    apply_filters,
    build_format,
    loop_media,
    prepare_media,
    run_job,
)

__all__ = [
    # Models
    "CustomFilterModel",
    "FilterEntryModel",
    "FormatModel",
    "JobModel",
    "LoopModel",
    "MixFilterModel",
    "PadFilterModel",
    # Loading
    "load_job",
    "load_job_from_dict",
    "resolve_job_paths",
    # Running
    "apply_filters",
    "build_format",
    "loop_media",
    "prepare_media",
    "run_job",
]
