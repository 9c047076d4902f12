"""YAML job file loading."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mediapass.exceptions import JobValidationError
from mediapass.jobs.models import JobModel

logger = logging.getLogger(__name__)


def load_job(job_path: Path) -> JobModel:
    """Load and validate a job from a YAML file.

    Relative paths inside the job are resolved against the job file's
    directory.

    Raises:
        JobValidationError: If the file is not valid YAML or not a valid job.
        FileNotFoundError: If the job file does not exist.
    """
    if not job_path.exists():
        raise FileNotFoundError(f"Job file not found: {job_path}")

    try:
        with open(job_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise JobValidationError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise JobValidationError("Job file is empty")

    if not isinstance(data, dict):
        raise JobValidationError("Job file must be a YAML mapping")

    job = load_job_from_dict(data)
    return resolve_job_paths(job, job_path.parent)


def load_job_from_dict(data: dict[str, Any]) -> JobModel:
    """Validate a job from a dictionary.

    Raises:
        JobValidationError: If the data is not a valid job.
    """
    try:
        return JobModel.model_validate(data)
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise JobValidationError(message, field=field) from e


def resolve_job_paths(job: JobModel, base_dir: Path) -> JobModel:
    """Return a copy of job with relative paths anchored at base_dir."""

    def anchor(path: Path) -> Path:
        return path if path.is_absolute() else base_dir / path

    updates: dict[str, Any] = {
        "output": anchor(job.output),
        "inputs": [anchor(p) for p in job.inputs],
    }
    if job.input is not None:
        updates["input"] = anchor(job.input)
    if job.loop is not None:
        loop_updates: dict[str, Any] = {}
        if job.loop.descriptor is not None:
            loop_updates["descriptor"] = anchor(job.loop.descriptor)
        if job.loop.segments is not None:
            loop_updates["segments"] = [anchor(p) for p in job.loop.segments]
        updates["loop"] = job.loop.model_copy(update=loop_updates)
    return job.model_copy(update=updates)


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    """Reduce a pydantic error to its first problem and that field's path."""
    errors = error.errors()
    if errors:
        first_error = errors[0]
        loc = ".".join(str(x) for x in first_error.get("loc", []))
        msg = first_error.get("msg", str(error))
        if loc:
            return f"Job validation failed: {loc}: {msg}", loc
        return f"Job validation failed: {msg}", None
    return f"Job validation failed: {error}", None
