"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (input, config, job files)
    20-29: Target/file errors
    30-39: Tool/dependency errors
    40-49: Encoding errors
    50-59: Probe errors
"""

from __future__ import annotations

from enum import IntEnum

from mediapass.exceptions import (
    ConfigError,
    EncodingError,
    ExecutableNotFoundError,
    InvalidInputError,
    JobValidationError,
    ProbeError,
)


class ExitCode(IntEnum):
    """Exit codes for mediapass CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Validation errors (10-19)
    INVALID_INPUT = 10
    CONFIG_ERROR = 11
    JOB_VALIDATION_ERROR = 12

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30

    # Encoding errors (40-49)
    ENCODING_FAILED = 40

    # Probe errors (50-59)
    PROBE_FAILED = 50


def exit_code_for(error: BaseException) -> ExitCode:
    """Map a mediapass error to the exit code reported for it."""
    if isinstance(error, KeyboardInterrupt):
        return ExitCode.INTERRUPTED
    if isinstance(error, JobValidationError):
        return ExitCode.JOB_VALIDATION_ERROR
    if isinstance(error, ConfigError):
        return ExitCode.CONFIG_ERROR
    if isinstance(error, InvalidInputError):
        return ExitCode.INVALID_INPUT
    if isinstance(error, ExecutableNotFoundError):
        return ExitCode.TOOL_NOT_AVAILABLE
    if isinstance(error, ProbeError):
        return ExitCode.PROBE_FAILED
    if isinstance(error, EncodingError):
        return ExitCode.ENCODING_FAILED
    if isinstance(error, FileNotFoundError):
        return ExitCode.TARGET_NOT_FOUND
    return ExitCode.GENERAL_ERROR
