"""Exception types for mediapass.

Errors raised by collaborators (probe, process driver) are wrapped into a
small set of domain errors before they leave a Media object. The original
error is always kept as ``__cause__``.
"""

from __future__ import annotations


class MediaPassError(Exception):
    """Base class for all mediapass errors."""

    pass


class InvalidInputError(MediaPassError, ValueError):
    """Caller-provided configuration is structurally invalid.

    Raised before any subprocess is spawned or temporary state is created.
    Never retried.
    """

    pass


class MediaRuntimeError(MediaPassError, RuntimeError):
    """Base class for failures that happen while working on real files."""

    pass


class ProbeError(MediaRuntimeError):
    """An input file could not be probed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class ExecutableNotFoundError(MediaRuntimeError):
    """A required external binary could not be resolved."""

    pass


class EncodingError(MediaRuntimeError):
    """The external binary failed while producing an output.

    Attributes:
        return_code: Exit code reported by the driver (-1 on timeout).
        pass_index: 1-based pass that failed, or None for single-shot runs.
    """

    def __init__(
        self,
        message: str,
        return_code: int | None = None,
        pass_index: int | None = None,
    ) -> None:
        self.return_code = return_code
        self.pass_index = pass_index
        super().__init__(message)


class ExecutionFailureError(MediaPassError):
    """Raised by process drivers when the external process exits abnormally.

    Media objects never let this escape; they rewrap it as EncodingError.
    """

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        return_code: int | None = None,
        stderr_tail: str = "",
    ) -> None:
        self.command = command or []
        self.return_code = return_code
        self.stderr_tail = stderr_tail
        super().__init__(message)


class JobValidationError(MediaPassError):
    """A YAML job file failed validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ConfigError(MediaPassError):
    """The configuration file could not be read or parsed."""

    pass
