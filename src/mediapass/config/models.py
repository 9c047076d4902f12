"""Configuration data models.

This module defines dataclasses for mediapass configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path

_VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})
_VALID_LOG_FORMATS = frozenset({"text", "json"})


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, tools are looked up in PATH.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass
class FFmpegConfig:
    """Options forwarded to every ffmpeg invocation."""

    threads: int | None = None
    """Value for ``-threads``. None leaves the choice to ffmpeg."""

    timeout: float | None = None
    """Per-pass timeout in seconds. None means no limit."""

    probe_timeout: int = 120
    """Timeout in seconds for ffprobe calls."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.threads is not None and self.threads < 1:
            raise ValueError(f"threads must be at least 1, got {self.threads}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.probe_timeout < 1:
            raise ValueError(
                f"probe_timeout must be at least 1, got {self.probe_timeout}"
            )


@dataclass
class TempConfig:
    """Where scoped pass directories are created."""

    # None means the system temp directory
    directory: Path | None = None


@dataclass
class LoggingConfig:
    """Configuration for logging output."""

    level: str = "info"
    file: Path | None = None
    format: str = "text"
    include_stderr: bool = True
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.casefold() not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"level must be one of {sorted(_VALID_LOG_LEVELS)}, got {self.level}"
            )
        if self.format.casefold() not in _VALID_LOG_FORMATS:
            raise ValueError(
                f"format must be one of {sorted(_VALID_LOG_FORMATS)}, "
                f"got {self.format}"
            )
        if self.max_bytes < 1:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(
                f"backup_count must be non-negative, got {self.backup_count}"
            )


@dataclass
class MediaPassConfig:
    """Root configuration object."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    ffmpeg: FFmpegConfig = field(default_factory=FFmpegConfig)
    temp: TempConfig = field(default_factory=TempConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
