"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building MediaPassConfig by composing
multiple configuration sources with explicit precedence handling.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from mediapass.config.env import EnvReader
from mediapass.config.models import (
    FFmpegConfig,
    LoggingConfig,
    MediaPassConfig,
    TempConfig,
    ToolPathsConfig,
)

logger = logging.getLogger(__name__)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Tool paths
    ffmpeg_path: Path | None = None
    ffprobe_path: Path | None = None

    # ffmpeg options
    threads: int | None = None
    timeout: float | None = None
    probe_timeout: int | None = None

    # Temp directory
    temp_directory: Path | None = None

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds MediaPassConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource) -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> MediaPassConfig:
        """Build the final MediaPassConfig with defaults for unset values.

        Returns:
            Complete MediaPassConfig with all values resolved.

        Raises:
            ValueError: If a resolved value fails model validation.
        """
        tools = ToolPathsConfig(
            ffmpeg=self._get("ffmpeg_path", None),
            ffprobe=self._get("ffprobe_path", None),
        )

        ffmpeg = FFmpegConfig(
            threads=self._get("threads", None),
            timeout=self._get("timeout", None),
            probe_timeout=self._get("probe_timeout", 120),
        )

        temp = TempConfig(directory=self._get("temp_directory", None))

        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", True),
            max_bytes=self._get("logging_max_bytes", 10 * 1024 * 1024),
            backup_count=self._get("logging_backup_count", 5),
        )

        return MediaPassConfig(
            tools=tools,
            ffmpeg=ffmpeg,
            temp=temp,
            logging=logging_config,
        )


def _optional_path(value: Any) -> Path | None:
    if value is None or value == "":
        return None
    return Path(str(value)).expanduser()


def source_from_file(data: dict[str, Any]) -> ConfigSource:
    """Create a ConfigSource from a parsed TOML document.

    Expected layout::

        [tools]
        ffmpeg = "/usr/bin/ffmpeg"
        ffprobe = "/usr/bin/ffprobe"

        [ffmpeg]
        threads = 4
        timeout = 3600

        [temp]
        directory = "/dev/shm"

        [logging]
        level = "debug"

    Unknown sections and keys are ignored with a debug message.

    Args:
        data: Parsed config file contents.

    Returns:
        ConfigSource with the values present in the file.
    """
    tools = data.get("tools", {})
    ffmpeg = data.get("ffmpeg", {})
    temp = data.get("temp", {})
    log = data.get("logging", {})

    known = {"tools", "ffmpeg", "temp", "logging"}
    for section in data:
        if section not in known:
            logger.debug("Ignoring unknown config section: %s", section)

    return ConfigSource(
        ffmpeg_path=_optional_path(tools.get("ffmpeg")),
        ffprobe_path=_optional_path(tools.get("ffprobe")),
        threads=ffmpeg.get("threads"),
        timeout=ffmpeg.get("timeout"),
        probe_timeout=ffmpeg.get("probe_timeout"),
        temp_directory=_optional_path(temp.get("directory")),
        logging_level=log.get("level"),
        logging_file=_optional_path(log.get("file")),
        logging_format=log.get("format"),
        logging_include_stderr=log.get("include_stderr"),
        logging_max_bytes=log.get("max_bytes"),
        logging_backup_count=log.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create a ConfigSource from MEDIAPASS_* environment variables.

    Args:
        reader: Environment reader.

    Returns:
        ConfigSource with the values present in the environment.
    """
    return ConfigSource(
        ffmpeg_path=reader.get_path("MEDIAPASS_FFMPEG_PATH"),
        ffprobe_path=reader.get_path("MEDIAPASS_FFPROBE_PATH"),
        threads=reader.get_int("MEDIAPASS_THREADS"),
        timeout=reader.get_float("MEDIAPASS_TIMEOUT"),
        temp_directory=reader.get_path("MEDIAPASS_TEMP_DIR"),
        logging_level=reader.get_str("MEDIAPASS_LOG_LEVEL"),
        logging_file=reader.get_path("MEDIAPASS_LOG_FILE", must_exist=False),
        logging_format=reader.get_str("MEDIAPASS_LOG_FORMAT"),
        logging_include_stderr=reader.get_bool("MEDIAPASS_LOG_INCLUDE_STDERR"),
    )
