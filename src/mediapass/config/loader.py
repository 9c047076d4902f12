"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (MEDIAPASS_*)
3. Config file (~/.mediapass/config.toml)
4. Default values

Environment variables:
- MEDIAPASS_FFMPEG_PATH: Path to ffmpeg executable
- MEDIAPASS_FFPROBE_PATH: Path to ffprobe executable
- MEDIAPASS_THREADS: Value passed to ffmpeg's -threads
- MEDIAPASS_TIMEOUT: Per-pass timeout in seconds
- MEDIAPASS_TEMP_DIR: Root directory for scoped pass directories
- MEDIAPASS_LOG_LEVEL / MEDIAPASS_LOG_FILE / MEDIAPASS_LOG_FORMAT: Logging
- MEDIAPASS_CONFIG_PATH: Path to config file (overrides default location)
"""

from __future__ import annotations

import logging
import os
import threading
import tomllib
from pathlib import Path

from mediapass.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mediapass.config.env import EnvReader
from mediapass.config.models import MediaPassConfig
from mediapass.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".mediapass"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# path -> (parsed dict, mtime)
_config_cache: dict[Path, tuple[dict, float]] = {}
_config_cache_lock = threading.Lock()


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by MEDIAPASS_CONFIG_PATH environment variable.
    """
    env_path = os.environ.get("MEDIAPASS_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_toml_file(path: Path, *, strict: bool = False) -> dict:
    """Parse a TOML file.

    Args:
        path: File to read.
        strict: If True, raise ConfigError on read or parse failures.
            If False, log a warning and return an empty dict.

    Returns:
        Parsed document, or an empty dict if the file does not exist.

    Raises:
        ConfigError: When strict=True and the file cannot be parsed.
    """
    if not path.exists():
        return {}

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Could not load config file {path}: {e}") from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Results are cached with mtime-based invalidation.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        if path in _config_cache:
            cached_config, cached_mtime = _config_cache[path]
            if current_mtime == cached_mtime:
                return cached_config

        result = load_toml_file(path, strict=strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
    threads: int | None = None,
    timeout: float | None = None,
    temp_directory: Path | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> MediaPassConfig:
    """Get mediapass configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides MEDIAPASS_CONFIG_PATH).
        ffmpeg_path: CLI override for ffmpeg path.
        ffprobe_path: CLI override for ffprobe path.
        threads: CLI override for ffmpeg thread count.
        timeout: CLI override for the per-pass timeout.
        temp_directory: CLI override for the pass directory root.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigError on config file parse failures.

    Returns:
        MediaPassConfig with merged configuration.
    """
    reader = env_reader or EnvReader()

    file_config = load_config_file(config_path, strict=strict)

    cli_source = ConfigSource(
        ffmpeg_path=ffmpeg_path,
        ffprobe_path=ffprobe_path,
        threads=threads,
        timeout=timeout,
        temp_directory=temp_directory,
    )

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config))
    builder.apply(source_from_env(reader))
    builder.apply(cli_source)

    return builder.build()


def get_temp_directory(config: MediaPassConfig | None = None) -> Path | None:
    """Get the root directory for scoped pass directories.

    Returns None when unconfigured or when the configured path is not a
    directory; callers then fall back to the system temp directory.
    """
    config = config or get_config()
    path = config.temp.directory
    if path is None:
        return None
    if not path.is_dir():
        logger.warning(
            "Configured temp directory '%s' is not a directory, "
            "falling back to system default",
            path,
        )
        return None
    return path
