"""Configuration management for mediapass.

Precedence (highest to lowest):
1. CLI flags
2. Environment variables (MEDIAPASS_*)
3. Config file (~/.mediapass/config.toml)
4. Default values
"""

from mediapass.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mediapass.config.env import EnvReader
from mediapass.config.loader import (
    clear_config_cache,
    get_config,
    get_default_config_path,
    get_temp_directory,
    load_config_file,
    load_toml_file,
)
from mediapass.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from mediapass.config.models import (
    FFmpegConfig,
    LoggingConfig,
    MediaPassConfig,
    TempConfig,
    ToolPathsConfig,
)

__all__ = [
    # Models
    "FFmpegConfig",
    "LoggingConfig",
    "MediaPassConfig",
    "TempConfig",
    "ToolPathsConfig",
    # Loader
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "get_temp_directory",
    "load_config_file",
    "load_toml_file",
    # Builder
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    # Logging
    "build_logging_config",
    "configure_logging_from_cli",
]
