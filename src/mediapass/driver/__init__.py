"""Process drivers for external binaries.

Module organization:
- interface.py: ProcessDriver protocol, DriverConfiguration
- binaries.py: Executable resolution
- ffmpeg.py: BinaryDriver, FFmpegDriver, VolumeDriver
- dry_run.py: DryRunDriver (records commands only)
- progress.py: Status line parsing and pass-aware listeners
"""

from mediapass.driver.binaries import require_binary, resolve_binary
from mediapass.driver.dry_run import DryRunDriver
from mediapass.driver.ffmpeg import BinaryDriver, FFmpegDriver, VolumeDriver
from mediapass.driver.interface import (
    CommandRecord,
    DriverConfiguration,
    ProcessDriver,
)
from mediapass.driver.progress import (
    FFmpegProgress,
    PassProgress,
    PassProgressListener,
    ProgressCallback,
    ProgressListener,
    parse_stderr_progress,
)

__all__ = [
    # Interface
    "CommandRecord",
    "DriverConfiguration",
    "ProcessDriver",
    # Drivers
    "BinaryDriver",
    "DryRunDriver",
    "FFmpegDriver",
    "VolumeDriver",
    # Binaries
    "require_binary",
    "resolve_binary",
    # Progress
    "FFmpegProgress",
    "PassProgress",
    "PassProgressListener",
    "ProgressCallback",
    "ProgressListener",
    "parse_stderr_progress",
]
