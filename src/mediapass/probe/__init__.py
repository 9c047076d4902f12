"""Probing services: inspect stream metadata of input files."""

from mediapass.probe.ffprobe import FFprobeProber
from mediapass.probe.interface import Prober, StreamCollection, StreamDescriptor
from mediapass.probe.parsers import parse_ffprobe_output

__all__ = [
    "FFprobeProber",
    "Prober",
    "StreamCollection",
    "StreamDescriptor",
    "parse_ffprobe_output",
]
