"""Command-token filters.

Module organization:
- base.py: Filter protocol, SimpleFilter, EXTRA_PARAMS_PRIORITY
- chain.py: FilterChain and FrozenFilterChain
- coordinates.py: Dimension and Point
- audio.py / video.py: Concrete filters
- facade.py: MediaFilters registration helpers
"""

from mediapass.filters.audio import AudioMixFilter
from mediapass.filters.base import EXTRA_PARAMS_PRIORITY, Filter, SimpleFilter
from mediapass.filters.chain import FilterChain, FrozenFilterChain
from mediapass.filters.coordinates import Dimension, Point
from mediapass.filters.facade import MediaFilters
from mediapass.filters.video import PadFilter

__all__ = [
    "EXTRA_PARAMS_PRIORITY",
    "AudioMixFilter",
    "Dimension",
    "Filter",
    "FilterChain",
    "FrozenFilterChain",
    "MediaFilters",
    "PadFilter",
    "Point",
    "SimpleFilter",
]
