"""
Service modules for the WAVE codec server.
"""

from services.stats import (
    codec_stats,
    CodecStats,
    CodecCounters,
)
from services.storage import (
    read_wave_file,
    write_wave_file,
)
from services.handlers import (
    ToneHandler,
    InspectHandler,
    StatsHandler,
)

__all__ = [
    # Statistics
    "codec_stats",
    "CodecStats",
    "CodecCounters",
    # File I/O
    "read_wave_file",
    "write_wave_file",
    # Handlers
    "ToneHandler",
    "InspectHandler",
    "StatsHandler",
]
