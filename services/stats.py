"""
Codec usage statistics.
Counts decodes, encodes and failures by error kind for the /stats endpoint.
"""

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)


@dataclass
class CodecCounters:
    """Raw counters since startup (or the last reset)."""
    started_at: float = field(default_factory=time.time)
    decoded: int = 0
    encoded: int = 0
    bytes_decoded: int = 0
    bytes_encoded: int = 0
    failures: Counter = field(default_factory=Counter)
    last_activity: float = field(default_factory=time.time)

    @property
    def elapsed(self) -> float:
        return time.time() - self.started_at


class CodecStats:
    """
    Singleton holding process-wide codec counters.

    Requests are handled one buffer at a time on the event loop, so plain
    counters are enough.
    """

    _instance: Optional["CodecStats"] = None

    def __new__(cls) -> "CodecStats":
        """Singleton pattern for global stats."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._counters = CodecCounters()
        self._initialized = True

    @property
    def counters(self) -> CodecCounters:
        return self._counters

    def record_decode(self, byte_count: int) -> None:
        self._counters.decoded += 1
        self._counters.bytes_decoded += byte_count
        self._counters.last_activity = time.time()

    def record_encode(self, byte_count: int) -> None:
        self._counters.encoded += 1
        self._counters.bytes_encoded += byte_count
        self._counters.last_activity = time.time()

    def record_failure(self, kind: str) -> None:
        self._counters.failures[kind] += 1
        self._counters.last_activity = time.time()

    def reset(self) -> None:
        self._counters = CodecCounters()
        logger.debug("Codec stats reset")

    def get_stats(self) -> Dict[str, Any]:
        c = self._counters
        return {
            "uptime_seconds": round(c.elapsed, 2),
            "idle_seconds": round(time.time() - c.last_activity, 2),
            "decoded": c.decoded,
            "encoded": c.encoded,
            "bytes_decoded": c.bytes_decoded,
            "bytes_encoded": c.bytes_encoded,
            "failures": dict(c.failures),
        }


codec_stats = CodecStats()
