"""
Decode errors for the WAVE codec.
Every failure aborts the whole decode and carries the offending values.
"""

from typing import Any, Dict


class WaveError(Exception):
    """Base class for all WAVE decode failures."""

    kind = "WaveError"

    def details(self) -> Dict[str, Any]:
        """Offending values, keyed by name, for diagnostics."""
        return {}


class TagMismatch(WaveError):
    """Expected literal tag not found at the cursor."""

    kind = "TagMismatch"

    def __init__(self, expected: bytes, actual: bytes, offset: int):
        self.expected = expected
        self.actual = actual
        self.offset = offset
        super().__init__(
            f"Expected tag {expected!r} at offset {offset}, found {actual!r}"
        )

    def details(self) -> Dict[str, Any]:
        return {
            "expected": self.expected.decode("latin-1"),
            "actual": self.actual.decode("latin-1"),
            "offset": self.offset,
        }


class UnexpectedEndOfInput(WaveError):
    """A read needs more bytes than remain in the buffer."""

    kind = "UnexpectedEndOfInput"

    def __init__(self, offset: int, needed: int, available: int):
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"Unexpected end of input at offset {offset}: "
            f"needed {needed} bytes, {available} available"
        )

    def details(self) -> Dict[str, Any]:
        return {"offset": self.offset, "needed": self.needed, "available": self.available}


class _DeclaredVsExpected(WaveError):
    """A stored field disagrees with the value recomputed from its inputs."""

    label = "value"

    def __init__(self, declared: int, expected: int):
        self.declared = declared
        self.expected = expected
        super().__init__(f"Invalid {self.label}: {declared}, expected {expected}")

    def details(self) -> Dict[str, Any]:
        return {"declared": self.declared, "expected": self.expected}


class InvalidFileSize(_DeclaredVsExpected):
    """RIFF-declared size is not the buffer length minus 8."""

    kind = "InvalidFileSize"
    label = "file size"


class InvalidByteRate(_DeclaredVsExpected):
    kind = "InvalidByteRate"
    label = "byte rate"


class InvalidBlockAlign(_DeclaredVsExpected):
    kind = "InvalidBlockAlign"
    label = "block align"


class UnsupportedBitDepth(WaveError):
    """Only 8, 16 and 32-bit signed PCM is decoded."""

    kind = "UnsupportedBitDepth"

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Unsupported bits per sample: {value}")

    def details(self) -> Dict[str, Any]:
        return {"value": self.value}


class UnsupportedAudioFormat(WaveError):
    """Format tag other than 1 (linear PCM)."""

    kind = "UnsupportedAudioFormat"

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Unsupported audio format: {value} (only PCM = 1)")

    def details(self) -> Dict[str, Any]:
        return {"value": self.value}


class MisalignedDataChunk(WaveError):
    """Data chunk size is not a whole number of frames."""

    kind = "MisalignedDataChunk"

    def __init__(self, size: int, block_align: int):
        self.size = size
        self.block_align = block_align
        super().__init__(
            f"Data chunk size {size} is not a multiple of the frame size {block_align}"
        )

    def details(self) -> Dict[str, Any]:
        return {"size": self.size, "block_align": self.block_align}


class TrailingBytes(WaveError):
    """Bytes remain after the data chunk."""

    kind = "TrailingBytes"

    def __init__(self, remaining: int):
        self.remaining = remaining
        super().__init__(f"{remaining} trailing bytes after data chunk")

    def details(self) -> Dict[str, Any]:
        return {"remaining": self.remaining}


class InvalidChunkSize(_DeclaredVsExpected):
    """fmt chunk size other than the canonical 16 bytes."""

    kind = "InvalidChunkSize"
    label = "fmt chunk size"
