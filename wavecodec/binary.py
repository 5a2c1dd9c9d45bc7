"""
Little-endian byte primitives.
A reader that advances a cursor over an in-memory buffer and a writer that
appends to a growing one.
"""

import struct
from typing import Dict

from wavecodec.errors import TagMismatch, UnexpectedEndOfInput


_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_S8 = struct.Struct("<b")
_S16 = struct.Struct("<h")
_S32 = struct.Struct("<i")

# Signed sample codec per supported bit depth
SAMPLE_FORMATS: Dict[int, struct.Struct] = {
    8: _S8,
    16: _S16,
    32: _S32,
}


class ByteReader:
    """Cursor over a byte buffer. Only ever moves forward."""

    def __init__(self, buffer: bytes):
        self._buffer = memoryview(buffer)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._buffer) - self._pos

    @property
    def at_end(self) -> bool:
        return self._pos == len(self._buffer)

    def _require(self, count: int) -> None:
        if count > self.remaining:
            raise UnexpectedEndOfInput(self._pos, count, self.remaining)

    def _unpack(self, codec: struct.Struct) -> int:
        self._require(codec.size)
        (value,) = codec.unpack_from(self._buffer, self._pos)
        self._pos += codec.size
        return value

    def read_bytes(self, count: int) -> bytes:
        self._require(count)
        data = self._buffer[self._pos:self._pos + count].tobytes()
        self._pos += count
        return data

    def read_u8(self) -> int:
        return self._unpack(_U8)

    def read_u16(self) -> int:
        return self._unpack(_U16)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_s8(self) -> int:
        return self._unpack(_S8)

    def read_s16(self) -> int:
        return self._unpack(_S16)

    def read_s32(self) -> int:
        return self._unpack(_S32)

    def read_sample(self, bits_per_sample: int) -> int:
        """Read one signed PCM sample of the given width."""
        return self._unpack(SAMPLE_FORMATS[bits_per_sample])

    def expect_tag(self, tag: bytes) -> bytes:
        """
        Consume a fixed ASCII tag.

        The cursor is left untouched when the bytes at the cursor differ
        from the tag (including when fewer bytes remain than the tag needs).

        Raises:
            TagMismatch: if the next bytes are not the tag
        """
        end = self._pos + len(tag)
        actual = self._buffer[self._pos:end].tobytes()
        if actual != tag:
            if len(actual) < len(tag) and tag.startswith(actual):
                raise UnexpectedEndOfInput(self._pos, len(tag), self.remaining)
            raise TagMismatch(tag, actual, self._pos)
        self._pos = end
        return actual


class ByteWriter:
    """Append-only little-endian buffer."""

    def __init__(self):
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def write_bytes(self, data: bytes) -> None:
        self._buffer += data

    def write_tag(self, tag: bytes) -> None:
        self._buffer += tag

    def write_u8(self, value: int) -> None:
        self._buffer += _U8.pack(value)

    def write_u16(self, value: int) -> None:
        self._buffer += _U16.pack(value)

    def write_u32(self, value: int) -> None:
        self._buffer += _U32.pack(value)

    def write_s8(self, value: int) -> None:
        self._buffer += _S8.pack(value)

    def write_s16(self, value: int) -> None:
        self._buffer += _S16.pack(value)

    def write_s32(self, value: int) -> None:
        self._buffer += _S32.pack(value)

    def write_sample(self, bits_per_sample: int, value: int) -> None:
        self._buffer += SAMPLE_FORMATS[bits_per_sample].pack(value)

    def patch_u32(self, offset: int, value: int) -> None:
        """Overwrite a previously written u32 (size fields known only later)."""
        _U32.pack_into(self._buffer, offset, value)
