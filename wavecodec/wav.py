"""
WAVE file format codec.
Decodes a canonical PCM RIFF/WAVE buffer into immutable records and encodes
records back into a byte-exact buffer with freshly computed size fields.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Sequence, Tuple

from wavecodec.binary import SAMPLE_FORMATS, ByteReader, ByteWriter
from wavecodec.errors import (
    InvalidBlockAlign,
    InvalidByteRate,
    InvalidChunkSize,
    InvalidFileSize,
    MisalignedDataChunk,
    TrailingBytes,
    UnsupportedAudioFormat,
    UnsupportedBitDepth,
)


logger = logging.getLogger(__name__)

RIFF_ID = b"RIFF"
WAVE_ID = b"WAVE"
FMT_ID = b"fmt "
DATA_ID = b"data"

WAVE_FORMAT_PCM = 1
CHUNK_HEADER_SIZE = 8  # tag + u32 size
RIFF_HEADER_SIZE = 12  # "RIFF" + size + "WAVE"
SUPPORTED_BIT_DEPTHS = tuple(sorted(SAMPLE_FORMATS))
FMT_CHUNK_SIZE = 16
U16_MAX = 0xFFFF
U32_MAX = 0xFFFFFFFF

ChannelData = Tuple[Tuple[int, ...], ...]


def expected_byte_rate(sample_rate: int, num_channels: int, bits_per_sample: int) -> int:
    return sample_rate * num_channels * bits_per_sample // 8


def expected_block_align(num_channels: int, bits_per_sample: int) -> int:
    return num_channels * bits_per_sample // 8


def canonical_file_size(data_size: int) -> int:
    """RIFF size field for a canonical fmt + data layout."""
    return (
        RIFF_HEADER_SIZE - CHUNK_HEADER_SIZE
        + CHUNK_HEADER_SIZE + FMT_CHUNK_SIZE
        + CHUNK_HEADER_SIZE + data_size
    )


def sample_range(bits_per_sample: int) -> Tuple[int, int]:
    """Inclusive (min, max) of a signed sample at this bit depth."""
    half = 1 << (bits_per_sample - 1)
    return -half, half - 1


@dataclass(frozen=True)
class RiffHeader:
    """Outer RIFF header; file_size counts everything after the size field."""
    file_size: int
    magic: bytes = RIFF_ID
    format: bytes = WAVE_ID


@dataclass(frozen=True)
class FmtChunk:
    """Canonical 16-byte PCM format chunk."""
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    audio_format: int = WAVE_FORMAT_PCM
    chunk_size: int = FMT_CHUNK_SIZE
    id: bytes = FMT_ID

    @classmethod
    def pcm(cls, num_channels: int, sample_rate: int, bits_per_sample: int) -> "FmtChunk":
        """Build a PCM fmt chunk with the derived fields computed."""
        return cls(
            num_channels=num_channels,
            sample_rate=sample_rate,
            byte_rate=expected_byte_rate(sample_rate, num_channels, bits_per_sample),
            block_align=expected_block_align(num_channels, bits_per_sample),
            bits_per_sample=bits_per_sample,
        )

    @property
    def bytes_per_sample(self) -> int:
        return self.bits_per_sample // 8


@dataclass(frozen=True)
class DataChunk:
    """
    Sample payload, one tuple of samples per channel.

    All channels must hold the same number of samples; anything else is a
    caller bug and is rejected at construction.
    """
    size: int
    channel_data: ChannelData = field(default_factory=tuple)
    id: bytes = DATA_ID

    def __post_init__(self):
        lengths = {len(channel) for channel in self.channel_data}
        if len(lengths) > 1:
            raise ValueError(f"Channels have unequal sample counts: {sorted(lengths)}")

    @classmethod
    def from_channels(cls, channels: Iterable[Iterable[int]], bits_per_sample: int) -> "DataChunk":
        channel_data = tuple(tuple(int(s) for s in channel) for channel in channels)
        total = sum(len(channel) for channel in channel_data)
        return cls(size=total * (bits_per_sample // 8), channel_data=channel_data)

    @property
    def samples_per_channel(self) -> int:
        return len(self.channel_data[0]) if self.channel_data else 0


@dataclass(frozen=True)
class WaveFile:
    """A whole PCM WAVE file: RIFF header, fmt chunk and data chunk."""
    riff: RiffHeader
    fmt: FmtChunk
    data: DataChunk

    def __post_init__(self):
        fmt, data = self.fmt, self.data
        if not 0 <= fmt.num_channels <= U16_MAX:
            raise ValueError(f"Channel count {fmt.num_channels} does not fit a u16")
        if len(data.channel_data) != fmt.num_channels:
            raise ValueError(
                f"fmt declares {fmt.num_channels} channels, data holds {len(data.channel_data)}"
            )
        if not 0 <= fmt.sample_rate <= U32_MAX:
            raise ValueError(f"Sample rate {fmt.sample_rate} does not fit a u32")
        if fmt.chunk_size != FMT_CHUNK_SIZE:
            raise ValueError(f"fmt chunk size is {fmt.chunk_size}, expected {FMT_CHUNK_SIZE}")

        byte_rate = expected_byte_rate(fmt.sample_rate, fmt.num_channels, fmt.bits_per_sample)
        if byte_rate > U32_MAX:
            raise ValueError(f"Byte rate {byte_rate} does not fit a u32")
        if fmt.byte_rate != byte_rate:
            raise ValueError(f"Byte rate is {fmt.byte_rate}, expected {byte_rate}")
        block_align = expected_block_align(fmt.num_channels, fmt.bits_per_sample)
        if fmt.block_align != block_align:
            raise ValueError(f"Block align is {fmt.block_align}, expected {block_align}")

        data_size = fmt.num_channels * data.samples_per_channel * fmt.bytes_per_sample
        if data.size != data_size:
            raise ValueError(f"Data size is {data.size}, expected {data_size}")
        file_size = canonical_file_size(data_size)
        if file_size > U32_MAX:
            raise ValueError(f"File size {file_size} does not fit a u32")
        if self.riff.file_size != file_size:
            raise ValueError(f"RIFF size is {self.riff.file_size}, expected {file_size}")

    @classmethod
    def build(
        cls,
        channels: Sequence[Sequence[int]],
        sample_rate: int,
        bits_per_sample: int,
    ) -> "WaveFile":
        """
        Assemble a WaveFile from raw channel samples.

        The fmt chunk's derived fields and the RIFF size are computed here,
        never taken from the caller.

        Raises:
            ValueError: on an unsupported bit depth, no channels, unequal
                channel lengths, samples out of range for the bit depth or
                header fields too large for their u16/u32 slots
        """
        if bits_per_sample not in SAMPLE_FORMATS:
            raise ValueError(
                f"Unsupported bits per sample: {bits_per_sample} "
                f"(expected one of {SUPPORTED_BIT_DEPTHS})"
            )
        if not channels:
            raise ValueError("At least one channel is required")
        if len(channels) > U16_MAX:
            raise ValueError(f"At most {U16_MAX} channels fit a WAVE file, got {len(channels)}")
        if not 0 < sample_rate <= U32_MAX:
            raise ValueError(f"Sample rate must be in 1..{U32_MAX}, got {sample_rate}")

        low, high = sample_range(bits_per_sample)
        data = DataChunk.from_channels(channels, bits_per_sample)
        for index, channel in enumerate(data.channel_data):
            if channel and not (low <= min(channel) and max(channel) <= high):
                raise ValueError(
                    f"Channel {index} has samples outside [{low}, {high}] "
                    f"for {bits_per_sample}-bit PCM"
                )

        fmt = FmtChunk.pcm(len(data.channel_data), sample_rate, bits_per_sample)
        return cls(riff=RiffHeader(file_size=canonical_file_size(data.size)), fmt=fmt, data=data)

    @property
    def num_channels(self) -> int:
        return self.fmt.num_channels

    @property
    def sample_rate(self) -> int:
        return self.fmt.sample_rate

    @property
    def bits_per_sample(self) -> int:
        return self.fmt.bits_per_sample

    @property
    def samples_per_channel(self) -> int:
        return self.data.samples_per_channel

    @property
    def duration_seconds(self) -> float:
        return self.samples_per_channel / self.sample_rate if self.sample_rate else 0.0

    def summary(self) -> Dict[str, Any]:
        """JSON-friendly overview (no sample payload)."""
        return {
            "file_size": self.riff.file_size,
            "audio_format": self.fmt.audio_format,
            "num_channels": self.num_channels,
            "sample_rate": self.sample_rate,
            "byte_rate": self.fmt.byte_rate,
            "block_align": self.fmt.block_align,
            "bits_per_sample": self.bits_per_sample,
            "data_size": self.data.size,
            "samples_per_channel": self.samples_per_channel,
            "duration_seconds": round(self.duration_seconds, 6),
        }


# ── Decoder ───────────────────────────────────────────────────────

def read_riff_header(reader: ByteReader, total_length: int) -> RiffHeader:
    """
    Read the 12-byte RIFF header.

    Raises:
        TagMismatch: if the magic or form type is wrong
        InvalidFileSize: if the declared size is not total_length - 8
    """
    magic = reader.expect_tag(RIFF_ID)
    file_size = reader.read_u32()
    expected = total_length - CHUNK_HEADER_SIZE
    if file_size != expected:
        raise InvalidFileSize(file_size, expected)
    form = reader.expect_tag(WAVE_ID)
    return RiffHeader(file_size=file_size, magic=magic, format=form)


def read_fmt_chunk(reader: ByteReader) -> FmtChunk:
    """
    Read the PCM fmt chunk and cross-check its derived fields.

    Field order is the wire format.
    """
    chunk_id = reader.expect_tag(FMT_ID)
    chunk_size = reader.read_u32()
    if chunk_size != FMT_CHUNK_SIZE:
        raise InvalidChunkSize(chunk_size, FMT_CHUNK_SIZE)
    audio_format = reader.read_u16()
    num_channels = reader.read_u16()
    sample_rate = reader.read_u32()
    byte_rate = reader.read_u32()
    block_align = reader.read_u16()
    bits_per_sample = reader.read_u16()

    expected_rate = expected_byte_rate(sample_rate, num_channels, bits_per_sample)
    if byte_rate != expected_rate:
        raise InvalidByteRate(byte_rate, expected_rate)

    expected_align = expected_block_align(num_channels, bits_per_sample)
    if block_align != expected_align:
        raise InvalidBlockAlign(block_align, expected_align)

    if audio_format != WAVE_FORMAT_PCM:
        raise UnsupportedAudioFormat(audio_format)

    logger.debug(
        f"fmt chunk: {num_channels} ch, {sample_rate} Hz, {bits_per_sample}-bit, "
        f"byte rate {byte_rate}, block align {block_align}"
    )
    return FmtChunk(
        num_channels=num_channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        audio_format=audio_format,
        chunk_size=chunk_size,
        id=chunk_id,
    )


def read_data_chunk(reader: ByteReader, num_channels: int, bits_per_sample: int) -> DataChunk:
    """
    Read the data chunk, de-interleaving frames into per-channel samples.

    Args:
        reader: cursor positioned just after the fmt chunk
        num_channels: channel count from the fmt chunk
        bits_per_sample: sample width from the fmt chunk

    Raises:
        UnsupportedBitDepth: if bits_per_sample is not 8, 16 or 32
        MisalignedDataChunk: if size is not a whole number of frames
        UnexpectedEndOfInput: if the buffer ends before the declared size
    """
    chunk_id = reader.expect_tag(DATA_ID)
    size = reader.read_u32()

    if bits_per_sample not in SAMPLE_FORMATS:
        raise UnsupportedBitDepth(bits_per_sample)

    frame_size = expected_block_align(num_channels, bits_per_sample)
    if frame_size == 0:
        if size:
            raise MisalignedDataChunk(size, frame_size)
        return DataChunk(size=size, channel_data=(), id=chunk_id)
    if size % frame_size:
        raise MisalignedDataChunk(size, frame_size)

    sample_count = size // frame_size
    channels = [[] for _ in range(num_channels)]
    for _ in range(sample_count):
        for channel in channels:
            channel.append(reader.read_sample(bits_per_sample))

    logger.debug(f"data chunk: {size} bytes, {sample_count} frames")
    return DataChunk(
        size=size,
        channel_data=tuple(tuple(channel) for channel in channels),
        id=chunk_id,
    )


def decode_wave(buffer: bytes) -> WaveFile:
    """
    Decode a complete canonical PCM WAVE buffer.

    The first failure aborts the decode; no partial WaveFile is returned.

    Raises:
        WaveError: subclass naming the exact failure
    """
    reader = ByteReader(buffer)
    riff = read_riff_header(reader, len(reader))
    fmt = read_fmt_chunk(reader)
    data = read_data_chunk(reader, fmt.num_channels, fmt.bits_per_sample)
    if not reader.at_end:
        raise TrailingBytes(reader.remaining)
    return WaveFile(riff=riff, fmt=fmt, data=data)


# ── Encoder ───────────────────────────────────────────────────────

def _encode_fmt_chunk(fmt: FmtChunk) -> bytes:
    writer = ByteWriter()
    writer.write_tag(FMT_ID)
    writer.write_u32(0)  # patched below
    writer.write_u16(WAVE_FORMAT_PCM)
    writer.write_u16(fmt.num_channels)
    writer.write_u32(fmt.sample_rate)
    writer.write_u32(expected_byte_rate(fmt.sample_rate, fmt.num_channels, fmt.bits_per_sample))
    writer.write_u16(expected_block_align(fmt.num_channels, fmt.bits_per_sample))
    writer.write_u16(fmt.bits_per_sample)
    writer.patch_u32(4, len(writer) - CHUNK_HEADER_SIZE)
    return writer.getvalue()


def _encode_data_chunk(data: DataChunk, bits_per_sample: int) -> bytes:
    writer = ByteWriter()
    writer.write_tag(DATA_ID)
    writer.write_u32(0)  # patched below
    for frame in zip(*data.channel_data):
        for sample in frame:
            writer.write_sample(bits_per_sample, sample)
    writer.patch_u32(4, len(writer) - CHUNK_HEADER_SIZE)
    return writer.getvalue()


def encode_wave(wave: WaveFile) -> bytes:
    """
    Serialize a WaveFile into a canonical PCM WAVE buffer.

    All size fields and the fmt chunk's derived fields are recomputed from
    the content; the RIFF size is computed last, once both chunks exist.
    """
    bits = wave.fmt.bits_per_sample
    if bits not in SAMPLE_FORMATS:
        raise ValueError(f"Unsupported bits per sample: {bits}")

    fmt_bytes = _encode_fmt_chunk(wave.fmt)
    data_bytes = _encode_data_chunk(wave.data, bits)

    header = ByteWriter()
    header.write_tag(RIFF_ID)
    header.write_u32(RIFF_HEADER_SIZE + len(fmt_bytes) + len(data_bytes) - CHUNK_HEADER_SIZE)
    header.write_tag(WAVE_ID)

    buffer = header.getvalue() + fmt_bytes + data_bytes
    logger.debug(f"Encoded {len(buffer)} bytes ({wave.samples_per_channel} frames)")
    return buffer
