"""
Pytest configuration and fixtures for codec tests.
"""
import struct

import pytest

from services.stats import codec_stats
from wavecodec.tone import square_wave_file
from wavecodec.wav import encode_wave


def raw_wave(
    samples=(0, 1, -1, 2),
    num_channels=1,
    sample_rate=8000,
    bits_per_sample=16,
    audio_format=1,
    byte_rate=None,
    block_align=None,
    data_size=None,
    file_size=None,
    trailing=b"",
    riff=b"RIFF",
    chunk_size=16,
):
    """Hand-pack a WAVE buffer, with any header field overridable."""
    code = {8: "b", 16: "h", 32: "i"}.get(bits_per_sample, "h")
    payload = struct.pack(f"<{len(samples)}{code}", *samples)
    if byte_rate is None:
        byte_rate = sample_rate * num_channels * bits_per_sample // 8
    if block_align is None:
        block_align = num_channels * bits_per_sample // 8
    if data_size is None:
        data_size = len(payload)
    body = (
        b"WAVE"
        + b"fmt " + struct.pack("<IHHIIHH", chunk_size, audio_format, num_channels,
                                sample_rate, byte_rate, block_align, bits_per_sample)
        + b"data" + struct.pack("<I", data_size) + payload + trailing
    )
    if file_size is None:
        file_size = len(body)
    return riff + struct.pack("<I", file_size) + body


@pytest.fixture
def make_raw_wave():
    """Fixture exposing the raw WAVE packer."""
    return raw_wave


@pytest.fixture
def square_wave():
    """One second of the reference 16-bit mono square wave."""
    return square_wave_file()


@pytest.fixture
def square_wave_bytes(square_wave):
    return encode_wave(square_wave)


@pytest.fixture(autouse=True)
def reset_stats():
    """Each test starts with fresh codec counters."""
    codec_stats.reset()
    yield
    codec_stats.reset()
