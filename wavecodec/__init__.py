"""
PCM WAVE codec: byte primitives, decoder, encoder and reference tone.
"""

from wavecodec.config import config, AppConfig, AudioConfig, ToneConfig, ServerConfig
from wavecodec.errors import (
    WaveError,
    TagMismatch,
    InvalidFileSize,
    InvalidByteRate,
    InvalidBlockAlign,
    InvalidChunkSize,
    UnsupportedBitDepth,
    UnsupportedAudioFormat,
    UnexpectedEndOfInput,
    MisalignedDataChunk,
    TrailingBytes,
)
from wavecodec.wav import (
    RiffHeader,
    FmtChunk,
    DataChunk,
    WaveFile,
    decode_wave,
    encode_wave,
)
from wavecodec.tone import square_wave, square_wave_file

__all__ = [
    # Configuration
    "config",
    "AppConfig",
    "AudioConfig",
    "ToneConfig",
    "ServerConfig",
    # Errors
    "WaveError",
    "TagMismatch",
    "InvalidFileSize",
    "InvalidByteRate",
    "InvalidBlockAlign",
    "InvalidChunkSize",
    "UnsupportedBitDepth",
    "UnsupportedAudioFormat",
    "UnexpectedEndOfInput",
    "MisalignedDataChunk",
    "TrailingBytes",
    # Codec
    "RiffHeader",
    "FmtChunk",
    "DataChunk",
    "WaveFile",
    "decode_wave",
    "encode_wave",
    "square_wave",
    "square_wave_file",
]
