"""
File I/O around the codec.
Whole files are read before decoding and written atomically after encoding.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from wavecodec.errors import WaveError
from wavecodec.wav import WaveFile, decode_wave, encode_wave
from services.stats import codec_stats


logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def read_wave_file(path: PathLike) -> WaveFile:
    """Read and decode a WAVE file.

    Raises:
        OSError: if the file cannot be read
        WaveError: if the contents are not a valid canonical PCM WAVE file
    """
    path = Path(path)
    buffer = path.read_bytes()
    try:
        wave = decode_wave(buffer)
    except WaveError as e:
        codec_stats.record_failure(e.kind)
        logger.warning(f"Failed to decode {path}: {e}")
        raise
    codec_stats.record_decode(len(buffer))
    logger.info(
        f"Decoded {path} ({len(buffer)} bytes, {wave.num_channels} ch, "
        f"{wave.sample_rate} Hz, {wave.bits_per_sample}-bit)"
    )
    return wave


def write_wave_file(path: PathLike, wave: WaveFile) -> int:
    """Encode a WaveFile and replace `path` with it in one step.

    Returns the number of bytes written.
    """
    path = Path(path)
    buffer = encode_wave(wave)
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(buffer)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise

    codec_stats.record_encode(len(buffer))
    logger.info(f"Wrote {path} ({len(buffer)} bytes)")
    return len(buffer)
