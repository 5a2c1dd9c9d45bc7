"""Reference square-wave tone used to exercise the encoder."""

from typing import Tuple

from wavecodec.wav import WaveFile


def square_wave(
    sample_rate: int,
    duration_seconds: float,
    amplitude: int,
    half_period: int,
    channels: int = 1,
) -> Tuple[Tuple[int, ...], ...]:
    """Square wave that starts high and flips sign every `half_period` samples.

    Every channel carries the same signal.
    """
    if half_period <= 0:
        raise ValueError(f"half_period must be positive, got {half_period}")
    if channels < 1:
        raise ValueError(f"channels must be at least 1, got {channels}")
    frames = int(sample_rate * duration_seconds)
    wave = tuple(
        amplitude if (i // half_period) % 2 == 0 else -amplitude
        for i in range(frames)
    )
    return (wave,) * channels


def square_wave_file(
    sample_rate: int = 44100,
    duration_seconds: float = 1.0,
    amplitude: int = 16383,
    half_period: int = 100,
    channels: int = 1,
    bits_per_sample: int = 16,
) -> WaveFile:
    """Square wave wrapped in a ready-to-encode WaveFile."""
    samples = square_wave(sample_rate, duration_seconds, amplitude, half_period, channels)
    return WaveFile.build(samples, sample_rate, bits_per_sample)
