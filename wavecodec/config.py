"""
Configuration settings for the WAVE codec service.
Centralized configuration management with environment variable support.
"""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AudioConfig:
    """Default PCM parameters for encoded output."""
    sample_rate: int = 44100
    channels: int = 1
    bits_per_sample: int = 16

    @property
    def bytes_per_sample(self) -> int:
        return self.bits_per_sample // 8

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.channels * self.bytes_per_sample

    @property
    def block_align(self) -> int:
        return self.channels * self.bytes_per_sample


@dataclass(frozen=True)
class ToneConfig:
    """Reference square-wave tone settings."""
    amplitude: int = 16383
    half_period: int = 100    # samples between sign flips
    duration_seconds: float = 1.0
    max_duration_seconds: float = 60.0  # upper bound for /tone.wav requests
    max_sample_rate: int = 384000
    max_channels: int = 32


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration."""
    host: str = "127.0.0.1"
    port: int = 8000
    max_upload_bytes: int = 64 * 1024 * 1024  # whole file is buffered before decode


@dataclass
class AppConfig:
    """Main application configuration."""
    audio: AudioConfig = field(default_factory=AudioConfig)
    tone: ToneConfig = field(default_factory=ToneConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create configuration from environment variables."""
        return cls(
            audio=AudioConfig(
                sample_rate=int(os.getenv("AUDIO_SAMPLE_RATE", "44100")),
                channels=int(os.getenv("AUDIO_CHANNELS", "1")),
                bits_per_sample=int(os.getenv("AUDIO_BITS_PER_SAMPLE", "16")),
            ),
            tone=ToneConfig(
                amplitude=int(os.getenv("TONE_AMPLITUDE", "16383")),
                half_period=int(os.getenv("TONE_HALF_PERIOD", "100")),
                duration_seconds=float(os.getenv("TONE_DURATION", "1.0")),
                max_duration_seconds=float(os.getenv("TONE_MAX_DURATION", "60.0")),
                max_sample_rate=int(os.getenv("TONE_MAX_SAMPLE_RATE", "384000")),
                max_channels=int(os.getenv("TONE_MAX_CHANNELS", "32")),
            ),
            server=ServerConfig(
                host=os.getenv("SERVER_HOST", "127.0.0.1"),
                port=int(os.getenv("SERVER_PORT", "8000")),
                max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(64 * 1024 * 1024))),
            ),
        )


# Global configuration instance
config = AppConfig.from_env()
