"""
Request handlers for the WAVE codec service.
Tone generation, upload inspection and stats endpoints.
"""

import json
import logging
from typing import Any, Callable, Awaitable, Dict, List, Optional, Tuple
from urllib.parse import parse_qs

from wavecodec.config import config
from wavecodec.errors import WaveError
from wavecodec.tone import square_wave_file
from wavecodec.wav import decode_wave, encode_wave
from services.stats import codec_stats


logger = logging.getLogger(__name__)


# Type aliases for ASGI
Scope = Dict[str, Any]
Receive = Callable[[], Awaitable[Dict[str, Any]]]
Send = Callable[[Dict[str, Any]], Awaitable[None]]
Headers = List[Tuple[bytes, bytes]]


class RequestTooLarge(Exception):
    """Request body exceeded the configured upload limit."""


class ClientDisconnected(Exception):
    """Client went away before the request body was complete."""


async def send_response(send: Send, status: int, body: bytes, content_type: bytes,
                        extra_headers: Optional[Headers] = None) -> None:
    """Send a complete (non-streaming) HTTP response."""
    headers: Headers = [
        (b"content-type", content_type),
        (b"content-length", str(len(body)).encode()),
    ]
    if extra_headers:
        headers.extend(extra_headers)
    await send({
        "type": "http.response.start",
        "status": status,
        "headers": headers,
    })
    await send({
        "type": "http.response.body",
        "body": body,
    })


async def send_json(send: Send, status: int, payload: Dict[str, Any]) -> None:
    body = json.dumps(payload, indent=2).encode()
    await send_response(send, status, body, b"application/json",
                        [(b"access-control-allow-origin", b"*")])


async def read_body(receive: Receive, limit: int) -> bytes:
    """Buffer the whole request body; the codec works on complete files."""
    chunks: List[bytes] = []
    total = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            raise ClientDisconnected(f"Disconnected after {total} bytes")
        chunk = message.get("body", b"")
        total += len(chunk)
        if total > limit:
            raise RequestTooLarge(f"Body exceeds {limit} bytes")
        chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def _query_params(scope: Scope) -> Dict[str, str]:
    raw = parse_qs(scope.get("query_string", b"").decode("latin-1"))
    return {key: values[-1] for key, values in raw.items()}


class ToneHandler:
    """Handler for GET /tone.wav.

    Query parameters (all optional, defaults from config):
    sample_rate, channels, bits, duration, amplitude, half_period
    """

    @staticmethod
    async def handle(scope: Scope, receive: Receive, send: Send) -> None:
        """Handle tone request."""
        params = _query_params(scope)
        try:
            tone = config.tone
            duration = float(params.get("duration", tone.duration_seconds))
            if not 0 <= duration <= tone.max_duration_seconds:
                raise ValueError(f"duration must be between 0 and {tone.max_duration_seconds} seconds")
            sample_rate = int(params.get("sample_rate", config.audio.sample_rate))
            if not 0 < sample_rate <= tone.max_sample_rate:
                raise ValueError(f"sample_rate must be between 1 and {tone.max_sample_rate}")
            channels = int(params.get("channels", config.audio.channels))
            if not 0 < channels <= tone.max_channels:
                raise ValueError(f"channels must be between 1 and {tone.max_channels}")
            wave = square_wave_file(
                sample_rate=sample_rate,
                duration_seconds=duration,
                amplitude=int(params.get("amplitude", config.tone.amplitude)),
                half_period=int(params.get("half_period", config.tone.half_period)),
                channels=channels,
                bits_per_sample=int(params.get("bits", config.audio.bits_per_sample)),
            )
            body = encode_wave(wave)
        except ValueError as e:
            logger.warning(f"Rejected tone request {params}: {e}")
            await send_json(send, 400, {"error": "InvalidParameters", "message": str(e)})
            return

        codec_stats.record_encode(len(body))
        logger.info(
            f"Encoded tone: {wave.num_channels} ch, {wave.sample_rate} Hz, "
            f"{wave.bits_per_sample}-bit, {wave.samples_per_channel} frames ({len(body)} bytes)"
        )
        await send_response(send, 200, body, b"audio/wav", [
            (b"content-disposition", b'inline; filename="tone.wav"'),
            (b"cache-control", b"no-cache"),
        ])


class InspectHandler:
    """Handler for POST /inspect.

    The request body is a complete WAVE file; the response is its summary,
    or the decode error kind and offending values.
    """

    @staticmethod
    async def handle(scope: Scope, receive: Receive, send: Send) -> None:
        """Handle inspect request."""
        try:
            body = await read_body(receive, config.server.max_upload_bytes)
        except RequestTooLarge as e:
            await send_json(send, 413, {"error": "RequestTooLarge", "message": str(e)})
            return
        except ClientDisconnected as e:
            logger.info(f"Upload abandoned: {e}")
            return

        try:
            wave = decode_wave(body)
        except WaveError as e:
            codec_stats.record_failure(e.kind)
            logger.warning(f"Rejected upload ({len(body)} bytes): {e}")
            await send_json(send, 400, {"error": e.kind, "message": str(e), **e.details()})
            return

        codec_stats.record_decode(len(body))
        logger.info(f"Inspected upload ({len(body)} bytes, {wave.samples_per_channel} frames)")
        await send_json(send, 200, wave.summary())


class StatsHandler:
    """Handler for codec statistics (HTTP)."""

    @staticmethod
    async def handle(scope: Scope, receive: Receive, send: Send) -> None:
        """Handle stats request."""
        stats = {
            "codec": codec_stats.get_stats(),
            "config": {
                "sample_rate": config.audio.sample_rate,
                "channels": config.audio.channels,
                "bits_per_sample": config.audio.bits_per_sample,
                "max_upload_bytes": config.server.max_upload_bytes,
            },
        }
        await send_json(send, 200, stats)
