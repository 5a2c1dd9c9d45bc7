import logging
from typing import Dict, Any, Callable, Awaitable

from wavecodec import config
from services import (
    ToneHandler,
    InspectHandler,
    StatsHandler,
    codec_stats,
)


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Type aliases
Scope = Dict[str, Any]
Receive = Callable[[], Awaitable[Dict[str, Any]]]
Send = Callable[[Dict[str, Any]], Awaitable[None]]
Handler = Callable[[Scope, Receive, Send], Awaitable[None]]


class WaveApp:
    """
    Main ASGI application for the WAVE codec.

    Routes:
    - GET  /tone.wav  → encoded square-wave tone
    - POST /inspect   → decode an uploaded WAVE file, JSON summary
    - GET  /stats     → codec statistics (JSON)
    """

    def __init__(self):
        self._routes: Dict[str, Dict[str, Handler]] = {
            "/tone.wav": {"GET": ToneHandler.handle},
            "/inspect": {"POST": InspectHandler.handle},
            "/stats": {"GET": StatsHandler.handle},
        }
        logger.info(
            f"WaveApp initialized (default output: {config.audio.channels} ch, "
            f"{config.audio.sample_rate} Hz, {config.audio.bits_per_sample}-bit)"
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI application entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        if scope["type"] == "http":
            path = scope.get("path", "/")
            methods = self._routes.get(path)
            if methods is None:
                await self._send_error(send, 404, b"Not found")
                return

            handler = methods.get(scope.get("method", "GET"))
            if handler is None:
                await self._send_error(send, 405, b"Method not allowed")
                return

            await handler(scope, receive, send)
            return

    async def _handle_lifespan(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Handle ASGI lifespan events for startup/shutdown."""
        while True:
            message = await receive()

            if message["type"] == "lifespan.startup":
                logger.info("ASGI lifespan: startup")
                await send({"type": "lifespan.startup.complete"})

            elif message["type"] == "lifespan.shutdown":
                logger.info(f"ASGI lifespan: shutdown - final stats {codec_stats.get_stats()}")
                await send({"type": "lifespan.shutdown.complete"})
                return

    @staticmethod
    async def _send_error(send: Send, status: int, body: bytes) -> None:
        """Send an HTTP error response."""
        await send({
            "type": "http.response.start",
            "status": status,
            "headers": [
                (b"content-type", b"text/plain"),
                (b"content-length", str(len(body)).encode()),
            ],
        })
        await send({
            "type": "http.response.body",
            "body": body,
        })


# Create ASGI application instance
app = WaveApp()
