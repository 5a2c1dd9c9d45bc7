import uvicorn
import os
import logging

from wavecodec import config


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

APP_MODULE = os.getenv("APP_MODULE", "main:app")  # module:app
RELOAD = os.getenv("RELOAD", "false").lower() in ("true", "1", "yes")


def run() -> None:
    """Serve the codec application under uvicorn."""
    logger.info(f"Starting {APP_MODULE} on {config.server.host}:{config.server.port}")
    uvicorn.run(
        APP_MODULE,
        host=config.server.host,
        port=config.server.port,
        reload=RELOAD,
    )


if __name__ == "__main__":
    run()
