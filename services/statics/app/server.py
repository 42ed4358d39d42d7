"""HTTP server bootstrap."""

import threading

import uvicorn

from services.statics.app.config import Settings
from services.statics.app.main import create_app
from shared.utils.logging import get_logger

logger = get_logger(__name__)


class StaticsServer(uvicorn.Server):
    """uvicorn server that reports when its listener is bound."""

    def __init__(self, config: uvicorn.Config, ready: threading.Event | None = None):
        super().__init__(config)
        self.ready = ready

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info("listening", host=self.config.host, port=self.config.port)
            if self.ready is not None:
                self.ready.set()


def build_server(
    settings: Settings,
    port: int | None = None,
    ready: threading.Event | None = None,
) -> StaticsServer:
    """Create the server without starting it.

    Args:
        settings: Service configuration
        port: Overrides ``server.port`` (tests pick a free port)
        ready: Set once the listener accepts connections

    Raises:
        OSError: If the JWT public key file cannot be read
        ValueError: If the configuration is invalid
    """
    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.server.host,
        port=settings.server.port if port is None else port,
        log_config=None,
        access_log=False,
        timeout_graceful_shutdown=settings.server.graceful_timeout,
    )
    return StaticsServer(config, ready=ready)


def run_server(
    settings: Settings,
    port: int | None = None,
    ready: threading.Event | None = None,
) -> None:
    """Serve until SIGINT/SIGTERM, letting in-flight requests finish.

    Raises:
        SystemExit: If the listener cannot be bound
    """
    server = build_server(settings, port=port, ready=ready)
    try:
        server.run()
    except KeyboardInterrupt:
        # uvicorn re-raises the captured SIGINT once shutdown has finished
        logger.info("interrupt_received")
    logger.info("server_stopped")
