"""Entry point for the Storefront API server.

Builds the startup ``Settings`` from the environment, creates the
application and serves it with Uvicorn.  Configuration such as PORT,
MIDDLEWARE, LOG_LEVEL and DATA_DIR is read here and nowhere else.

Usage:
    PORT=3000 python run.py
"""
import asyncio
import logging
from typing import Optional

from uvicorn import Config, Server

from storefront_api.app.core.config import Settings
from storefront_api.app.core.logging_config import resolve_level, setup_logging
from storefront_api.app.main import create_app


def build_server(settings: Settings) -> Server:
    """Create a Uvicorn server for ``settings``.

    A missing port is logged and replaced by ``0``, which lets the OS
    pick a free one; the bind is still attempted.  Uvicorn's own
    logging config is disabled so its loggers go through
    ``setup_logging``.
    """
    logger = logging.getLogger(__name__)
    port = settings.port
    if port is None:
        logger.warning("No port value specified...")
        port = 0
    app = create_app(settings)
    config = Config(
        app=app,
        host=settings.host,
        port=port,
        reload=False,
        log_config=None,
        log_level=resolve_level(settings.log_level),
    )
    return Server(config)


def bound_port(server: Server) -> int:
    """Return the port the server's listening socket is bound to.

    Falls back to the configured port before the sockets exist.
    """
    for listener in getattr(server, "servers", None) or []:
        for sock in listener.sockets or []:
            return sock.getsockname()[1]
    return server.config.port


async def serve(settings: Settings) -> None:
    server = build_server(settings)
    task = asyncio.create_task(server.serve())
    while not server.started and not task.done():
        await asyncio.sleep(0.05)
    if server.started:
        logging.getLogger(__name__).info("Server is listening on port %s", bound_port(server))
    await task


def main(settings: Optional[Settings] = None) -> None:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)
    try:
        asyncio.run(serve(settings))
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    main()
