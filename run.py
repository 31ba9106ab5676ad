"""Entry point for the DVD Rental API.

Starts the FastAPI application under Uvicorn on the address given by
the ``ADDR`` environment variable (``host:port``, default ``:8080``).
Other configuration such as ``DATABASE_URL`` and ``LOG_LEVEL`` is read
by ``dvd_rental_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from dvd_rental_api.app.core.config import settings
from dvd_rental_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    host, port = settings.listen_host_port()
    logging.getLogger(__name__).info("Listening on %s:%s", host, port)
    # log_config=None keeps uvicorn on the handlers set up by setup_logging.
    config = Config(
        app=app,
        host=host,
        port=port,
        reload=False,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
