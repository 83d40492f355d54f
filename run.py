"""Entry point for the Banking DB Service.

This script serves the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example in a
container where you only specify a single Python file to run.

Configuration such as the MongoDB connection string, database name,
host and port is read from environment variables (``MONGODB_URI``,
``MONGODB_DATABASE``, ``HOST``, ``PORT``).  See
``banking_db_service/app/core/config.py`` for the full list.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from banking_db_service.app.core.config import settings
from banking_db_service.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    # log_config=None keeps uvicorn from installing its own handlers;
    # its loggers propagate to the root logger set up by create_app.
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Service stopped")
