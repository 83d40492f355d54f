"""
Main entrypoint for the Banking DB Service.

This module assembles the FastAPI application, sets up logging and
includes the API router.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``.  Importing the app here makes it easy to run with uvicorn
or another ASGI server, e.g.::

    uvicorn banking_db_service.app.main:app

The MongoDB handle is created together with the app but only
connected when the application starts; it is closed when the
application shuts down.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import settings
from .core.db import MongoDatabase
from .core.logging_config import setup_logging


def create_app(database: Optional[MongoDatabase] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database : Optional[MongoDatabase]
        Handle to serve requests from.  When omitted, a handle is
        built from ``settings.mongodb_uri`` and
        ``settings.mongodb_database``.  The handle is connected on
        startup; a connection or index failure aborts startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the startup
    # sequence below is logged.
    setup_logging(settings.log_level, settings.log_file)

    if database is None:
        database = MongoDatabase(settings.mongodb_uri, settings.mongodb_database)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.connect()
        app.state.database = database
        try:
            yield
        finally:
            database.close()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed or incomplete request bodies are client errors (400),
        # reported before any store access.  The offending input is not
        # echoed back: NaN or Infinity cannot be rendered as JSON.
        errors = [{key: value for key, value in error.items() if key != "input"} for error in exc.errors()]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(errors)},
        )

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "healthy",
            "database": "connected" if database.ping() else "unavailable",
        }

    app.include_router(api_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
