"""
Logging configuration for the service.

``setup_logging`` configures the root logger once with a console and an
optional file handler.  Every record the process emits goes through
those handlers and shares one format:

* the service's own loggers (``banking_db_service.*``) log at the
  configured level;
* the ASGI server loggers (``uvicorn``, ``uvicorn.error`` and
  ``uvicorn.access``) lose the handlers uvicorn installs for itself and
  propagate to the root logger instead;
* the MongoDB driver loggers (``pymongo.*``) are held at ``WARNING``
  unless the service runs at ``DEBUG``, because the driver logs every
  command and connection event.

Calling ``setup_logging`` again (``create_app`` is called once per test)
does not duplicate handlers.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
DRIVER_LOGGER = "pymongo"


def _parse_level(level: str) -> int:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        return logging.INFO
    return numeric_level


def route_server_loggers() -> None:
    """Send uvicorn's records through the root handlers."""
    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        for handler in list(server_logger.handlers):
            server_logger.removeHandler(handler)
        server_logger.propagate = True


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root, server and driver loggers.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive.  Unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted, no file
        handler is added.  Paths are resolved relative to the
        current working directory.
    """
    # uvicorn may have configured its loggers after an earlier call.
    route_server_loggers()

    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = _parse_level(level)
    root.setLevel(numeric_level)
    if numeric_level > logging.DEBUG:
        logging.getLogger(DRIVER_LOGGER).setLevel(max(numeric_level, logging.WARNING))
    else:
        logging.getLogger(DRIVER_LOGGER).setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
