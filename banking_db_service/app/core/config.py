"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables when it is instantiated.  Defaults are provided
for all fields so the service can start against a local MongoDB
without any setup.  In a production deployment you should override
the connection string and database name via ``MONGODB_URI`` and
``MONGODB_DATABASE``.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: _env("PROJECT_NAME", "Banking DB Service"))
    api_version: str = field(default_factory=lambda: _env("API_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    # Optional path of a log file in addition to console output.
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)

    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(_env("PORT", "8080")))

    # Connection string and database name of the document store.  These
    # are the only settings the data-access layer depends on.
    mongodb_uri: str = field(default_factory=lambda: _env("MONGODB_URI", "mongodb://localhost:27017"))
    mongodb_database: str = field(default_factory=lambda: _env("MONGODB_DATABASE", "bankdb"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is first imported.
settings = Settings()
