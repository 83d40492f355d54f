"""
MongoDB integration.

This module owns the single long-lived document store handle used by
the whole process.  ``MongoDatabase`` wraps a ``pymongo.MongoClient``,
resolves the ``accounts`` and ``transactions`` collections and makes
sure their indexes exist before the service accepts traffic.  The
handle is created once when the application is built, opened in the
application lifespan and closed when the lifespan exits.  Request
handlers obtain it through the ``get_database`` dependency.

Index creation replaces a migration system: MongoDB collections are
schemaless, so the only structural guarantee the service needs is the
set of (unique) indexes created by ``ensure_indexes``.
"""

import logging
import re
from typing import Any, Callable, Optional

from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .errors import DatabaseInitError

logger = logging.getLogger(__name__)

ACCOUNTS_COLLECTION = "accounts"
TRANSACTIONS_COLLECTION = "transactions"

_CREDENTIALS_RE = re.compile(r"^(mongodb(?:\+srv)?://)[^@/]+@")


def redact_connection_string(connection_string: str) -> str:
    """Hide the user/password part of a MongoDB connection string."""
    return _CREDENTIALS_RE.sub(r"\1[REDACTED]@", connection_string)


class MongoDatabase:
    """Shared handle to the document store.

    Parameters
    ----------
    connection_string : str
        MongoDB connection string (``mongodb://`` or ``mongodb+srv://``).
    database_name : str
        Name of the database holding the two collections.
    client_factory : Callable
        Callable building the client from the connection string and
        client keyword options.  The client is always created with
        ``tz_aware=True`` so stored datetimes come back as UTC-aware.
        Defaults to ``pymongo.MongoClient``; tests pass
        ``mongomock.MongoClient``.
    """

    def __init__(
        self,
        connection_string: str,
        database_name: str,
        client_factory: Callable[..., Any] = MongoClient,
    ) -> None:
        self.connection_string = connection_string
        self.database_name = database_name
        self._client_factory = client_factory
        self._client = None
        self._db = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def accounts(self) -> Collection:
        return self._collection(ACCOUNTS_COLLECTION)

    @property
    def transactions(self) -> Collection:
        return self._collection(TRANSACTIONS_COLLECTION)

    def _collection(self, name: str) -> Collection:
        if self._db is None:
            raise RuntimeError("Database is not connected")
        return self._db[name]

    def connect(self) -> None:
        """Create the client, verify the connection and ensure indexes.

        Raises
        ------
        DatabaseInitError
            If the client cannot be created, the server does not
            answer, or an index cannot be created.  The service must
            not start in that case.
        """
        logger.info("Initializing MongoDB connection")
        logger.debug(
            "Creating MongoDB client with connection string: %s",
            redact_connection_string(self.connection_string),
        )
        try:
            self._client = self._client_factory(self.connection_string, tz_aware=True)
            self._db = self._client[self.database_name]
            # Listing collections forces a round trip, so a wrong host or
            # bad credentials fail here rather than on the first request.
            names = self._db.list_collection_names()
            logger.info(
                "Connected to MongoDB database %s, found collection: %s",
                self.database_name,
                names[0] if names else "none",
            )
        except PyMongoError as exc:
            logger.error("Failed to connect to MongoDB: %s", exc)
            self.close()
            raise DatabaseInitError("Failed to connect to MongoDB") from exc

        try:
            self.ensure_indexes()
        except DatabaseInitError:
            self.close()
            raise

    def ensure_indexes(self) -> None:
        """Create the indexes the stores rely on.

        ``create_index`` is a no-op for an index that already exists
        with the same options, so calling this repeatedly is safe.
        """
        logger.info("Initializing database indexes")
        try:
            self.accounts.create_index([("account_number", ASCENDING)], unique=True)
            logger.info("Created unique index on account_number field in accounts collection")
            self.transactions.create_index([("account_number", ASCENDING)])
            logger.info("Created index on account_number field in transactions collection")
            self.transactions.create_index([("transaction_id", ASCENDING)], unique=True)
            logger.info("Created unique index on transaction_id field in transactions collection")
            self.transactions.create_index([("timestamp", ASCENDING)])
            logger.info("Created index on timestamp field in transactions collection")
        except PyMongoError as exc:
            logger.error("Failed to initialize database indexes: %s", exc)
            raise DatabaseInitError("Failed to initialize database indexes") from exc
        logger.info("Database indexes initialized successfully")

    def ping(self) -> bool:
        """Return ``True`` if the server answers a ``ping`` command."""
        if self._client is None:
            return False
        try:
            self._client.admin.command("ping")
            return True
        except Exception as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            return False

    def close(self) -> None:
        """Close the client connection.  Safe to call more than once."""
        if self._client is None:
            logger.warning("Cannot close MongoDB connection: client is not open")
            return
        logger.info("Closing MongoDB connection")
        client, self._client, self._db = self._client, None, None
        try:
            client.close()
            logger.info("MongoDB connection closed successfully")
        except PyMongoError as exc:
            logger.error("Failed to close MongoDB connection: %s", exc)


def get_database(request: Request) -> MongoDatabase:
    """FastAPI dependency returning the handle opened by the lifespan."""
    database: Optional[MongoDatabase] = getattr(request.app.state, "database", None)
    if database is None or not database.is_connected:
        raise RuntimeError("Database handle is not initialised")
    return database
