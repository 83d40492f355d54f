"""Tests for the MongoDB handle: connection, indexes and shutdown."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from banking_db_service.app.core.db import MongoDatabase
from banking_db_service.app.core.errors import DatabaseInitError
from banking_db_service.app.main import create_app

from .conftest import make_database


def _index_keys(collection):
    return {
        name: (tuple(info["key"]), bool(info.get("unique", False)))
        for name, info in collection.index_information().items()
    }


def test_connect_creates_indexes(database):
    accounts = _index_keys(database.accounts)
    transactions = _index_keys(database.transactions)

    assert accounts["account_number_1"] == ((("account_number", 1),), True)
    assert transactions["account_number_1"] == ((("account_number", 1),), False)
    assert transactions["transaction_id_1"] == ((("transaction_id", 1),), True)
    assert transactions["timestamp_1"] == ((("timestamp", 1),), False)


def test_ensure_indexes_is_idempotent(database):
    before = _index_keys(database.transactions)

    database.ensure_indexes()
    database.ensure_indexes()

    assert _index_keys(database.transactions) == before


def test_collections_require_connection():
    db = make_database()

    assert db.is_connected is False
    with pytest.raises(RuntimeError):
        db.accounts


def test_connect_failure_is_fatal():
    def unreachable(connection_string, **kwargs):
        raise ServerSelectionTimeoutError("no servers found")

    db = MongoDatabase("mongodb://nowhere:27017", "bankdb", client_factory=unreachable)

    with pytest.raises(DatabaseInitError):
        db.connect()
    assert db.is_connected is False


def test_index_failure_is_fatal():
    client = MagicMock()
    client.__getitem__.return_value.list_collection_names.return_value = []
    client.__getitem__.return_value.__getitem__.return_value.create_index.side_effect = OperationFailure("boom")
    db = MongoDatabase("mongodb://localhost:27017", "bankdb", client_factory=lambda uri, **kwargs: client)

    with pytest.raises(DatabaseInitError):
        db.connect()
    client.close.assert_called_once_with()
    assert db.is_connected is False


def test_app_does_not_start_without_database():
    def unreachable(connection_string, **kwargs):
        raise ServerSelectionTimeoutError("no servers found")

    app = create_app(MongoDatabase("mongodb://nowhere:27017", "bankdb", client_factory=unreachable))

    with pytest.raises(DatabaseInitError):
        with TestClient(app):
            pass


def test_close_releases_client_once():
    client = MagicMock()
    client.__getitem__.return_value.list_collection_names.return_value = ["accounts"]
    db = MongoDatabase("mongodb://localhost:27017", "bankdb", client_factory=lambda uri, **kwargs: client)
    db.connect()

    db.close()
    db.close()

    client.close.assert_called_once_with()
    assert db.is_connected is False


def test_app_shutdown_closes_database():
    db = make_database()
    app = create_app(db)

    with TestClient(app) as client:
        assert client.app.state.database is db
        assert db.is_connected

    assert db.is_connected is False


def test_ping_reports_unconnected_handle():
    assert make_database().ping() is False


def test_client_is_timezone_aware():
    client = MagicMock()
    client.__getitem__.return_value.list_collection_names.return_value = []
    factory = MagicMock(return_value=client)
    db = MongoDatabase("mongodb://localhost:27017", "bankdb", client_factory=factory)

    db.connect()

    factory.assert_called_once_with("mongodb://localhost:27017", tz_aware=True)
    db.close()
