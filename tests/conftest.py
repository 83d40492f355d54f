"""Pytest configuration and fixtures.

Every test gets its own in-memory MongoDB (``mongomock``) so that tests
never share documents or indexes.
"""

import uuid

import mongomock
import pytest
from fastapi.testclient import TestClient

from banking_db_service.app.core.db import MongoDatabase
from banking_db_service.app.main import create_app
from banking_db_service.app.services.account_service import AccountService
from banking_db_service.app.services.transaction_service import TransactionService


def make_database() -> MongoDatabase:
    return MongoDatabase(
        "mongodb://localhost:27017",
        f"bankdb_test_{uuid.uuid4().hex}",
        client_factory=mongomock.MongoClient,
    )


@pytest.fixture
def database():
    """A connected database handle with indexes in place."""
    db = make_database()
    db.connect()
    yield db
    if db.is_connected:
        db.close()


@pytest.fixture
def transaction_service(database):
    return TransactionService(database.transactions)


@pytest.fixture
def account_service(database, transaction_service):
    return AccountService(database.accounts, transaction_service)


@pytest.fixture
def client():
    """A TestClient whose app has gone through startup."""
    app = create_app(make_database())
    with TestClient(app) as test_client:
        yield test_client
