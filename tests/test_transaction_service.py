"""Tests for TransactionService."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from banking_db_service.app.core.errors import TransactionConversionError
from banking_db_service.app.schemas.transaction import TransactionRead, TransactionType
from banking_db_service.app.services.transaction_service import TransactionService


def _record(service, transaction_id, account_number="ACC1", **kwargs):
    defaults = {
        "transaction_type": TransactionType.DEPOSIT,
        "amount": 10.0,
        "resulting_balance": 10.0,
    }
    defaults.update(kwargs)
    return service.record_transaction(transaction_id=transaction_id, account_number=account_number, **defaults)


def test_record_transaction_stores_document(transaction_service, database):
    assert _record(
        transaction_service,
        "T1",
        transaction_type=TransactionType.TRANSFER_OUT,
        amount=25.0,
        resulting_balance=75.0,
        description="Rent",
        source_account="ACC1",
        destination_account="ACC2",
    )

    stored = database.transactions.find_one({"transaction_id": "T1"})
    assert stored["account_number"] == "ACC1"
    assert stored["transaction_type"] == "TRANSFER_OUT"
    assert stored["amount"] == 25.0
    assert stored["resulting_balance"] == 75.0
    assert stored["description"] == "Rent"
    assert stored["source_account"] == "ACC1"
    assert stored["destination_account"] == "ACC2"
    assert isinstance(stored["timestamp"], datetime)


def test_record_accepts_type_as_string(transaction_service, database):
    assert _record(transaction_service, "T1", transaction_type="WITHDRAWAL")
    assert database.transactions.find_one({"transaction_id": "T1"})["transaction_type"] == "WITHDRAWAL"


def test_duplicate_transaction_id_fails_without_mutation(transaction_service, database):
    assert _record(transaction_service, "T1", amount=10.0)

    assert _record(transaction_service, "T1", amount=99.0) is False

    assert database.transactions.count_documents({}) == 1
    assert database.transactions.find_one({"transaction_id": "T1"})["amount"] == 10.0


def test_record_store_error_returns_false():
    collection = MagicMock()
    collection.insert_one.side_effect = AutoReconnect("connection reset")

    assert _record(TransactionService(collection), "T1") is False


def test_history_matches_primary_source_and_destination(transaction_service):
    _record(transaction_service, "T1", account_number="ACC1")
    _record(transaction_service, "T2", account_number="ACC2", source_account="ACC1", destination_account="ACC2")
    _record(transaction_service, "T3", account_number="ACC3", source_account="ACC3", destination_account="ACC1")
    _record(transaction_service, "T4", account_number="ACC2", source_account="ACC2", destination_account="ACC3")

    history = transaction_service.get_transaction_history("ACC1")

    assert [doc["transaction_id"] for doc in history] == ["T1", "T2", "T3"]


def test_history_sorted_by_timestamp(transaction_service, database):
    base = {
        "account_number": "ACC1",
        "transaction_type": "DEPOSIT",
        "amount": 1.0,
        "resulting_balance": 1.0,
    }
    database.transactions.insert_many(
        [
            dict(base, transaction_id="late", timestamp=datetime(2024, 3, 1, tzinfo=timezone.utc)),
            dict(base, transaction_id="early", timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc)),
            dict(base, transaction_id="middle", timestamp=datetime(2024, 2, 1, tzinfo=timezone.utc)),
        ]
    )

    history = transaction_service.get_transaction_history("ACC1")

    assert [doc["transaction_id"] for doc in history] == ["early", "middle", "late"]


def test_history_of_unknown_account_is_empty(transaction_service):
    assert transaction_service.get_transaction_history("NOPE") == []


def test_history_store_error_returns_empty_list():
    collection = MagicMock()
    collection.find.side_effect = ServerSelectionTimeoutError("no servers")

    assert TransactionService(collection).get_transaction_history("ACC1") == []


def test_document_to_transaction():
    timestamp = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    document = {
        "_id": "ignored",
        "transaction_id": "T1",
        "account_number": "ACC1",
        "transaction_type": "TRANSFER_IN",
        "amount": 40.0,
        "resulting_balance": 140.0,
        "description": None,
        "source_account": "ACC9",
        "destination_account": "ACC1",
        "timestamp": timestamp,
    }

    transaction = TransactionService.document_to_transaction(document)

    assert isinstance(transaction, TransactionRead)
    assert transaction.transaction_type is TransactionType.TRANSFER_IN
    assert transaction.amount == 40.0
    assert transaction.resulting_balance == 140.0
    assert transaction.source_account == "ACC9"
    assert transaction.timestamp == timestamp


def test_document_with_unknown_type_fails_conversion():
    document = {"transaction_id": "T1", "transaction_type": "REFUND", "amount": 1.0, "resulting_balance": 1.0}

    with pytest.raises(TransactionConversionError) as excinfo:
        TransactionService.document_to_transaction(document)

    assert excinfo.value.transaction_id == "T1"


def test_document_missing_amount_fails_conversion():
    document = {"transaction_id": "T1", "transaction_type": "DEPOSIT", "resulting_balance": 1.0}

    with pytest.raises(TransactionConversionError):
        TransactionService.document_to_transaction(document)
