"""
Service layer for transactions.

Transactions are append-only: this service inserts them and reads an
account's history, nothing else.  It performs no balance checks; the
``resulting_balance`` supplied by the caller is stored as is.

Store errors are caught here, logged, and reported through the
return value (``False`` for a failed insert, an empty list for a
failed query), so the API layer never sees a raw ``PyMongoError``.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from banking_db_service.app.core.errors import TransactionConversionError
from banking_db_service.app.core.fields import TRANSACTION_FIELDS
from banking_db_service.app.schemas.transaction import TransactionRead, TransactionType

logger = logging.getLogger(__name__)


class TransactionService:
    """Data access for the ``transactions`` collection."""

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    def record_transaction(
        self,
        transaction_id: str,
        account_number: str,
        transaction_type: TransactionType,
        amount: float,
        resulting_balance: float,
        description: Optional[str] = None,
        source_account: Optional[str] = None,
        destination_account: Optional[str] = None,
    ) -> bool:
        """Insert a new transaction document stamped with the current time.

        Returns ``False`` if the insert fails, including when
        ``transaction_id`` is already taken (the unique index rejects
        the document and the collection is left unchanged).
        """
        transaction_type = TransactionType(transaction_type)
        logger.info(
            "Recording transaction: id=%s, account=%s, type=%s, amount=%s",
            transaction_id,
            account_number,
            transaction_type.value,
            amount,
        )
        document = {
            "transaction_id": transaction_id,
            "account_number": account_number,
            "transaction_type": transaction_type.value,
            "amount": float(amount),
            "resulting_balance": float(resulting_balance),
            "description": description,
            "source_account": source_account,
            "destination_account": destination_account,
            "timestamp": datetime.now(timezone.utc),
        }
        try:
            result = self.collection.insert_one(document)
        except DuplicateKeyError:
            logger.warning("Transaction %s already exists", transaction_id)
            return False
        except PyMongoError as exc:
            logger.error("Failed to record transaction %s for account %s: %s", transaction_id, account_number, exc)
            return False

        if not result.acknowledged:
            logger.warning("Insert of transaction %s was not acknowledged", transaction_id)
            return False
        logger.info("Successfully recorded transaction %s for account %s", transaction_id, account_number)
        logger.debug(
            "Transaction details: type=%s, amount=%s, balance=%s, description=%r",
            transaction_type.value,
            amount,
            resulting_balance,
            description,
        )
        return True

    def get_transaction_history(self, account_number: str) -> List[Dict[str, Any]]:
        """Return every transaction touching ``account_number``, oldest first.

        An account is involved when it is the primary account, the
        source or the destination of the record.  Records sharing a
        timestamp keep their insertion order.
        """
        logger.info("Retrieving transaction history for account: %s", account_number)
        query = {
            "$or": [
                {"account_number": account_number},
                {"source_account": account_number},
                {"destination_account": account_number},
            ]
        }
        try:
            transactions = list(
                self.collection.find(query).sort([("timestamp", ASCENDING), ("_id", ASCENDING)])
            )
        except PyMongoError as exc:
            logger.error("Failed to retrieve transaction history for account %s: %s", account_number, exc)
            return []

        logger.info("Retrieved %d transactions for account %s", len(transactions), account_number)
        if transactions:
            logger.debug(
                "Transaction date range: from %s to %s",
                transactions[0].get("timestamp"),
                transactions[-1].get("timestamp"),
            )
        return transactions

    @staticmethod
    def document_to_transaction(document: Mapping[str, Any]) -> TransactionRead:
        """Convert a stored document to a ``TransactionRead``.

        Raises
        ------
        TransactionConversionError
            If the stored type is not one of the ``TransactionType``
            values or a required field is missing or malformed.
        """
        transaction_id = document.get("transaction_id")
        type_value = document.get("transaction_type")
        try:
            TransactionType(type_value)
        except ValueError as exc:
            logger.error("Unknown transaction type %r in transaction %s", type_value, transaction_id)
            raise TransactionConversionError(transaction_id, f"unknown transaction type {type_value!r}") from exc
        try:
            return TransactionRead.model_validate(TRANSACTION_FIELDS.to_api(document))
        except ValidationError as exc:
            logger.error("Failed to convert document to transaction %s: %s", transaction_id, exc)
            raise TransactionConversionError(transaction_id, str(exc)) from exc
