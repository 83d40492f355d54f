"""
Service layer for accounts.

Accounts are created, read and have their balance overwritten; they
are never deleted.  Creating an account with a positive opening
balance also writes a ``DEPOSIT`` transaction through
``TransactionService``.  The two writes are independent: if the
second one fails the account stays created and the failure is only
logged.

Store errors are caught here, logged, and converted into failure
results.
"""

import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from banking_db_service.app.schemas.transaction import TransactionType
from banking_db_service.app.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

INITIAL_DEPOSIT_DESCRIPTION = "Initial deposit"


class BalanceUpdateResult(str, Enum):
    """Outcome of ``AccountService.update_balance``."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class AccountService:
    """Data access for the ``accounts`` collection."""

    def __init__(self, collection: Collection, transactions: TransactionService) -> None:
        self.collection = collection
        self.transactions = transactions

    def create_account(self, account_number: str, holder_name: str, initial_balance: float) -> bool:
        """Create an account and log its opening deposit.

        Returns ``False`` without writing anything if an account with
        ``account_number`` already exists, or if the insert fails.
        """
        logger.info(
            "Creating new account: accountNumber=%s, holder=%s, initialBalance=%s",
            account_number,
            holder_name,
            initial_balance,
        )
        try:
            if self.collection.find_one({"account_number": account_number}) is not None:
                logger.warning("Account creation failed: account %s already exists", account_number)
                return False
            result = self.collection.insert_one(
                {
                    "account_number": account_number,
                    "account_holder_name": holder_name,
                    "balance": float(initial_balance),
                    "creation_date": datetime.now(timezone.utc),
                }
            )
        except DuplicateKeyError:
            # Another request inserted the same number between the lookup and the insert.
            logger.warning("Account creation failed: account %s already exists", account_number)
            return False
        except PyMongoError as exc:
            logger.error("Failed to create account %s: %s", account_number, exc)
            return False

        if not result.acknowledged:
            logger.warning("Insert of account %s was not acknowledged", account_number)
            return False

        if initial_balance > 0:
            self._record_initial_deposit(account_number, initial_balance)

        logger.info("Account %s created successfully", account_number)
        return True

    def _record_initial_deposit(self, account_number: str, amount: float) -> None:
        transaction_id = str(uuid.uuid4())
        logger.debug("Recording initial deposit transaction of %s for account %s", amount, account_number)
        recorded = self.transactions.record_transaction(
            transaction_id=transaction_id,
            account_number=account_number,
            transaction_type=TransactionType.DEPOSIT,
            amount=amount,
            resulting_balance=amount,
            description=INITIAL_DEPOSIT_DESCRIPTION,
            source_account=None,
            destination_account=account_number,
        )
        if not recorded:
            logger.warning(
                "Account %s was created but its initial deposit %s could not be recorded",
                account_number,
                transaction_id,
            )

    def get_account(self, account_number: str) -> Optional[Dict[str, Any]]:
        """Return the stored account document, or ``None`` if absent."""
        logger.info("Retrieving account: %s", account_number)
        try:
            account = self.collection.find_one({"account_number": account_number})
        except PyMongoError as exc:
            logger.error("Failed to retrieve account %s: %s", account_number, exc)
            return None
        if account is None:
            logger.warning("Account %s not found in database", account_number)
            return None
        logger.debug("Account data: %s", account)
        return account

    def get_all_accounts(self) -> List[Dict[str, Any]]:
        """Return every account document, in the store's natural order."""
        logger.info("Retrieving all accounts")
        try:
            accounts = list(self.collection.find())
        except PyMongoError as exc:
            logger.error("Failed to retrieve accounts: %s", exc)
            return []
        logger.info("Successfully retrieved %d accounts", len(accounts))
        return accounts

    def update_balance(self, account_number: str, new_balance: float) -> BalanceUpdateResult:
        """Overwrite an account's balance.

        ``UNCHANGED`` means the account exists but already holds
        ``new_balance``; ``NOT_FOUND`` means there is no such account.
        """
        logger.info("Updating balance for account %s: new balance = %s", account_number, new_balance)
        try:
            result = self.collection.update_one(
                {"account_number": account_number},
                {"$set": {"balance": float(new_balance)}},
            )
        except PyMongoError as exc:
            logger.error("Failed to update balance for account %s: %s", account_number, exc)
            return BalanceUpdateResult.FAILED

        if result.matched_count == 0:
            logger.warning("Failed to update balance: account %s not found", account_number)
            return BalanceUpdateResult.NOT_FOUND
        if result.modified_count == 0:
            logger.warning("Balance of account %s is already %s", account_number, new_balance)
            return BalanceUpdateResult.UNCHANGED
        logger.info("Successfully updated balance for account %s to %s", account_number, new_balance)
        return BalanceUpdateResult.UPDATED
