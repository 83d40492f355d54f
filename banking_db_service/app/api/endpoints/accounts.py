"""
Account endpoints.

These routes expose the account store: create, list, fetch one and
overwrite the balance.  Accounts cannot be deleted; the DELETE route
exists only to answer 405 explicitly.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from banking_db_service.app.api.deps import get_account_service
from banking_db_service.app.core.fields import ACCOUNT_FIELDS
from banking_db_service.app.schemas.account import (
    AccountCreate,
    AccountCreated,
    AccountRead,
    BalanceUpdate,
    BalanceUpdated,
)
from banking_db_service.app.services.account_service import AccountService, BalanceUpdateResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=AccountCreated, status_code=status.HTTP_201_CREATED)
def create_account(
    account: AccountCreate,
    service: AccountService = Depends(get_account_service),
) -> AccountCreated:
    """Create an account.

    A positive ``balance`` is recorded as an initial ``DEPOSIT``
    transaction.  Returns 409 if the account number is taken or the
    insert failed.
    """
    logger.info("REST request to create account: %s", account.account_number)
    created = service.create_account(account.account_number, account.account_holder_name, account.balance)
    if not created:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Account {account.account_number} already exists or creation failed",
        )
    return AccountCreated(message="Account created successfully", account_number=account.account_number)


@router.get("", response_model=List[AccountRead])
def list_accounts(service: AccountService = Depends(get_account_service)) -> List[AccountRead]:
    """Return all accounts (unpaginated)."""
    logger.info("REST request to get all accounts")
    return [AccountRead.model_validate(ACCOUNT_FIELDS.to_api(doc)) for doc in service.get_all_accounts()]


@router.get("/{account_number}", response_model=AccountRead)
def get_account(account_number: str, service: AccountService = Depends(get_account_service)) -> AccountRead:
    """Retrieve a single account.  Raises 404 if it does not exist."""
    logger.info("REST request to get account: %s", account_number)
    document = service.get_account(account_number)
    if document is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Account {account_number} not found")
    return AccountRead.model_validate(ACCOUNT_FIELDS.to_api(document))


@router.put("/{account_number}/balance", response_model=BalanceUpdated)
def update_balance(
    account_number: str,
    update: BalanceUpdate,
    service: AccountService = Depends(get_account_service),
) -> BalanceUpdated:
    """Overwrite an account's balance.

    Setting the balance it already has is reported as a failure (500),
    the same as a failed write, but with its own message.
    """
    logger.info("REST request to update balance for account %s: new balance = %s", account_number, update.balance)
    result = service.update_balance(account_number, update.balance)
    if result is BalanceUpdateResult.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Account {account_number} not found")
    if result is BalanceUpdateResult.UNCHANGED:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update balance: account {account_number} already has balance {update.balance}",
        )
    if result is BalanceUpdateResult.FAILED:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update balance for account {account_number}",
        )
    return BalanceUpdated(
        message="Balance updated successfully",
        account_number=account_number,
        new_balance=update.balance,
    )


@router.delete("/{account_number}")
def delete_account(account_number: str) -> None:
    """Accounts are never deleted; always answers 405."""
    logger.warning("Rejected request to delete account %s", account_number)
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Account deletion is not supported",
    )
