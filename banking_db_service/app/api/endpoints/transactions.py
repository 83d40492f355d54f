"""
Transaction endpoints.

Transactions can be recorded and listed per account.  Looking up a
single transaction by ID is not offered and answers 501.

``POST /api/transactions`` accepts a raw JSON object rather than a
Pydantic body so that missing fields and invalid values can be
reported with distinct messages.  The payload keys are renamed with
``TRANSACTION_FIELDS`` before validation.
"""

import logging
import uuid
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from banking_db_service.app.api.deps import get_account_service, get_transaction_service
from banking_db_service.app.core.errors import TransactionConversionError
from banking_db_service.app.core.fields import TRANSACTION_FIELDS
from banking_db_service.app.schemas.transaction import (
    TransactionCreate,
    TransactionRead,
    TransactionRecorded,
)
from banking_db_service.app.services.account_service import AccountService
from banking_db_service.app.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS = ("account_number", "transaction_type", "amount", "resulting_balance")


@router.post("", response_model=TransactionRecorded, status_code=status.HTTP_201_CREATED)
def record_transaction(
    payload: Dict[str, Any] = Body(...),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionRecorded:
    """Record a transaction.

    ``accountNumber``, ``transactionType``, ``amount`` and
    ``resultingBalance`` are required.  ``transactionId`` is generated
    when absent.  Returns 500 if the insert fails, which includes a
    duplicate ``transactionId``.
    """
    logger.info("REST request to record transaction")
    data = TRANSACTION_FIELDS.from_api(payload)
    missing = [TRANSACTION_FIELDS.api_name(name) for name in REQUIRED_FIELDS if data.get(name) is None]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required fields: {', '.join(missing)}",
        )
    try:
        transaction = TransactionCreate.model_validate(data)
    except ValidationError as e:
        logger.warning("Invalid transaction data: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid transaction data: {e.errors(include_url=False)}",
        ) from e

    transaction_id = transaction.transaction_id or str(uuid.uuid4())
    recorded = service.record_transaction(
        transaction_id=transaction_id,
        account_number=transaction.account_number,
        transaction_type=transaction.transaction_type,
        amount=transaction.amount,
        resulting_balance=transaction.resulting_balance,
        description=transaction.description,
        source_account=transaction.source_account,
        destination_account=transaction.destination_account,
    )
    if not recorded:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record transaction",
        )
    return TransactionRecorded(message="Transaction recorded successfully", transaction_id=transaction_id)


@router.get("/account/{account_number}", response_model=List[TransactionRead])
def get_transaction_history(
    account_number: str,
    accounts: AccountService = Depends(get_account_service),
    service: TransactionService = Depends(get_transaction_service),
):
    """Return the account's transactions, oldest first.

    An unknown account answers 404 with an empty list as the body.
    Stored records that cannot be converted are logged and left out.
    """
    logger.info("REST request to get transaction history for account: %s", account_number)
    if accounts.get_account(account_number) is None:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=[])

    history: List[TransactionRead] = []
    for document in service.get_transaction_history(account_number):
        try:
            history.append(service.document_to_transaction(document))
        except TransactionConversionError as e:
            logger.error("Skipping transaction document: %s", e)
    return history


@router.get("/{transaction_id}")
def get_transaction(transaction_id: str) -> None:
    """Fetching a transaction by ID is not offered; always answers 501."""
    raise HTTPException(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        detail="Getting transaction by ID is not implemented",
    )
