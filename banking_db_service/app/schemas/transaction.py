"""
Pydantic models for transaction data.

Transactions are append-only records.  ``TransactionCreate`` is built
from a request payload after its keys have been renamed with
``TRANSACTION_FIELDS.from_api``, so it is populated by attribute name.
``TransactionRead`` is what clients receive and serialises with the
camelCase aliases.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from banking_db_service.app.core.fields import TRANSACTION_FIELDS
from banking_db_service.app.schemas.common import Money, UtcDatetime


class TransactionType(str, Enum):
    """Closed set of transaction kinds."""

    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER_IN = "TRANSFER_IN"
    TRANSFER_OUT = "TRANSFER_OUT"


def _alias(name: str) -> str:
    return TRANSACTION_FIELDS.api_name(name)


class TransactionCreate(BaseModel):
    """Validated transaction request."""

    model_config = ConfigDict(populate_by_name=True)

    transaction_id: Optional[str] = Field(None, alias=_alias("transaction_id"))
    account_number: str = Field(..., alias=_alias("account_number"), min_length=1)
    transaction_type: TransactionType = Field(..., alias=_alias("transaction_type"))
    amount: Money = Field(..., alias=_alias("amount"))
    resulting_balance: Money = Field(..., alias=_alias("resulting_balance"))
    description: Optional[str] = Field(None, alias=_alias("description"))
    source_account: Optional[str] = Field(None, alias=_alias("source_account"))
    destination_account: Optional[str] = Field(None, alias=_alias("destination_account"))


class TransactionRead(BaseModel):
    """A stored transaction converted back to its domain form."""

    model_config = ConfigDict(populate_by_name=True)

    transaction_id: str = Field(..., alias=_alias("transaction_id"))
    account_number: Optional[str] = Field(None, alias=_alias("account_number"))
    transaction_type: TransactionType = Field(..., alias=_alias("transaction_type"))
    amount: float = Field(..., alias=_alias("amount"))
    resulting_balance: float = Field(..., alias=_alias("resulting_balance"))
    description: Optional[str] = Field(None, alias=_alias("description"))
    source_account: Optional[str] = Field(None, alias=_alias("source_account"))
    destination_account: Optional[str] = Field(None, alias=_alias("destination_account"))
    timestamp: Optional[UtcDatetime] = Field(None, alias=_alias("timestamp"))


class TransactionRecorded(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    transaction_id: str = Field(..., alias=_alias("transaction_id"))
