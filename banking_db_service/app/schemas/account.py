"""
Pydantic models for account data.

Attributes use the storage (snake_case) names; aliases come from
``ACCOUNT_FIELDS`` so the JSON exchanged with clients uses camelCase
(``accountNumber``, ``accountHolderName``, ``balance``,
``creationDate``).  ``creationDate`` is assigned by the server and is
ignored on input.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from banking_db_service.app.core.fields import ACCOUNT_FIELDS
from banking_db_service.app.schemas.common import Money, UtcDatetime


class AccountBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    account_number: str = Field(
        ...,
        alias=ACCOUNT_FIELDS.api_name("account_number"),
        min_length=1,
        examples=["ACC1"],
    )
    account_holder_name: str = Field(
        ...,
        alias=ACCOUNT_FIELDS.api_name("account_holder_name"),
        examples=["Alice"],
    )


class AccountCreate(AccountBase):
    """Schema for creating an account.  ``balance`` is the initial balance."""

    balance: Money = Field(0.0, alias=ACCOUNT_FIELDS.api_name("balance"), examples=[100.0])


class AccountRead(AccountBase):
    """Schema for reading an account."""

    balance: float = Field(0.0, alias=ACCOUNT_FIELDS.api_name("balance"))
    creation_date: Optional[UtcDatetime] = Field(None, alias=ACCOUNT_FIELDS.api_name("creation_date"))


class BalanceUpdate(BaseModel):
    """Body of ``PUT /api/accounts/{accountNumber}/balance``."""

    balance: Money = Field(..., examples=[150.0])


class AccountCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    account_number: str = Field(..., alias=ACCOUNT_FIELDS.api_name("account_number"))


class BalanceUpdated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    account_number: str = Field(..., alias=ACCOUNT_FIELDS.api_name("account_number"))
    new_balance: float = Field(..., alias="newBalance")
