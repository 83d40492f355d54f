"""
Field types shared by the account and transaction schemas.

``Money`` is used for every monetary value a client sends.  It is
strict: JSON numbers (integers included) are accepted, while
booleans, numeric strings, ``NaN`` and ``Infinity`` are rejected so
that only finite numbers ever reach the store.

``UtcDatetime`` marks server-assigned timestamps.  MongoDB stores
datetimes in UTC; a naive value read back is tagged as UTC so the API
always emits an explicit offset.
"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, Field


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


Money = Annotated[float, Field(strict=True, allow_inf_nan=False)]

UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]
