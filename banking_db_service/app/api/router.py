"""
Top-level API router.

Aggregates the resource routers under their path prefixes.  The
application mounts this router under ``/api``, giving
``/api/accounts`` and ``/api/transactions``.
"""

from fastapi import APIRouter

from .endpoints import accounts, transactions

router = APIRouter()

router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
