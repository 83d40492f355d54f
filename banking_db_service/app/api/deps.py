"""FastAPI dependencies wiring the services to the shared database handle."""

from fastapi import Depends

from banking_db_service.app.core.db import MongoDatabase, get_database
from banking_db_service.app.services.account_service import AccountService
from banking_db_service.app.services.transaction_service import TransactionService


def get_transaction_service(database: MongoDatabase = Depends(get_database)) -> TransactionService:
    return TransactionService(database.transactions)


def get_account_service(
    database: MongoDatabase = Depends(get_database),
    transactions: TransactionService = Depends(get_transaction_service),
) -> AccountService:
    return AccountService(database.accounts, transactions)
