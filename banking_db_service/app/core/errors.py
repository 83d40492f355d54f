"""
Exception types raised by the data-access layer.

Store operations report ordinary failures through return values
(``False``, ``None`` or an empty list); exceptions are reserved for
faults the caller has to handle explicitly: a database that cannot be
initialised at startup and a stored record that cannot be converted
back into its domain representation.
"""


class BankingDbError(Exception):
    """Base class for errors raised by this service."""


class DatabaseInitError(BankingDbError):
    """Connecting to the document store or creating its indexes failed."""


class TransactionConversionError(BankingDbError):
    """A stored transaction document could not be converted."""

    def __init__(self, transaction_id, reason: str) -> None:
        self.transaction_id = transaction_id
        self.reason = reason
        super().__init__(f"Failed to convert transaction {transaction_id}: {reason}")
