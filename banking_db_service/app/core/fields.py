"""
Field-name mapping between stored documents and API payloads.

Documents in MongoDB use snake_case keys (``account_number``) while the
REST API speaks camelCase (``accountNumber``).  Rather than deriving
one from the other, each resource declares an explicit table so that
renaming a field on either side is a one-line change here.  The
Pydantic schemas take their aliases from these tables as well.
"""

from typing import Any, Dict, Mapping


class FieldMap:
    """Two-way mapping of storage keys to API keys."""

    def __init__(self, storage_to_api: Mapping[str, str]) -> None:
        self._to_api: Dict[str, str] = dict(storage_to_api)
        self._to_storage: Dict[str, str] = {api: key for key, api in self._to_api.items()}
        if len(self._to_storage) != len(self._to_api):
            raise ValueError("API field names must be unique")

    def api_name(self, storage_key: str) -> str:
        """Return the API name of ``storage_key`` (``KeyError`` if unmapped)."""
        return self._to_api[storage_key]

    def storage_key(self, api_name: str) -> str:
        """Return the storage key of ``api_name`` (``KeyError`` if unmapped)."""
        return self._to_storage[api_name]

    def to_api(self, document: Mapping[str, Any]) -> Dict[str, Any]:
        """Rename a stored document's keys for the API.

        Keys absent from the table, such as MongoDB's ``_id``, are
        dropped.
        """
        return {self._to_api[k]: v for k, v in document.items() if k in self._to_api}

    def from_api(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Rename an API payload's keys to storage keys, dropping unknown keys."""
        return {self._to_storage[k]: v for k, v in payload.items() if k in self._to_storage}


ACCOUNT_FIELDS = FieldMap(
    {
        "account_number": "accountNumber",
        "account_holder_name": "accountHolderName",
        "balance": "balance",
        "creation_date": "creationDate",
    }
)

TRANSACTION_FIELDS = FieldMap(
    {
        "transaction_id": "transactionId",
        "account_number": "accountNumber",
        "transaction_type": "transactionType",
        "amount": "amount",
        "resulting_balance": "resultingBalance",
        "description": "description",
        "source_account": "sourceAccount",
        "destination_account": "destinationAccount",
        "timestamp": "timestamp",
    }
)
