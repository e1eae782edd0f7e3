"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for ledger storage.
This allows us to:
1. Keep the JSON file format out of the business logic
2. Use in-memory storage for testing
3. Swap in a real database later without touching the aggregators

The interface is intentionally small: append, read all, point delete,
point update and clear. Aggregations never go through the storage layer;
they receive the full transaction list.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Union

from purse.models.audit import AuditEvent
from purse.models.transaction import Transaction, TransactionUpdate


Amount = Union[Decimal, int, float, str]


def next_transaction_id(existing_ids: Iterable[str], created_at: datetime) -> str:
    """
    Epoch milliseconds of `created_at`, bumped until unused.

    Keeps the id format of existing ledger files while guaranteeing
    uniqueness when two transactions land in the same millisecond.
    """
    taken = set(existing_ids)
    candidate = int(created_at.timestamp() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Transactions are kept in insertion order, keyed by id.
    Not-found is reported through return values, never raised.
    """

    @abstractmethod
    def append(
        self,
        amount: Amount,
        description: str,
        category: Optional[str] = None,
        is_savings: bool = False,
        date: Optional[datetime] = None,
    ) -> Transaction:
        """
        Create a transaction and add it to the end of the ledger.

        Args:
            amount: Signed amount, any finite value
            description: Free text, may be empty
            category: Left unset when None or empty
            is_savings: Whether this feeds the savings pool
            date: Defaults to now (UTC)

        Returns:
            The stored transaction with its new id

        Raises:
            StorageError: If the ledger cannot be read or written
        """
        pass

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """
        All transactions in insertion order.

        Raises:
            StorageError: If the ledger cannot be read
        """
        pass

    @abstractmethod
    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """The transaction with this id, None if absent."""
        pass

    @abstractmethod
    def delete_by_id(self, transaction_id: str) -> bool:
        """
        Remove a transaction.

        Returns:
            True if something was removed, False if the id was unknown
        """
        pass

    @abstractmethod
    def update(self, transaction_id: str, update: TransactionUpdate) -> bool:
        """
        Apply a partial update.

        Returns:
            True if the id was found (even when the update is empty)
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every transaction."""
        pass

    @abstractmethod
    def reset(
        self,
        amount: Amount,
        description: str,
        category: Optional[str] = None,
    ) -> Transaction:
        """
        Replace the whole ledger with one new transaction.

        Clear and append happen in a single write: if it fails, the
        previous contents are left as they were.
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """Append an audit event. Returns True if stored."""
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Most recent events, newest first."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class LedgerReadError(StorageError):
    """Ledger file exists but could not be read."""
    pass


class LedgerCorruptedError(StorageError):
    """Ledger file was read but does not hold a valid ledger."""
    pass


class LedgerWriteError(StorageError):
    """Ledger file could not be written."""
    pass
