"""
Read-Modify-Write Ledger Storage

Every mutation loads the whole ledger, changes it, and saves the whole
ledger back. Backends only implement _load and _save.

TRADEOFFS:
- Simple and easy to reason about for a personal ledger
- O(n) per operation (fine for thousands of transactions)
- No locking: two processes writing the same ledger can lose an update
  (last writer wins)
"""

from abc import abstractmethod
from datetime import datetime
from typing import Optional

from purse.models.transaction import Transaction, TransactionUpdate, utc_now
from purse.services.storage.interface import (
    Amount,
    LedgerStorageInterface,
    next_transaction_id,
)


class ReadModifyWriteStorage(LedgerStorageInterface):
    """Implements the ledger operations on top of whole-ledger load/save."""

    @abstractmethod
    def _load(self) -> list[Transaction]:
        """Current ledger contents in insertion order."""
        pass

    @abstractmethod
    def _save(self, transactions: list[Transaction]) -> None:
        """Replace the ledger contents."""
        pass

    def append(
        self,
        amount: Amount,
        description: str,
        category: Optional[str] = None,
        is_savings: bool = False,
        date: Optional[datetime] = None,
    ) -> Transaction:
        transactions = self._load()
        created_at = utc_now()
        transaction = Transaction(
            id=next_transaction_id((t.id for t in transactions), created_at),
            amount=amount,
            description=description,
            date=date or created_at,
            category=category or None,
            is_savings=bool(is_savings),
        )
        transactions.append(transaction)
        self._save(transactions)
        return transaction

    def list_transactions(self) -> list[Transaction]:
        return self._load()

    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self._load():
            if transaction.id == transaction_id:
                return transaction
        return None

    def delete_by_id(self, transaction_id: str) -> bool:
        transactions = self._load()
        remaining = [t for t in transactions if t.id != transaction_id]
        if len(remaining) == len(transactions):
            return False
        self._save(remaining)
        return True

    def update(self, transaction_id: str, update: TransactionUpdate) -> bool:
        transactions = self._load()
        for index, transaction in enumerate(transactions):
            if transaction.id == transaction_id:
                if not update.is_empty:
                    transactions[index] = update.apply(transaction)
                    self._save(transactions)
                return True
        return False

    def clear(self) -> None:
        self._save([])

    def reset(
        self,
        amount: Amount,
        description: str,
        category: Optional[str] = None,
    ) -> Transaction:
        created_at = utc_now()
        transaction = Transaction(
            id=next_transaction_id((), created_at),
            amount=amount,
            description=description,
            date=created_at,
            category=category,
        )
        self._save([transaction])
        return transaction
