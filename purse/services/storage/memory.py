"""
In-Memory Storage

Used by tests and by callers that want a throwaway ledger. Behaves like
the JSON store except that nothing survives the process.
"""

from typing import Optional

from purse.models.audit import AuditEvent
from purse.models.transaction import Transaction
from purse.services.storage.base import ReadModifyWriteStorage
from purse.services.storage.interface import AuditStorageInterface


class InMemoryLedgerStorage(ReadModifyWriteStorage):

    def __init__(self, transactions: Optional[list[Transaction]] = None):
        self._transactions = list(transactions or [])

    def _load(self) -> list[Transaction]:
        return list(self._transactions)

    def _save(self, transactions: list[Transaction]) -> None:
        self._transactions = list(transactions)


class InMemoryAuditStorage(AuditStorageInterface):

    def __init__(self):
        self._events: list[AuditEvent] = []

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
