"""
Storage Services Package

Provides the abstract ledger interface and its implementations.
The JSON file store is the default backend.
"""

from purse.services.storage.interface import (
    AuditStorageInterface,
    LedgerCorruptedError,
    LedgerReadError,
    LedgerStorageInterface,
    LedgerWriteError,
    StorageError,
    next_transaction_id,
)
from purse.services.storage.base import ReadModifyWriteStorage
from purse.services.storage.json_file import JsonLedgerClient, JsonLedgerStorage
from purse.services.storage.memory import InMemoryAuditStorage, InMemoryLedgerStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "LedgerStorageInterface",
    "ReadModifyWriteStorage",
    "next_transaction_id",
    # Exceptions
    "LedgerCorruptedError",
    "LedgerReadError",
    "LedgerWriteError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
    "JsonLedgerClient",
    "JsonLedgerStorage",
]
