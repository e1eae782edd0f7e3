"""Services package."""

from purse.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
    JsonLedgerClient,
    JsonLedgerStorage,
    LedgerCorruptedError,
    LedgerReadError,
    LedgerStorageInterface,
    LedgerWriteError,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
    "JsonLedgerClient",
    "JsonLedgerStorage",
    "LedgerCorruptedError",
    "LedgerReadError",
    "LedgerStorageInterface",
    "LedgerWriteError",
    "StorageError",
]
