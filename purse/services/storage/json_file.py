"""
JSON File Storage Implementation

DESIGN DECISION: The ledger is a single JSON file because:
1. Users can read and back up their data with any editor
2. No database setup required
3. Existing ledger files from earlier versions keep working

File layout:

    {"transactions": [{"id", "amount", "description", "date",
                       "category"?, "isSavings"?}, ...]}

CRITICAL: A file that exists but cannot be read or parsed is an ERROR,
never an empty ledger. Treating it as empty would wipe the user's data
on the next write.
"""

import os
import tempfile
from contextlib import suppress
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional, Union

import simplejson
import structlog
from pydantic import ValidationError
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from purse.config import get_settings
from purse.models.transaction import Transaction
from purse.services.storage.base import ReadModifyWriteStorage
from purse.services.storage.interface import (
    LedgerCorruptedError,
    LedgerReadError,
    LedgerWriteError,
)


logger = structlog.get_logger(__name__)


class JsonLedgerClient:
    """
    Low-level ledger file access.

    Reads parse floats as Decimal. Writes go to a temp file in the same
    directory and are moved into place with os.replace, so a crash never
    leaves a half-written ledger behind.
    """

    def __init__(self, path: Union[str, Path], write_attempts: int = 3):
        self._path = Path(path).expanduser()
        self._write_attempts = write_attempts

    @property
    def path(self) -> Path:
        return self._path

    def read_document(self) -> Optional[dict[str, Any]]:
        """
        Load the raw document.

        Returns:
            The parsed JSON object, or None when the file does not exist

        Raises:
            LedgerReadError: File exists but could not be read
            LedgerCorruptedError: File is not a JSON object
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error("ledger_read_failed", path=str(self._path), error=str(e))
            raise LedgerReadError(f"Could not read ledger {self._path}: {e}") from e

        try:
            document = simplejson.loads(text, use_decimal=True)
        except simplejson.JSONDecodeError as e:
            logger.error("ledger_corrupted", path=str(self._path), error=str(e))
            raise LedgerCorruptedError(f"Ledger {self._path} is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            logger.error("ledger_corrupted", path=str(self._path), error="top level is not an object")
            raise LedgerCorruptedError(f"Ledger {self._path} must contain a JSON object")

        return document

    def write_document(self, document: dict[str, Any]) -> None:
        """
        Atomically replace the ledger file, retrying transient OS errors.

        Raises:
            LedgerWriteError: All attempts failed
        """
        payload = simplejson.dumps(document, indent=2, ensure_ascii=False, use_decimal=True)
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._write_attempts),
                wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            ):
                with attempt:
                    self._replace(payload)
        except OSError as e:
            logger.error(
                "ledger_write_failed",
                path=str(self._path),
                attempts=self._write_attempts,
                error=str(e),
            )
            raise LedgerWriteError(f"Could not write ledger {self._path}: {e}") from e

    def _replace(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            with suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise


def _format_date(value: datetime) -> str:
    """ISO-8601 in UTC with a Z suffix."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _format_amount(value: Decimal) -> Union[int, Decimal]:
    """Integral amounts as plain ints; everything else keeps its exact digits."""
    if value == value.to_integral_value():
        return int(value)
    return value


class JsonLedgerStorage(ReadModifyWriteStorage):
    """
    JSON file implementation of ledger storage.

    A missing file is an empty ledger. The file is created on the first
    write, along with any missing parent directories.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        client: Optional[JsonLedgerClient] = None,
    ):
        if client is None:
            storage_settings = get_settings().storage
            client = JsonLedgerClient(
                path if path is not None else storage_settings.resolved_data_path,
                write_attempts=storage_settings.write_retry_attempts,
            )
        self._client = client

    @property
    def path(self) -> Path:
        return self._client.path

    def _transaction_to_record(self, transaction: Transaction) -> dict[str, Any]:
        """Convert a Transaction to its persisted form."""
        record: dict[str, Any] = {
            "id": transaction.id,
            "amount": _format_amount(transaction.amount),
            "description": transaction.description,
            "date": _format_date(transaction.date),
        }
        if transaction.category:
            record["category"] = transaction.category
        if transaction.is_savings:
            record["isSavings"] = True
        return record

    def _record_to_transaction(self, record: Any, index: int) -> Transaction:
        """Convert a persisted record to a Transaction."""
        try:
            return Transaction.model_validate(record)
        except ValidationError as e:
            logger.error(
                "ledger_record_invalid",
                path=str(self.path),
                index=index,
                error=str(e),
            )
            raise LedgerCorruptedError(
                f"Ledger {self.path} has an invalid transaction at index {index}: {e}"
            ) from e

    def _load(self) -> list[Transaction]:
        document = self._client.read_document()
        if document is None:
            logger.debug("ledger_missing", path=str(self.path))
            return []

        records = document.get("transactions", [])
        if not isinstance(records, list):
            logger.error("ledger_corrupted", path=str(self.path), error="transactions is not a list")
            raise LedgerCorruptedError(f"Ledger {self.path}: 'transactions' must be a list")

        return [self._record_to_transaction(record, i) for i, record in enumerate(records)]

    def _save(self, transactions: list[Transaction]) -> None:
        self._client.write_document(
            {"transactions": [self._transaction_to_record(t) for t in transactions]}
        )
        logger.debug("ledger_saved", path=str(self.path), transaction_count=len(transactions))
