"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. A trace of destructive operations (clear, set-balance, delete)
2. Debugging capability when a write fails
3. A history the user can inspect

The audit logger:
- Always logs locally through structlog
- Optionally persists events to an AuditStorageInterface
- Never lets an audit failure break the ledger operation that caused it
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from purse.config import get_settings
from purse.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from purse.models.transaction import Transaction
from purse.services.storage.interface import AuditStorageInterface


def configure_logging(level: Optional[str] = None) -> None:
    """Route structlog through stdlib logging with JSON output."""
    level = level or get_settings().app.log_level
    logging.basicConfig(format="%(message)s", level=getattr(logging, level, logging.INFO))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit store, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
        enabled: Optional[bool] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
            enabled: Overrides the audit_enabled setting.
        """
        self._storage = storage
        self._enabled = get_settings().app.audit_enabled if enabled is None else enabled
        self._logger = structlog.get_logger(__name__)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the storage write succeeded (or no storage is
        configured, or auditing is disabled).
        """
        if not self._enabled:
            return True

        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_transaction_added(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction.id,
            amount=str(transaction.amount),
            category=transaction.category,
            is_savings=transaction.is_savings,
            correlation_id=correlation_id,
        ))

    def log_transaction_updated(self, transaction_id: str, fields: list[str], found: bool) -> None:
        self.log(AuditEventBuilder.transaction_updated(transaction_id, fields, found))

    def log_transaction_deleted(self, transaction_id: str, found: bool) -> None:
        self.log(AuditEventBuilder.transaction_deleted(transaction_id, found))

    def log_ledger_cleared(self, removed: int, correlation_id: Optional[UUID] = None) -> None:
        self.log(AuditEventBuilder.ledger_cleared(removed, correlation_id))

    def log_balance_set(self, amount: str, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.balance_set(amount, correlation_id))

    def log_storage_failed(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.storage_failed(operation, error_message, correlation_id))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a multi-step operation (e.g., set-balance).
    """
    return uuid4()
