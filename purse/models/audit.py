"""
Audit Models for Purse

Every change to the ledger is logged for audit purposes.
This provides:
1. A trace of what happened to the ledger file and when
2. Debugging information when a write fails
3. A way to reconstruct destructive operations such as set-balance

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger mutations
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    LEDGER_CLEARED = "ledger_cleared"
    BALANCE_SET = "balance_set"

    # Failures
    STORAGE_FAILED = "storage_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every ledger mutation creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'ledger')"
    )
    entity_id: Optional[str] = None

    # For tracking related events (set-balance clears, then appends)
    correlation_id: Optional[UUID] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(transaction)
        event = AuditEventBuilder.ledger_cleared(removed=12)
    """

    @staticmethod
    def transaction_added(
        transaction_id: str,
        amount: str,
        category: Optional[str],
        is_savings: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Transaction added: {amount}",
            details={
                "amount": amount,
                "category": category,
                "is_savings": is_savings,
            },
        )

    @staticmethod
    def transaction_updated(
        transaction_id: str,
        fields: list[str],
        found: bool,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            severity=AuditSeverity.INFO if found else AuditSeverity.WARNING,
            entity_type="transaction",
            entity_id=transaction_id,
            description=(
                f"Transaction updated: {', '.join(fields)}"
                if found
                else "Transaction to update was not found"
            ),
            details={
                "fields": fields,
                "found": found,
            },
        )

    @staticmethod
    def transaction_deleted(
        transaction_id: str,
        found: bool,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            severity=AuditSeverity.INFO if found else AuditSeverity.WARNING,
            entity_type="transaction",
            entity_id=transaction_id,
            description=(
                "Transaction deleted"
                if found
                else "Transaction to delete was not found"
            ),
            details={"found": found},
        )

    @staticmethod
    def ledger_cleared(
        removed: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_CLEARED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Ledger cleared ({removed} transactions removed)",
            details={"removed": removed},
        )

    @staticmethod
    def balance_set(
        amount: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCE_SET,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Balance set to {amount}",
            details={"amount": amount},
        )

    @staticmethod
    def storage_failed(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Storage failure during {operation}",
            error_message=error_message,
            details={"operation": operation},
        )
