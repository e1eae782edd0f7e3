"""
Data Models Package

This package contains all Pydantic models used by Purse.
"""

from purse.models.transaction import (
    UNCATEGORIZED,
    Transaction,
    TransactionUpdate,
)
from purse.models.reports import (
    BalancePoint,
    BudgetCycle,
    BudgetStatus,
    BudgetUsage,
    CategoryDistribution,
    CategoryStats,
    GoalProgress,
    LedgerSummary,
    SavingsOverview,
    SavingsStats,
)
from purse.models.validation import ValidationIssue, ValidationResult
from purse.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "UNCATEGORIZED",
    "Transaction",
    "TransactionUpdate",
    # Reports
    "BalancePoint",
    "BudgetCycle",
    "BudgetStatus",
    "BudgetUsage",
    "CategoryDistribution",
    "CategoryStats",
    "GoalProgress",
    "LedgerSummary",
    "SavingsOverview",
    "SavingsStats",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
