"""
Main Orchestrator for Purse

This module ties the ledger store, the aggregators and the audit trail
together behind one facade, PurseLedger. The presentation layer (CLI,
menus, report templates) calls this and renders what comes back.

DESIGN DECISION: The orchestrator enforces the boundaries:
- Aggregators never touch storage; they get a transaction list
- Every mutation is audited
- Storage failures are logged and audited, then re-raised unchanged
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional, TypeVar, Union

import structlog

from purse.audit import AuditLogger, create_correlation_id
from purse.config import PurseConfig, get_settings
from purse.models.reports import (
    BalancePoint,
    BudgetStatus,
    CategoryDistribution,
    SavingsOverview,
)
from purse.models.transaction import Transaction, TransactionUpdate
from purse.queries import (
    get_balance,
    get_balance_history,
    get_budget_status,
    get_category_distribution,
    get_savings_overview,
    list_savings_transactions,
)
from purse.services.storage import (
    JsonLedgerStorage,
    LedgerStorageInterface,
    StorageError,
)
from purse.services.storage.interface import Amount

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SAVINGS_CATEGORY = "Savings"
SYSTEM_CATEGORY = "System"


class PurseLedger:
    """
    Facade over one ledger.

    Every read goes to the store, so two facades over the same file see
    each other's writes. There is no locking: last writer wins.
    """

    def __init__(
        self,
        storage: Optional[LedgerStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage or JsonLedgerStorage()
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def storage(self) -> LedgerStorageInterface:
        return self._storage

    def _call(self, operation: str, action: Callable[[], T], correlation_id=None) -> T:
        try:
            return action()
        except StorageError as e:
            logger.error("ledger_storage_failed", operation=operation, error=str(e))
            self._audit_logger.log_storage_failed(
                operation=operation,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

    def _default_config(self) -> PurseConfig:
        return PurseConfig(cycle_start_day=get_settings().app.default_cycle_start_day)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def add_transaction(
        self,
        amount: Amount,
        description: str,
        category: Optional[str] = None,
        is_savings: bool = False,
        date: Optional[datetime] = None,
    ) -> Transaction:
        transaction = self._call(
            "append",
            lambda: self._storage.append(
                amount, description, category=category, is_savings=is_savings, date=date
            ),
        )
        self._audit_logger.log_transaction_added(transaction)
        return transaction

    def list_transactions(self) -> list[Transaction]:
        return self._call("list", self._storage.list_transactions)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self._call("get", lambda: self._storage.get_by_id(transaction_id))

    def delete_transaction(self, transaction_id: str) -> bool:
        found = self._call("delete", lambda: self._storage.delete_by_id(transaction_id))
        self._audit_logger.log_transaction_deleted(transaction_id, found)
        return found

    def edit_transaction(self, transaction_id: str, update: TransactionUpdate) -> bool:
        """
        Apply a partial update.

        Returns False when no transaction has that id. Fields the update
        does not name keep their values, is_savings included.
        """
        found = self._call("update", lambda: self._storage.update(transaction_id, update))
        self._audit_logger.log_transaction_updated(
            transaction_id, sorted(update.model_fields_set), found
        )
        return found

    # ------------------------------------------------------------------
    # Savings and balance
    # ------------------------------------------------------------------

    def add_savings(self, amount: Amount, description: str = "Savings") -> Transaction:
        return self.add_transaction(
            amount, description, category=SAVINGS_CATEGORY, is_savings=True
        )

    def set_balance(self, amount: Amount) -> Transaction:
        """
        Replace the whole ledger with one opening transaction.

        This is destructive: every existing transaction is removed. The
        store does it in one write, so a failure leaves the old ledger intact.
        """
        correlation_id = create_correlation_id()

        removed = len(self._call("list", self._storage.list_transactions, correlation_id))
        transaction = self._call(
            "reset",
            lambda: self._storage.reset(amount, "Initial Balance", category=SYSTEM_CATEGORY),
            correlation_id,
        )
        self._audit_logger.log_ledger_cleared(removed, correlation_id)
        self._audit_logger.log_transaction_added(transaction, correlation_id)
        self._audit_logger.log_balance_set(str(transaction.amount), correlation_id)
        return transaction

    def update_balance(
        self,
        amount: Amount,
        description: str = "Balance Adjustment",
        category: str = SYSTEM_CATEGORY,
    ) -> Transaction:
        return self.add_transaction(amount, description, category=category)

    def get_balance(self) -> Decimal:
        return get_balance(self.list_transactions())

    def balance_history(self) -> list[BalancePoint]:
        return get_balance_history(self.list_transactions())

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def budget_status(
        self,
        config: Optional[PurseConfig] = None,
        today: Optional[Union[date, datetime]] = None,
    ) -> BudgetStatus:
        """Budget usage for the current cycle.

        Without a config, the cycle day comes from the runtime settings and
        no budgets are configured.
        """
        config = config or self._default_config()
        return get_budget_status(self.list_transactions(), config, today)

    def savings_overview(
        self,
        config: Optional[PurseConfig] = None,
        now: Optional[datetime] = None,
    ) -> SavingsOverview:
        config = config or self._default_config()
        return get_savings_overview(self.list_transactions(), config, now)

    def savings_transactions(
        self,
        start: Optional[Union[date, datetime]] = None,
        end: Optional[Union[date, datetime]] = None,
    ) -> list[Transaction]:
        return list_savings_transactions(self.list_transactions(), start, end)

    def category_distribution(self) -> CategoryDistribution:
        return get_category_distribution(self.list_transactions())
