"""
Computed Report Models

These are the plain records handed back to the presentation layer.
They are produced fresh on every query and never persisted.

DESIGN DECISION: Reports carry numbers only. No formatting, colors,
currency symbols or rounding for display happen here.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from purse.models.transaction import Transaction


class _Report(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# BUDGET
# =============================================================================

class BudgetCycle(_Report):
    """
    One budget cycle window.

    Both ends are inclusive. `start_at`/`end_at` are the UTC instants used
    when filtering transactions: the first and last microsecond of the
    start and end days.
    """
    cycle_start_day: int
    start: date
    end: date
    start_at: datetime
    end_at: datetime

    @property
    def length_days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, moment: datetime) -> bool:
        return self.start_at <= moment <= self.end_at


class BudgetUsage(_Report):
    """Spend against one configured category budget for one cycle."""
    category: str
    budget: Decimal
    spent: Decimal = Field(ge=0)
    remaining: Decimal = Field(ge=0)
    percentage: Decimal

    @property
    def is_over_budget(self) -> bool:
        return self.spent > self.budget

    @property
    def over_by(self) -> Decimal:
        return max(Decimal(0), self.spent - self.budget)


class BudgetStatus(_Report):
    """Everything the budget status screen needs."""
    cycle: BudgetCycle
    usages: list[BudgetUsage] = Field(default_factory=list)
    categories_without_budget: list[str] = Field(default_factory=list)

    @property
    def over_budget(self) -> list[BudgetUsage]:
        return [usage for usage in self.usages if usage.is_over_budget]


# =============================================================================
# SAVINGS
# =============================================================================

class SavingsStats(_Report):
    total_savings: Decimal
    savings_transaction_count: int = Field(ge=0)
    average_savings_transaction: Decimal
    this_month_savings: Decimal
    last_month_savings: Decimal
    savings_growth_rate: Decimal


class GoalProgress(_Report):
    """
    Progress of one goal against the shared savings pool.

    Goals do not own separate balances: every goal is measured against
    the same total savings.
    """
    name: str
    target: Decimal
    priority: str
    deadline: Optional[date] = None
    saved: Decimal
    percentage: Decimal
    remaining: Decimal

    @property
    def is_reached(self) -> bool:
        return self.percentage >= 100


class SavingsOverview(_Report):
    stats: SavingsStats
    goals: list[GoalProgress] = Field(default_factory=list)


# =============================================================================
# CATEGORY DISTRIBUTION
# =============================================================================

class CategoryStats(_Report):
    category: str
    total: Decimal
    count: int = Field(ge=0)
    income: Decimal
    expenses: Decimal

    @property
    def average(self) -> Decimal:
        if self.count == 0:
            return Decimal(0)
        return self.total / self.count


class LedgerSummary(_Report):
    """
    Whole-ledger totals.

    total_income and total_expenses leave out savings-flagged
    transactions; those are reported in the savings fields.
    """
    total_categories: int = Field(ge=0)
    total_transactions: int = Field(ge=0)
    total_income: Decimal
    total_expenses: Decimal
    net_amount: Decimal
    total_savings_deposits: Decimal
    total_savings_withdrawals: Decimal


class CategoryDistribution(_Report):
    categories: list[CategoryStats] = Field(default_factory=list)
    summary: LedgerSummary

    def share_of(self, category: str) -> Decimal:
        """abs(total) of a category as a percentage of all abs(totals)."""
        grand = sum((abs(c.total) for c in self.categories), Decimal(0))
        if grand == 0:
            return Decimal(0)
        for stats in self.categories:
            if stats.category == category:
                return abs(stats.total) / grand * 100
        return Decimal(0)


# =============================================================================
# BALANCE
# =============================================================================

class BalancePoint(_Report):
    """Running balance right after `transaction` in date order."""
    transaction: Transaction
    balance: Decimal
