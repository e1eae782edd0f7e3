"""
Budget Usage Aggregator

Partitions the ledger into budget expenses for one cycle and compares
them with the configured category budgets.

What counts as budget spend:
- dated inside the cycle (both ends inclusive)
- negative amount
- not savings-flagged

A transaction without a category never matches a budget, even one named
"Uncategorized".
"""

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from purse.config.ledger_config import CategoryBudget, PurseConfig
from purse.models.reports import BudgetStatus, BudgetUsage
from purse.models.transaction import UNCATEGORIZED, Transaction, as_utc
from purse.queries.cycle import get_budget_cycle


def _cycle_expenses(
    transactions: Iterable[Transaction],
    cycle_start: datetime,
    cycle_end: datetime,
) -> dict[Optional[str], Decimal]:
    cycle_start = as_utc(cycle_start)
    cycle_end = as_utc(cycle_end)

    spent: dict[Optional[str], Decimal] = defaultdict(Decimal)
    for tx in transactions:
        if not (cycle_start <= tx.date <= cycle_end):
            continue
        if tx.amount >= 0 or tx.is_savings:
            continue
        spent[tx.category or None] += abs(tx.amount)
    return spent


def get_cycle_spending(
    transactions: Iterable[Transaction],
    cycle_start: datetime,
    cycle_end: datetime,
) -> dict[str, Decimal]:
    """Budget spend per display category, budgeted or not."""
    spending: dict[str, Decimal] = defaultdict(Decimal)
    for category, amount in _cycle_expenses(transactions, cycle_start, cycle_end).items():
        spending[category or UNCATEGORIZED] += amount
    return dict(spending)


def build_budget_usage(budget: CategoryBudget, spent: Decimal) -> BudgetUsage:
    """Spent/remaining/percentage for one budget. A zero budget gives 0%."""
    cap = budget.monthly_budget
    percentage = spent / cap * 100 if cap > 0 else Decimal(0)
    return BudgetUsage(
        category=budget.category,
        budget=cap,
        spent=spent,
        remaining=max(Decimal(0), cap - spent),
        percentage=percentage,
    )


def get_budget_usage(
    transactions: Iterable[Transaction],
    cycle_start: datetime,
    cycle_end: datetime,
    category_budgets: Sequence[CategoryBudget],
) -> list[BudgetUsage]:
    """
    One BudgetUsage per configured budget, in configured order.

    Budgets with nothing spent are reported with spent=0. Spend in
    categories without a budget is left out.
    """
    spent = _cycle_expenses(transactions, cycle_start, cycle_end)
    return [
        build_budget_usage(budget, spent.get(budget.category, Decimal(0)))
        for budget in category_budgets
    ]


def get_categories_without_budget(config: PurseConfig) -> list[str]:
    budgeted = {budget.category for budget in config.category_budgets}
    return [category for category in config.categories if category not in budgeted]


def get_budget_status(
    transactions: Iterable[Transaction],
    config: PurseConfig,
    today: Optional[Union[date, datetime]] = None,
) -> BudgetStatus:
    """Budget usage for the cycle containing `today`."""
    cycle = get_budget_cycle(config.cycle_start_day, today)
    return BudgetStatus(
        cycle=cycle,
        usages=get_budget_usage(
            transactions, cycle.start_at, cycle.end_at, config.category_budgets
        ),
        categories_without_budget=get_categories_without_budget(config),
    )
