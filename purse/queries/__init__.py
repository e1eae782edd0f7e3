"""Ledger aggregation package. Every function here is pure."""

from purse.queries.cycle import (
    get_budget_cycle,
    get_current_budget_cycle_end,
    get_current_budget_cycle_start,
    month_anchor,
)
from purse.queries.budget import (
    build_budget_usage,
    get_budget_status,
    get_budget_usage,
    get_categories_without_budget,
    get_cycle_spending,
)
from purse.queries.savings import (
    get_goal_progress,
    get_goals_progress,
    get_savings_overview,
    get_savings_stats,
    growth_rate,
    list_savings_transactions,
    savings_deposits,
)
from purse.queries.distribution import (
    get_balance,
    get_balance_history,
    get_category_distribution,
    get_category_stats,
    get_ledger_summary,
)

__all__ = [
    # Budget cycle
    "get_budget_cycle",
    "get_current_budget_cycle_end",
    "get_current_budget_cycle_start",
    "month_anchor",
    # Budget usage
    "build_budget_usage",
    "get_budget_status",
    "get_budget_usage",
    "get_categories_without_budget",
    "get_cycle_spending",
    # Savings
    "get_goal_progress",
    "get_goals_progress",
    "get_savings_overview",
    "get_savings_stats",
    "growth_rate",
    "list_savings_transactions",
    "savings_deposits",
    # Distribution
    "get_balance",
    "get_balance_history",
    "get_category_distribution",
    "get_category_stats",
    "get_ledger_summary",
]
