"""
Savings Aggregator

Savings deposits are positive, savings-flagged transactions. Negative
savings-flagged entries (withdrawals) are left out of every statistic.

Month windows are calendar months in UTC: this month runs from the 1st
at 00:00 onward, last month covers its 1st through its last day,
both whole days included.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from purse.config.ledger_config import PurseConfig, SavingsGoal
from purse.models.reports import GoalProgress, SavingsOverview, SavingsStats
from purse.models.transaction import Transaction, as_utc, utc_now
from purse.queries.cycle import end_of_day, shift_month, start_of_day


def savings_deposits(transactions: Iterable[Transaction]) -> list[Transaction]:
    return [tx for tx in transactions if tx.is_savings_deposit]


def growth_rate(current: Decimal, previous: Decimal) -> Decimal:
    """Percent change from previous to current; 0 when previous is not positive."""
    if previous > 0:
        return (current - previous) / previous * 100
    return Decimal(0)


def get_savings_stats(
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> SavingsStats:
    now = as_utc(now) if now is not None else utc_now()
    deposits = savings_deposits(transactions)

    this_month_start = start_of_day(date(now.year, now.month, 1))
    last_year, last_month = shift_month(now.year, now.month, -1)
    last_month_start = start_of_day(date(last_year, last_month, 1))
    last_month_end = this_month_start - timedelta(microseconds=1)

    total = sum((tx.amount for tx in deposits), Decimal(0))
    this_month = sum(
        (tx.amount for tx in deposits if tx.date >= this_month_start),
        Decimal(0),
    )
    previous_month = sum(
        (tx.amount for tx in deposits if last_month_start <= tx.date <= last_month_end),
        Decimal(0),
    )
    count = len(deposits)

    return SavingsStats(
        total_savings=total,
        savings_transaction_count=count,
        average_savings_transaction=total / count if count else Decimal(0),
        this_month_savings=this_month,
        last_month_savings=previous_month,
        savings_growth_rate=growth_rate(this_month, previous_month),
    )


def get_goal_progress(goal: SavingsGoal, total_savings: Decimal) -> GoalProgress:
    """
    Progress of one goal.

    All goals draw on the same savings total; there are no per-goal
    balances.
    """
    percentage = total_savings / goal.target * 100 if goal.target > 0 else Decimal(0)
    return GoalProgress(
        name=goal.name,
        target=goal.target,
        priority=goal.priority.value,
        deadline=goal.deadline,
        saved=total_savings,
        percentage=percentage,
        remaining=max(Decimal(0), goal.target - total_savings),
    )


def get_goals_progress(
    goals: Sequence[SavingsGoal],
    total_savings: Decimal,
) -> list[GoalProgress]:
    return [get_goal_progress(goal, total_savings) for goal in goals]


def get_savings_overview(
    transactions: Iterable[Transaction],
    config: PurseConfig,
    now: Optional[datetime] = None,
) -> SavingsOverview:
    stats = get_savings_stats(transactions, now)
    return SavingsOverview(
        stats=stats,
        goals=get_goals_progress(config.savings_goals, stats.total_savings),
    )


def _lower_bound(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    return start_of_day(value)


def _upper_bound(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    return end_of_day(value)


def list_savings_transactions(
    transactions: Iterable[Transaction],
    start: Optional[Union[date, datetime]] = None,
    end: Optional[Union[date, datetime]] = None,
) -> list[Transaction]:
    """
    Savings-flagged transactions, newest first.

    Withdrawals are listed too. Bounds are inclusive; a plain date bound
    covers that whole UTC day.
    """
    lower = _lower_bound(start) if start is not None else None
    upper = _upper_bound(end) if end is not None else None

    selected = [
        tx for tx in transactions
        if tx.is_savings
        and (lower is None or tx.date >= lower)
        and (upper is None or tx.date <= upper)
    ]
    return sorted(selected, key=lambda tx: tx.date, reverse=True)
