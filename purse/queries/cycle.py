"""
Budget Cycle Calculator

A budget cycle is a one-month window anchored on a configurable day of
the month. With a start day of 15 the cycles run 15th -> 14th.

Overflow policy: in every month the anchor is the start day clamped into
the month (so day 31 means "the last day" in 30-day months and in
February). Days below 1 clamp to 1. Cycles are therefore contiguous:
each one ends the day before the next month's anchor.
"""

from calendar import monthrange
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from purse.models.reports import BudgetCycle


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def as_utc_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """(year, month) moved by `delta` calendar months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_anchor(year: int, month: int, cycle_start_day: int) -> date:
    """The cycle start date falling in the given month."""
    days_in_month = monthrange(year, month)[1]
    return date(year, month, max(1, min(cycle_start_day, days_in_month)))


def get_budget_cycle(
    cycle_start_day: int = 1,
    today: Optional[Union[date, datetime]] = None,
) -> BudgetCycle:
    """
    The cycle containing `today` (default: the current UTC date).

    Pure function; never raises for out-of-range start days.
    """
    today = as_utc_date(today) if today is not None else today_utc()

    anchor = month_anchor(today.year, today.month, cycle_start_day)
    if today >= anchor:
        start = anchor
    else:
        year, month = shift_month(today.year, today.month, -1)
        start = month_anchor(year, month, cycle_start_day)

    next_year, next_month = shift_month(start.year, start.month, 1)
    end = month_anchor(next_year, next_month, cycle_start_day) - timedelta(days=1)

    return BudgetCycle(
        cycle_start_day=cycle_start_day,
        start=start,
        end=end,
        start_at=start_of_day(start),
        end_at=end_of_day(end),
    )


def get_current_budget_cycle_start(
    cycle_start_day: int = 1,
    today: Optional[Union[date, datetime]] = None,
) -> datetime:
    return get_budget_cycle(cycle_start_day, today).start_at


def get_current_budget_cycle_end(
    cycle_start_day: int = 1,
    today: Optional[Union[date, datetime]] = None,
) -> datetime:
    return get_budget_cycle(cycle_start_day, today).end_at
