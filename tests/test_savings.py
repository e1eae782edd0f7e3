"""Tests for the savings aggregator."""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from purse.config import GoalPriority, PurseConfig, SavingsGoal
from purse.models.transaction import Transaction
from purse.queries.savings import (
    get_goal_progress,
    get_savings_overview,
    get_savings_stats,
    growth_rate,
    list_savings_transactions,
)


NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def saving(tx_id, amount, when, is_savings=True):
    return Transaction(
        id=str(tx_id),
        amount=Decimal(str(amount)),
        description="Savings",
        date=when,
        category="Savings",
        is_savings=is_savings,
    )


def utc(year, month, day, hour=12, minute=0, second=0, microsecond=0):
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=timezone.utc)


class TestSavingsStats:
    """Totals, averages and month-over-month growth."""

    def test_totals_and_average(self):
        """Test total, count and average over deposits."""
        transactions = [
            saving(1, 500, utc(2024, 1, 10)),
            saving(2, 300, utc(2024, 2, 10)),
            saving(3, 200, utc(2024, 3, 10)),
        ]
        stats = get_savings_stats(transactions, now=NOW)
        assert stats.total_savings == Decimal(1000)
        assert stats.savings_transaction_count == 3
        assert stats.average_savings_transaction.quantize(Decimal("0.01")) == Decimal("333.33")

    def test_growth_rate(self):
        """Test a 50 percent increase over last month."""
        transactions = [
            saving(1, 200, utc(2024, 2, 5)),
            saving(2, 300, utc(2024, 3, 5)),
        ]
        stats = get_savings_stats(transactions, now=NOW)
        assert stats.this_month_savings == Decimal(300)
        assert stats.last_month_savings == Decimal(200)
        assert stats.savings_growth_rate == Decimal(50)

    def test_growth_rate_zero_without_last_month(self):
        """Test that growth is 0 when last month had no deposits."""
        stats = get_savings_stats([saving(1, 300, utc(2024, 3, 5))], now=NOW)
        assert stats.last_month_savings == Decimal(0)
        assert stats.savings_growth_rate == Decimal(0)

    def test_month_boundaries(self):
        """Test whole-day UTC month windows."""
        transactions = [
            saving(1, 1, utc(2024, 1, 31, 23, 59, 59, 999999)),
            saving(2, 10, utc(2024, 2, 1, 0, 0)),
            saving(3, 100, utc(2024, 2, 29, 23, 59, 59, 999999)),
            saving(4, 1000, utc(2024, 3, 1, 0, 0)),
        ]
        stats = get_savings_stats(transactions, now=NOW)
        assert stats.last_month_savings == Decimal(110)
        assert stats.this_month_savings == Decimal(1000)

    def test_january_compares_with_december(self):
        """Test the year boundary for last month."""
        transactions = [
            saving(1, 100, utc(2023, 12, 20)),
            saving(2, 150, utc(2024, 1, 3)),
        ]
        stats = get_savings_stats(transactions, now=utc(2024, 1, 10))
        assert stats.last_month_savings == Decimal(100)
        assert stats.savings_growth_rate == Decimal(50)

    def test_withdrawals_and_plain_income_are_ignored(self):
        """Test that only positive savings-flagged amounts count."""
        transactions = [
            saving(1, 400, utc(2024, 3, 1)),
            saving(2, -100, utc(2024, 3, 2)),
            saving(3, 999, utc(2024, 3, 3), is_savings=False),
        ]
        stats = get_savings_stats(transactions, now=NOW)
        assert stats.total_savings == Decimal(400)
        assert stats.savings_transaction_count == 1

    def test_empty_ledger(self):
        """Test that an empty ledger gives zeros without dividing by zero."""
        stats = get_savings_stats([], now=NOW)
        assert stats.total_savings == Decimal(0)
        assert stats.savings_transaction_count == 0
        assert stats.average_savings_transaction == Decimal(0)
        assert stats.savings_growth_rate == Decimal(0)

    def test_growth_rate_helper(self):
        """Test the growth formula including decline."""
        assert growth_rate(Decimal(50), Decimal(100)) == Decimal(-50)
        assert growth_rate(Decimal(50), Decimal(0)) == Decimal(0)
        assert growth_rate(Decimal(50), Decimal(-10)) == Decimal(0)


class TestGoalProgress:
    """Goal progress against the shared savings pool."""

    def test_goal_progress(self):
        """Test percentage and remaining."""
        goal = SavingsGoal(name="Car", target=Decimal(20000), priority=GoalPriority.HIGH)
        progress = get_goal_progress(goal, Decimal(1000))
        assert progress.percentage == Decimal(5)
        assert progress.remaining == Decimal(19000)
        assert progress.priority == "high"
        assert progress.is_reached is False

    def test_goal_exceeded(self):
        """Test that remaining never goes negative."""
        goal = SavingsGoal(name="Phone", target=Decimal(500))
        progress = get_goal_progress(goal, Decimal(800))
        assert progress.remaining == Decimal(0)
        assert progress.percentage == Decimal(160)
        assert progress.is_reached is True

    def test_zero_target(self):
        """Test that a zero target reports 0 percent."""
        progress = get_goal_progress(SavingsGoal(name="x", target=Decimal(0)), Decimal(10))
        assert progress.percentage == Decimal(0)

    def test_overview_lists_goals_in_order(self):
        """Test that every goal uses the same total."""
        config = PurseConfig(savings_goals=(
            SavingsGoal(name="Trip", target=Decimal(2000), deadline=date(2024, 12, 1)),
            SavingsGoal(name="Fund", target=Decimal(1000)),
        ))
        transactions = [saving(1, 500, utc(2024, 3, 1))]
        overview = get_savings_overview(transactions, config, now=NOW)
        assert overview.stats.total_savings == Decimal(500)
        assert [g.name for g in overview.goals] == ["Trip", "Fund"]
        assert [g.percentage for g in overview.goals] == [Decimal(25), Decimal(50)]
        assert overview.goals[0].deadline == date(2024, 12, 1)


class TestListSavingsTransactions:
    """Listing of savings-flagged transactions."""

    def test_newest_first_with_withdrawals(self):
        """Test ordering and that withdrawals are listed."""
        transactions = [
            saving(1, 100, utc(2024, 1, 1)),
            saving(2, -50, utc(2024, 2, 1)),
            saving(3, 999, utc(2024, 2, 15), is_savings=False),
            saving(4, 70, utc(2024, 3, 1)),
        ]
        listed = list_savings_transactions(transactions)
        assert [t.id for t in listed] == ["4", "2", "1"]

    def test_date_bounds_cover_whole_days(self):
        """Test that plain date bounds include the whole end day."""
        transactions = [
            saving(1, 10, utc(2024, 1, 31, 23, 0)),
            saving(2, 20, utc(2024, 2, 1, 0, 0)),
            saving(3, 30, utc(2024, 2, 29, 23, 59)),
            saving(4, 40, utc(2024, 3, 1, 0, 0)),
        ]
        listed = list_savings_transactions(
            transactions, start=date(2024, 2, 1), end=date(2024, 2, 29)
        )
        assert [t.id for t in listed] == ["3", "2"]

    def test_datetime_bounds_are_exact(self):
        """Test inclusive datetime bounds."""
        transactions = [saving(1, 10, utc(2024, 2, 1, 12)), saving(2, 20, utc(2024, 2, 1, 13))]
        listed = list_savings_transactions(transactions, end=utc(2024, 2, 1, 12))
        assert [t.id for t in listed] == ["1"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
