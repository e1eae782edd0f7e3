"""
Category Distribution Aggregator

Groups the whole ledger (savings included) by category for reporting,
plus whole-ledger totals and the running balance series.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Any, Iterable, Sequence

from purse.models.reports import (
    BalancePoint,
    CategoryDistribution,
    CategoryStats,
    LedgerSummary,
)
from purse.models.transaction import Transaction


def get_category_stats(transactions: Iterable[Transaction]) -> list[CategoryStats]:
    """
    Per-category totals, largest abs(total) first.

    Ties keep the order in which categories first appear in the ledger.
    """
    groups: dict[str, dict[str, Any]] = defaultdict(
        lambda: {
            "total": Decimal(0),
            "count": 0,
            "income": Decimal(0),
            "expenses": Decimal(0),
        }
    )

    for tx in transactions:
        entry = groups[tx.display_category]
        entry["total"] += tx.amount
        entry["count"] += 1
        if tx.amount > 0:
            entry["income"] += tx.amount
        else:
            entry["expenses"] += abs(tx.amount)

    stats = [CategoryStats(category=name, **entry) for name, entry in groups.items()]
    return sorted(stats, key=lambda s: abs(s.total), reverse=True)


def get_ledger_summary(transactions: Sequence[Transaction]) -> LedgerSummary:
    """
    Whole-ledger totals.

    Income and expenses count ordinary transactions only. Savings-flagged
    money is reported separately as deposits and withdrawals.
    """
    income = expenses = deposits = withdrawals = Decimal(0)
    for tx in transactions:
        if tx.is_savings:
            if tx.amount > 0:
                deposits += tx.amount
            else:
                withdrawals += abs(tx.amount)
        elif tx.amount > 0:
            income += tx.amount
        else:
            expenses += abs(tx.amount)

    return LedgerSummary(
        total_categories=len({tx.display_category for tx in transactions}),
        total_transactions=len(transactions),
        total_income=income,
        total_expenses=expenses,
        net_amount=income - expenses,
        total_savings_deposits=deposits,
        total_savings_withdrawals=withdrawals,
    )


def get_category_distribution(transactions: Iterable[Transaction]) -> CategoryDistribution:
    transactions = list(transactions)
    return CategoryDistribution(
        categories=get_category_stats(transactions),
        summary=get_ledger_summary(transactions),
    )


def get_balance(transactions: Iterable[Transaction]) -> Decimal:
    return sum((tx.amount for tx in transactions), Decimal(0))


def get_balance_history(transactions: Iterable[Transaction]) -> list[BalancePoint]:
    """Running balance after each transaction, oldest first (stable on ties)."""
    history = []
    running = Decimal(0)
    for tx in sorted(transactions, key=lambda t: t.date):
        running += tx.amount
        history.append(BalancePoint(transaction=tx, balance=running))
    return history
