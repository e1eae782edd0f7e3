"""
Tests for the PurseLedger facade.

Uses in-memory stores so no file is touched, except where the JSON
store is the point of the test.
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from purse.audit import AuditLogger
from purse.config import PurseConfig, set_category_budget, set_savings_goal
from purse.models.audit import AuditEventType, AuditSeverity
from purse.models.transaction import TransactionUpdate
from purse.orchestrator import PurseLedger
from purse.services.storage import (
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
    JsonLedgerClient,
    JsonLedgerStorage,
    LedgerCorruptedError,
    LedgerReadError,
    LedgerWriteError,
)


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def ledger(audit_storage):
    return PurseLedger(
        storage=InMemoryLedgerStorage(),
        audit_logger=AuditLogger(audit_storage, enabled=True),
    )


def event_types(audit_storage):
    return [e.event_type for e in audit_storage.events]


class TestTransactions:
    """Add, list, edit and delete through the facade."""

    def test_add_and_list(self, ledger, audit_storage):
        """Test that adding is stored and audited."""
        tx = ledger.add_transaction(-25, "Lunch", category="Food")
        assert ledger.list_transactions() == [tx]
        assert event_types(audit_storage) == [AuditEventType.TRANSACTION_ADDED]
        assert audit_storage.events[0].entity_id == tx.id

    def test_edit_preserves_savings_flag(self, ledger, audit_storage):
        """Test that an edit without is_savings keeps it."""
        tx = ledger.add_savings(200)
        assert ledger.edit_transaction(tx.id, TransactionUpdate(description="Bonus")) is True

        edited = ledger.get_transaction(tx.id)
        assert edited.description == "Bonus"
        assert edited.is_savings is True
        assert audit_storage.events[-1].details["fields"] == ["description"]

    def test_edit_unknown_id(self, ledger, audit_storage):
        """Test that a missing id is reported, not raised."""
        assert ledger.edit_transaction("nope", TransactionUpdate(amount=1)) is False
        assert audit_storage.events[-1].severity == AuditSeverity.WARNING

    def test_delete(self, ledger, audit_storage):
        """Test delete and its audit trail."""
        tx = ledger.add_transaction(10, "x")
        assert ledger.delete_transaction(tx.id) is True
        assert ledger.delete_transaction(tx.id) is False
        assert ledger.list_transactions() == []
        assert event_types(audit_storage)[-2:] == [
            AuditEventType.TRANSACTION_DELETED,
            AuditEventType.TRANSACTION_DELETED,
        ]


class TestBalance:
    """Savings and balance operations."""

    def test_add_savings(self, ledger):
        """Test the savings deposit shape."""
        tx = ledger.add_savings(Decimal("150.75"))
        assert tx.category == "Savings"
        assert tx.is_savings is True
        assert tx.description == "Savings"

    def test_set_balance_replaces_ledger(self, ledger, audit_storage):
        """Test that set_balance clears and writes one opening entry."""
        ledger.add_transaction(100, "a")
        ledger.add_transaction(-40, "b")

        opening = ledger.set_balance(1000)

        assert ledger.list_transactions() == [opening]
        assert opening.description == "Initial Balance"
        assert opening.category == "System"
        assert ledger.get_balance() == Decimal(1000)

        cleared = next(e for e in audit_storage.events if e.event_type == AuditEventType.LEDGER_CLEARED)
        balance_set = audit_storage.events[-1]
        assert cleared.details["removed"] == 2
        assert balance_set.event_type == AuditEventType.BALANCE_SET
        assert balance_set.correlation_id == cleared.correlation_id

    def test_update_balance(self, ledger):
        """Test that update_balance appends an adjustment."""
        ledger.set_balance(500)
        adjustment = ledger.update_balance(-75)
        assert adjustment.description == "Balance Adjustment"
        assert adjustment.category == "System"
        assert ledger.get_balance() == Decimal(425)

    def test_balance_history(self, ledger):
        """Test the running balance series."""
        ledger.add_transaction(100, "a", date=datetime(2024, 1, 2, tzinfo=timezone.utc))
        ledger.add_transaction(-30, "b", date=datetime(2024, 1, 1, tzinfo=timezone.utc))
        history = ledger.balance_history()
        assert [p.transaction.description for p in history] == ["b", "a"]
        assert [p.balance for p in history] == [Decimal(-30), Decimal(70)]


class TestReports:
    """Report operations read straight from the store."""

    def test_budget_status(self, ledger):
        """Test budget status with a config."""
        config = set_category_budget(PurseConfig(categories=("Food", "Fun")), "Food", 200).config
        ledger.add_transaction(-50, "Lunch", category="Food", date=datetime(2024, 3, 3, tzinfo=timezone.utc))
        ledger.add_savings(300)

        status = ledger.budget_status(config, today=date(2024, 3, 20))
        (food,) = status.usages
        assert food.spent == Decimal(50)
        assert food.percentage == Decimal(25)
        assert status.categories_without_budget == ["Fun"]

    def test_budget_status_without_config(self, ledger):
        """Test that the settings default cycle day is used."""
        status = ledger.budget_status(today=date(2024, 3, 20))
        assert status.usages == []
        assert status.cycle.cycle_start_day == 1

    def test_savings_overview(self, ledger):
        """Test savings stats and goal progress."""
        config = set_savings_goal(PurseConfig(), "Car", 2000).config
        ledger.add_savings(500)
        ledger.add_transaction(-20, "Coffee", category="Food")

        overview = ledger.savings_overview(config)
        assert overview.stats.total_savings == Decimal(500)
        assert overview.goals[0].percentage == Decimal(25)

    def test_savings_transactions(self, ledger):
        """Test the savings listing."""
        first = ledger.add_transaction(100, "in", category="Savings", is_savings=True,
                                       date=datetime(2024, 1, 1, tzinfo=timezone.utc))
        second = ledger.add_transaction(-40, "out", category="Savings", is_savings=True,
                                        date=datetime(2024, 2, 1, tzinfo=timezone.utc))
        ledger.add_transaction(10, "plain")
        assert ledger.savings_transactions() == [second, first]
        assert ledger.savings_transactions(end=date(2024, 1, 31)) == [first]

    def test_category_distribution(self, ledger):
        """Test the distribution report."""
        ledger.add_transaction(-30, "a", category="Food")
        ledger.add_savings(100)
        distribution = ledger.category_distribution()
        assert [c.category for c in distribution.categories] == ["Savings", "Food"]
        assert distribution.summary.total_expenses == Decimal(30)
        assert distribution.summary.total_savings_deposits == Decimal(100)


class TestStorageFailures:
    """Storage errors are audited and re-raised."""

    def test_corrupted_ledger_is_audited(self, tmp_path, audit_storage):
        """Test that a corrupt file raises and records a storage failure."""
        path = tmp_path / "ledger.json"
        path.write_text("{broken", encoding="utf-8")
        ledger = PurseLedger(
            storage=JsonLedgerStorage(path),
            audit_logger=AuditLogger(audit_storage, enabled=True),
        )

        with pytest.raises(LedgerCorruptedError):
            ledger.add_transaction(1, "x")

        (event,) = audit_storage.events
        assert event.event_type == AuditEventType.STORAGE_FAILED
        assert event.details["operation"] == "append"

    def test_unreadable_ledger_is_audited(self, tmp_path, audit_storage):
        """Test that a read failure raises and records a storage failure."""
        unreadable = tmp_path / "ledger.json"
        unreadable.mkdir()
        ledger = PurseLedger(
            storage=JsonLedgerStorage(unreadable),
            audit_logger=AuditLogger(audit_storage, enabled=True),
        )

        with pytest.raises(LedgerReadError):
            ledger.list_transactions()

        (event,) = audit_storage.events
        assert event.event_type == AuditEventType.STORAGE_FAILED
        assert event.details["operation"] == "list"

    def test_failed_set_balance_keeps_ledger(self, tmp_path, audit_storage, monkeypatch):
        """Test that a failed set_balance leaves every transaction in place."""
        client = JsonLedgerClient(tmp_path / "ledger.json", write_attempts=1)
        ledger = PurseLedger(
            storage=JsonLedgerStorage(client=client),
            audit_logger=AuditLogger(audit_storage, enabled=True),
        )
        kept = [ledger.add_transaction(100, "a"), ledger.add_transaction(-40, "b")]

        def failing_replace(payload):
            raise OSError("disk full")

        monkeypatch.setattr(client, "_replace", failing_replace)
        with pytest.raises(LedgerWriteError):
            ledger.set_balance(1000)

        assert ledger.list_transactions() == kept
        assert AuditEventType.LEDGER_CLEARED not in event_types(audit_storage)
        assert audit_storage.events[-1].event_type == AuditEventType.STORAGE_FAILED
        assert audit_storage.events[-1].details["operation"] == "reset"

    def test_audit_disabled(self, audit_storage):
        """Test that a disabled audit logger records nothing."""
        ledger = PurseLedger(
            storage=InMemoryLedgerStorage(),
            audit_logger=AuditLogger(audit_storage, enabled=False),
        )
        ledger.add_transaction(1, "x")
        assert audit_storage.events == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
