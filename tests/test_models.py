"""
Tests for Expense Tracker models

Test strategy:
1. Unit tests for individual components (models, validators, ledger)
2. Session tests against an in-memory store
3. File-store tests against pytest's tmp_path
"""

import json

import pytest
from decimal import Decimal

from src.models.expense import (
    BudgetData,
    ChartType,
    Expense,
    ExpenseEntry,
    ExpenseMode,
)
from src.models.session import AnalyticsView, EntryDraft
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestExpenseModels:
    """Tests for expense-related Pydantic models."""

    def test_expense_creation(self):
        """Test Expense model creation."""
        expense = Expense(category="Food & Dining", amount=Decimal("12.50"), timestamp=1000)
        assert expense.category == "Food & Dining"
        assert expense.amount == Decimal("12.50")
        assert expense.id

    def test_expense_rejects_zero_amount(self):
        """Test that zero amounts are rejected."""
        with pytest.raises(ValueError):
            Expense(category="Food", amount=Decimal("0"), timestamp=1)

    def test_expense_rejects_negative_amount(self):
        with pytest.raises(ValueError):
            Expense(category="Food", amount=Decimal("-5"), timestamp=1)

    @pytest.mark.parametrize("amount", ["1e400", "1e-400"])
    def test_expense_rejects_amount_json_cannot_hold(self, amount):
        """Amounts that would turn into null or 0.0 on disk are rejected."""
        with pytest.raises(ValueError):
            Expense(category="Food", amount=Decimal(amount), timestamp=1)
        with pytest.raises(ValueError):
            BudgetData(monthly_budget=Decimal(amount))

    def test_expense_rejects_empty_category(self):
        """Whitespace-only categories are empty after stripping."""
        with pytest.raises(ValueError):
            Expense(category="   ", amount=Decimal("5"), timestamp=1)

    def test_expense_is_immutable(self):
        expense = Expense(category="Food", amount=Decimal("5"), timestamp=1)
        with pytest.raises(ValueError):
            expense.amount = Decimal("10")

    def test_expense_ids_are_unique(self):
        ids = {Expense(category="Food", amount=1, timestamp=1).id for _ in range(50)}
        assert len(ids) == 50


class TestBudgetData:
    """Tests for the persisted aggregate root."""

    def test_defaults(self):
        data = BudgetData()
        assert data.monthly_budget == 0
        assert data.expenses == ()
        assert data.currency == "USD"
        assert data.mode == ExpenseMode.PERSONAL

    def test_rejects_negative_budget(self):
        with pytest.raises(ValueError):
            BudgetData(monthly_budget=Decimal("-1"))

    def test_rejects_duplicate_expense_ids(self):
        expense = Expense(id="a", category="Food", amount=1, timestamp=1)
        with pytest.raises(ValueError, match="Duplicate expense id"):
            BudgetData(expenses=[expense, expense])

    def test_storage_layout_is_camel_case(self):
        """Persisted JSON uses the original field names and plain numbers."""
        data = BudgetData(
            monthly_budget=Decimal("1000"),
            expenses=[Expense(id="e1", category="Food", amount=Decimal("12.5"), timestamp=5)],
            currency="EUR",
            mode=ExpenseMode.TRAVEL,
        )
        stored = data.to_storage_dict()
        assert stored == {
            "monthlyBudget": 1000.0,
            "expenses": [
                {"id": "e1", "category": "Food", "amount": 12.5, "timestamp": 5}
            ],
            "currency": "EUR",
            "mode": "Travel",
        }

    def test_loads_from_camel_case_json(self):
        raw = json.dumps({
            "monthlyBudget": 250,
            "expenses": [{"id": "x", "category": "Flights", "amount": 99.99, "timestamp": 7}],
            "currency": "GBP",
            "mode": "Travel",
        })
        data = BudgetData.model_validate_json(raw)
        assert data.monthly_budget == Decimal("250")
        assert data.expenses[0].amount == Decimal("99.99")
        assert data.mode == ExpenseMode.TRAVEL


class TestSessionModels:
    """Tests for the non-persisted view models."""

    def test_analytics_view_defaults_hidden_pie(self):
        view = AnalyticsView()
        assert view.visible is False
        assert view.chart_type == ChartType.PIE

    def test_analytics_view_toggle(self):
        view = AnalyticsView()
        assert view.toggle() is True
        assert view.toggle() is False

    def test_analytics_view_select_chart(self):
        view = AnalyticsView()
        assert view.select_chart("bar") == ChartType.BAR
        with pytest.raises(ValueError):
            view.select_chart("line")

    def test_entry_draft_starts_with_one_row(self):
        assert len(EntryDraft().rows) == 1

    def test_entry_draft_keeps_last_row(self):
        draft = EntryDraft()
        only = draft.rows[0]
        assert draft.remove_row(only.row_id) is False
        assert len(draft.rows) == 1

    def test_entry_draft_add_update_remove(self):
        draft = EntryDraft()
        row = draft.add_row()
        updated = draft.update_row(row.row_id, category="Shopping", amount="20")
        assert updated.category == "Shopping"
        assert draft.rows[1].amount == "20"
        assert draft.remove_row(row.row_id) is True
        assert len(draft.rows) == 1

    def test_entry_draft_update_unknown_row(self):
        with pytest.raises(KeyError):
            EntryDraft().update_row("missing", category="Food")

    def test_entry_draft_reset(self):
        draft = EntryDraft()
        draft.add_row()
        draft.update_row(draft.rows[0].row_id, category="Food")
        draft.reset()
        assert len(draft.rows) == 1
        assert draft.rows[0].category == ""

    def test_expense_entry_strips_whitespace(self):
        entry = ExpenseEntry(category="  Food  ", custom_category=" x ")
        assert entry.category == "Food"
        assert entry.custom_category == "x"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            description="Budget set",
        )
        assert event.event_type == AuditEventType.BUDGET_SET
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.currency_changed("USD", "EUR")
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "currency_changed"
        assert log_dict["details"]["current"] == "EUR"
        assert log_dict["is_user_action"] is True

    def test_audit_event_builder_save_failed(self):
        event = AuditEventBuilder.save_failed("expense-tracker-data", "disk full")
        assert event.event_type == AuditEventType.SAVE_FAILED
        assert event.severity == AuditSeverity.ERROR
        assert event.entity_id == "expense-tracker-data"
        assert event.error_message == "disk full"

    def test_audit_event_builder_expenses_added(self):
        event = AuditEventBuilder.expenses_added(["a", "b"], "30", rejected=1)
        assert event.details["rejected_entries"] == 1
        assert "2 expense(s)" in event.description


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
