"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the system must conform to these schemas.
"""

from src.models.expense import (
    BudgetData,
    CategorySlice,
    ChartType,
    Currency,
    DashboardMetrics,
    Expense,
    ExpenseEntry,
    ExpenseMode,
    Money,
    new_expense_id,
)
from src.models.session import (
    AnalyticsView,
    EntryDraft,
)
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "BudgetData",
    "CategorySlice",
    "ChartType",
    "Currency",
    "DashboardMetrics",
    "Expense",
    "ExpenseEntry",
    "ExpenseMode",
    "Money",
    "new_expense_id",
    # Session models
    "AnalyticsView",
    "EntryDraft",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
