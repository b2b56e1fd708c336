"""Expense ledger package."""

from src.ledger.ledger import ExpenseLedger, now_ms

__all__ = ["ExpenseLedger", "now_ms"]
