"""Validation package."""

from src.validation.validator import (
    EntryValidation,
    ExpenseEntryValidator,
    ValidationIssue,
    parse_amount,
)

__all__ = [
    "EntryValidation",
    "ExpenseEntryValidator",
    "ValidationIssue",
    "parse_amount",
]
