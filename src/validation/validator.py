"""
Expense Entry Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - NORMALIZATION:
- Swap the "Other" sentinel for the user's free-text label
- Trim whitespace
- Parse the amount text into a Decimal

STAGE 2 - RULE CHECKS:
- Category must be non-empty
- Amount must be a finite number greater than zero

IMPORTANT: Validation NEVER repairs input. A staged row either passes as
typed or it is dropped from the batch. Dropping is not an error: the
rest of the batch is still committed.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import BaseModel, Field

from src.catalog.categories import is_other
from src.models.expense import ExpenseEntry


class ValidationIssue(BaseModel):
    """A single validation issue found on a staged entry."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'not_positive')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class EntryValidation(BaseModel):
    """Outcome of validating one staged entry."""

    row_id: str
    category: Optional[str] = None
    amount: Optional[Decimal] = None
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues


def parse_amount(raw) -> Optional[Decimal]:
    """
    Parse user-typed amount input.

    Returns None for blank, non-numeric or non-finite input, and for
    values too large or too small to be written as a JSON number.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        value = raw
    else:
        text = str(raw).strip().replace(",", "")
        if not text:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    if not value.is_finite():
        return None
    # Amounts are stored as JSON numbers, so they must survive float().
    as_float = float(value)
    if math.isinf(as_float) or (as_float == 0 and value != 0):
        return None
    return value


class ExpenseEntryValidator:
    """
    Validates staged expense entries before they reach the ledger.

    Stateless; one instance can be shared.
    """

    def normalize_category(self, entry: ExpenseEntry) -> str:
        """The category that would be stored for this entry."""
        if is_other(entry.category):
            return entry.custom_category.strip()
        return entry.category.strip()

    def validate(self, entry: ExpenseEntry) -> EntryValidation:
        issues = []

        # Stage 1: normalization
        category = self.normalize_category(entry)
        amount = parse_amount(entry.amount)

        # Stage 2: rule checks
        if not category:
            if is_other(entry.category):
                message = "A custom category name is required when 'Other' is selected"
            else:
                message = "Category is required"
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message=message,
            ))

        if amount is None:
            blank = entry.amount is None or not str(entry.amount).strip()
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing" if blank else "invalid_format",
                message="Amount is required" if blank else "Amount must be a number",
            ))
        elif amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="not_positive",
                message="Amount must be greater than zero",
            ))

        return EntryValidation(
            row_id=entry.row_id,
            category=category or None,
            amount=amount,
            issues=issues,
        )

    def get_user_friendly_summary(self, results: list[EntryValidation]) -> str:
        """
        One-line summary of a batch, suitable for a toast.
        """
        valid = sum(1 for r in results if r.is_valid)
        skipped = len(results) - valid
        if valid == 0:
            return "Nothing to add: fill in a category and an amount above zero."
        if skipped == 0:
            return f"Added {valid} expense{'s' if valid != 1 else ''}."
        return (
            f"Added {valid} expense{'s' if valid != 1 else ''}; "
            f"skipped {skipped} incomplete entr{'y' if skipped == 1 else 'ies'}."
        )
