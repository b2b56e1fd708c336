"""
Core Data Models for Expense Tracker

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce the budget invariants at runtime
2. Be serializable for local storage (camelCase JSON)
3. Keep derived values separate from persisted values

DESIGN DECISION: BudgetData is the single aggregate root. It is never
patched field-by-field in storage; every change produces a new BudgetData
that is written out whole.
"""

import math
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional, Union
from uuid import uuid4

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    model_validator,
)


def _fits_json_number(value: Decimal) -> Decimal:
    as_float = float(value)
    if math.isinf(as_float) or (as_float == 0 and value != 0):
        raise ValueError(f"{value} cannot be stored as a JSON number")
    return value


# Money is exact in memory and a plain JSON number on disk.
Money = Annotated[
    Decimal,
    AfterValidator(_fits_json_number),
    PlainSerializer(float, return_type=float, when_used="json"),
]


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseMode(str, Enum):
    """
    Spending modes.

    The mode only decides which categories are offered for NEW entries.
    Recorded expenses keep whatever category they were saved with.
    """
    PERSONAL = "Personal"
    BUSINESS = "Business"
    DROPSHIPPING = "Dropshipping"
    INVESTMENT = "Investment"
    TRAVEL = "Travel"


class ChartType(str, Enum):
    """Chart used to render the category breakdown."""
    PIE = "pie"
    BAR = "bar"


# =============================================================================
# REFERENCE DATA
# =============================================================================

class Currency(BaseModel):
    """A display currency. Purely a label: no conversion is ever done."""
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=3, max_length=3)
    symbol: str = Field(..., min_length=1)
    name: str


# =============================================================================
# CORE EXPENSE MODELS
# =============================================================================

def new_expense_id() -> str:
    """Opaque unique identifier for an expense."""
    return uuid4().hex


class Expense(BaseModel):
    """
    A single recorded expense.

    Immutable: to change an expense, remove it and add a new one.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        default_factory=new_expense_id,
        min_length=1,
        description="Opaque unique identifier"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category label (never the literal 'Other' sentinel)"
    )
    amount: Money = Field(
        ...,
        gt=0,
        description="Amount in the units of the selected currency"
    )
    timestamp: int = Field(
        ...,
        ge=0,
        description="Capture time in epoch milliseconds"
    )


class BudgetData(BaseModel):
    """
    The persisted aggregate root.

    Stored as camelCase JSON:
    {"monthlyBudget": 0, "expenses": [...], "currency": "USD", "mode": "Personal"}
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    monthly_budget: Money = Field(
        default=Decimal("0"),
        ge=0,
        alias="monthlyBudget",
        description="Monthly spending limit; 0 means not set"
    )
    expenses: tuple[Expense, ...] = Field(
        default=(),
        description="Expenses in insertion order"
    )
    currency: str = Field(
        default="USD",
        description="Display currency code"
    )
    mode: ExpenseMode = Field(
        default=ExpenseMode.PERSONAL,
        description="Current spending mode"
    )

    @model_validator(mode='after')
    def validate_unique_ids(self) -> 'BudgetData':
        """Expense ids must be unique within the sequence."""
        seen = set()
        for expense in self.expenses:
            if expense.id in seen:
                raise ValueError(f"Duplicate expense id: {expense.id}")
            seen.add(expense.id)
        return self

    def to_storage_dict(self) -> dict:
        """Dictionary in the persisted (camelCase) layout."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# STAGED INPUT MODELS
# =============================================================================

class ExpenseEntry(BaseModel):
    """
    One row of the (not yet submitted) expense entry form.

    CRITICAL: This is RAW user input. Nothing here is trusted until the
    validator has normalized it; an invalid row is simply not committed.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    row_id: str = Field(default_factory=new_expense_id)
    category: str = Field(
        default="",
        description="Selected category, possibly the 'Other' sentinel"
    )
    amount: Union[Decimal, float, int, str, None] = Field(
        default="",
        description="Amount as typed by the user"
    )
    custom_category: str = Field(
        default="",
        description="Free-text label used when category is 'Other'"
    )


# =============================================================================
# DERIVED MODELS
# =============================================================================

class CategorySlice(BaseModel):
    """One category's share of total spending. Input for charts."""
    model_config = ConfigDict(frozen=True)

    name: str
    value: Decimal
    percentage: float = Field(
        ...,
        description="Share of all spending, rounded to one decimal"
    )


class DashboardMetrics(BaseModel):
    """Headline numbers shown above everything else."""
    model_config = ConfigDict(frozen=True)

    total_expenses: Decimal
    remaining: Decimal
    is_over_budget: bool
    percentage_used: float
    top_category: Optional[CategorySlice] = None
