"""
Budget Aggregation Engine

DESIGN DECISION: Every number shown to the user is recomputed from the
expense list on every read. Nothing derived is cached or persisted, so
there is nothing to invalidate.

TIE-BREAK RULE: when categories have equal totals, the category that
first appears in the expense list wins. category_totals() keeps
first-seen order, and both the breakdown sort and top_category() are
stable with respect to that order.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from src.models.expense import (
    BudgetData,
    CategorySlice,
    DashboardMetrics,
    Expense,
)


ZERO = Decimal("0")
HUNDRED = Decimal("100")
ONE_DECIMAL = Decimal("0.1")


def total_expenses(expenses: Iterable[Expense]) -> Decimal:
    return sum((e.amount for e in expenses), ZERO)


def remaining_budget(data: BudgetData) -> Decimal:
    """Budget minus spending. Negative when over budget."""
    return data.monthly_budget - total_expenses(data.expenses)


def is_over_budget(data: BudgetData) -> bool:
    return remaining_budget(data) < 0


def percentage_used(data: BudgetData) -> float:
    """
    Spending as a percentage of the budget.

    Defined as 0.0 when no budget is set, so it is never inf or NaN.
    Not capped: 150.0 means 50% over.
    """
    if data.monthly_budget <= 0:
        return 0.0
    return float(total_expenses(data.expenses) / data.monthly_budget * HUNDRED)


def category_totals(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """
    Sum of amounts per category, in order of first appearance.

    Only categories that actually occur are present.
    """
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, ZERO) + expense.amount
    return totals


def _share(value: Decimal, grand_total: Decimal) -> float:
    if grand_total <= 0:
        return 0.0
    share = (value / grand_total * HUNDRED).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return float(share)


def category_breakdown(expenses: Iterable[Expense]) -> list[CategorySlice]:
    """
    Category slices sorted by value, largest first.

    Each percentage is the category's share of all spending, rounded
    half-up to one decimal place.
    """
    totals = category_totals(expenses)
    grand_total = sum(totals.values(), ZERO)
    slices = [
        CategorySlice(name=name, value=value, percentage=_share(value, grand_total))
        for name, value in totals.items()
    ]
    # sorted() is stable: ties stay in first-seen order
    return sorted(slices, key=lambda s: s.value, reverse=True)


def top_category(expenses: Iterable[Expense]) -> Optional[CategorySlice]:
    """Largest category, or None when there are no expenses."""
    breakdown = category_breakdown(expenses)
    return breakdown[0] if breakdown else None


def get_category_breakdown(data: BudgetData) -> list[CategorySlice]:
    return category_breakdown(data.expenses)


def get_dashboard_metrics(data: BudgetData) -> DashboardMetrics:
    """Headline figures for the dashboard."""
    spent = total_expenses(data.expenses)
    remaining = data.monthly_budget - spent
    return DashboardMetrics(
        total_expenses=spent,
        remaining=remaining,
        is_over_budget=remaining < 0,
        percentage_used=percentage_used(data),
        top_category=top_category(data.expenses),
    )
