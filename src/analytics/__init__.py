"""Budget analytics: pure aggregation over BudgetData."""

from src.analytics.aggregation import (
    category_breakdown,
    category_totals,
    get_category_breakdown,
    get_dashboard_metrics,
    is_over_budget,
    percentage_used,
    remaining_budget,
    top_category,
    total_expenses,
)

__all__ = [
    "category_breakdown",
    "category_totals",
    "get_category_breakdown",
    "get_dashboard_metrics",
    "is_over_budget",
    "percentage_used",
    "remaining_budget",
    "top_category",
    "total_expenses",
]
