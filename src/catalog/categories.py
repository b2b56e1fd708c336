"""
Category Catalog

Each expense mode offers its own fixed list of eight categories. The last
entry of every list is the "Other" sentinel, which asks the user for a
free-text label instead. The sentinel itself is never stored.
"""

from typing import Union

from src.models.expense import ExpenseMode


OTHER_CATEGORY = "Other"

EXPENSE_MODES: tuple[ExpenseMode, ...] = tuple(ExpenseMode)

MODE_CATEGORIES: dict[ExpenseMode, tuple[str, ...]] = {
    ExpenseMode.PERSONAL: (
        "Food & Dining",
        "Transportation",
        "Shopping",
        "Entertainment",
        "Bills & Utilities",
        "Healthcare",
        "Education",
        OTHER_CATEGORY,
    ),
    ExpenseMode.BUSINESS: (
        "Office Supplies",
        "Marketing",
        "Software & Tools",
        "Travel & Meetings",
        "Equipment",
        "Legal & Professional",
        "Insurance",
        OTHER_CATEGORY,
    ),
    ExpenseMode.DROPSHIPPING: (
        "Product Cost",
        "Advertising",
        "Shipping",
        "Platform Fees",
        "Tools & Software",
        "Returns & Refunds",
        "Packaging",
        OTHER_CATEGORY,
    ),
    ExpenseMode.INVESTMENT: (
        "Stocks",
        "Bonds",
        "Real Estate",
        "Cryptocurrency",
        "Mutual Funds",
        "Commodities",
        "Education",
        OTHER_CATEGORY,
    ),
    ExpenseMode.TRAVEL: (
        "Flights",
        "Accommodation",
        "Food & Dining",
        "Transportation",
        "Activities",
        "Shopping",
        "Insurance",
        OTHER_CATEGORY,
    ),
}


def categories_for(mode: Union[ExpenseMode, str]) -> tuple[str, ...]:
    """
    Categories offered for new entries in the given mode.

    Raises:
        ValueError: If mode is not one of the ExpenseMode values
    """
    return MODE_CATEGORIES[ExpenseMode(mode)]


def is_other(category: str) -> bool:
    """True when the category is the free-text sentinel."""
    return category.strip() == OTHER_CATEGORY
