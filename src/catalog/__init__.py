"""Static reference data: currencies and per-mode categories."""

from src.catalog.categories import (
    EXPENSE_MODES,
    MODE_CATEGORIES,
    OTHER_CATEGORY,
    categories_for,
    is_other,
)
from src.catalog.currencies import (
    CURRENCIES,
    DEFAULT_CURRENCY_CODE,
    format_amount,
    format_currency,
    is_known_currency,
    list_currencies,
    resolve_currency,
)

__all__ = [
    "CURRENCIES",
    "DEFAULT_CURRENCY_CODE",
    "EXPENSE_MODES",
    "MODE_CATEGORIES",
    "OTHER_CATEGORY",
    "categories_for",
    "format_amount",
    "format_currency",
    "is_known_currency",
    "is_other",
    "list_currencies",
    "resolve_currency",
]
