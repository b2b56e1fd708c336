"""
Currency Registry

Static table of display currencies. A currency is only a symbol and a
name here: amounts are never converted, they are assumed to already be
in the selected currency's units.

Unknown codes are a display problem, not a fault. They resolve to USD.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from src.models.expense import Currency


DEFAULT_CURRENCY_CODE = "USD"

CURRENCIES: tuple[Currency, ...] = (
    Currency(code="USD", symbol="$", name="US Dollar"),
    Currency(code="EUR", symbol="€", name="Euro"),
    Currency(code="GBP", symbol="£", name="British Pound"),
    Currency(code="JPY", symbol="¥", name="Japanese Yen"),
    Currency(code="INR", symbol="₹", name="Indian Rupee"),
    Currency(code="AUD", symbol="A$", name="Australian Dollar"),
    Currency(code="CAD", symbol="C$", name="Canadian Dollar"),
    Currency(code="AED", symbol="د.إ", name="UAE Dirham"),
    Currency(code="CNY", symbol="¥", name="Chinese Yuan"),
    Currency(code="CHF", symbol="Fr", name="Swiss Franc"),
)

_BY_CODE = {currency.code: currency for currency in CURRENCIES}


def list_currencies() -> tuple[Currency, ...]:
    """All supported currencies in display order."""
    return CURRENCIES


def is_known_currency(code: str) -> bool:
    return isinstance(code, str) and code.strip().upper() in _BY_CODE


def resolve_currency(code: str) -> Currency:
    """
    Look up a currency by code (case-insensitive).

    Returns the USD entry for anything not in the table.
    """
    if isinstance(code, str):
        found = _BY_CODE.get(code.strip().upper())
        if found is not None:
            return found
    return _BY_CODE[DEFAULT_CURRENCY_CODE]


def format_amount(amount: Union[Decimal, float, int]) -> str:
    """
    Group thousands with ',' and keep 0-2 fraction digits.

    1234 -> "1,234", 1234.5 -> "1,234.5", 0.125 -> "0.13"
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    text = f"{value:,.2f}"
    if text.endswith("00"):
        return text[:-3]
    if text.endswith("0"):
        return text[:-1]
    return text


def format_currency(amount: Union[Decimal, float, int], code: str) -> str:
    """Render an amount prefixed by the resolved currency symbol."""
    return f"{resolve_currency(code).symbol}{format_amount(amount)}"
