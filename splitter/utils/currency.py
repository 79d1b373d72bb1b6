"""Currency display and formatting.

Pure functions from (Decimal, currency code) to display strings. Money stays
an exact ``Decimal`` everywhere else; rounding only happens here.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Dict, List, Optional

from splitter.config import settings


@dataclass(frozen=True)
class Currency:
    """A supported display currency"""
    code: str
    symbol: str
    name: str
    decimal_places: int = 2

    @property
    def display_name(self) -> str:
        return f"{self.code} - {self.name}"


SUPPORTED_CURRENCIES: List[Currency] = [
    Currency("MYR", "RM", "Malaysian Ringgit"),
    Currency("SGD", "S$", "Singapore Dollar"),
    Currency("USD", "$", "US Dollar"),
    Currency("EUR", "€", "Euro"),
    Currency("GBP", "£", "British Pound"),
    Currency("JPY", "¥", "Japanese Yen", decimal_places=0),
    Currency("THB", "฿", "Thai Baht"),
    Currency("IDR", "Rp", "Indonesian Rupiah"),
    Currency("PHP", "₱", "Philippine Peso"),
    Currency("VND", "₫", "Vietnamese Dong", decimal_places=0),
    Currency("AUD", "A$", "Australian Dollar"),
    Currency("HKD", "HK$", "Hong Kong Dollar"),
    Currency("TWD", "NT$", "Taiwan Dollar"),
    Currency("KRW", "₩", "South Korean Won", decimal_places=0),
    Currency("CNY", "¥", "Chinese Yuan"),
]

_BY_CODE: Dict[str, Currency] = {c.code: c for c in SUPPORTED_CURRENCIES}

# Fractions that equal/percentage splits commonly produce
_FRACTION_LABELS = {
    Decimal("100.00"): "Full",
    Decimal("50.00"): "1/2",
    Decimal("33.33"): "1/3",
    Decimal("33.34"): "1/3",
    Decimal("25.00"): "1/4",
    Decimal("20.00"): "1/5",
}


def get_currency(code: str) -> Optional[Currency]:
    """Look up a supported currency by its code"""
    return _BY_CODE.get((code or "").upper())


def default_currency() -> Currency:
    return get_currency(settings.DEFAULT_CURRENCY) or SUPPORTED_CURRENCIES[0]


def currency_symbol(code: str) -> str:
    """Symbol for a code; unknown codes display as themselves"""
    currency = get_currency(code)
    return currency.symbol if currency else code


def decimal_places(code: str) -> int:
    currency = get_currency(code)
    return currency.decimal_places if currency else 2


def round_to_places(value: Decimal, places: int = 2) -> Decimal:
    """Banker's rounding to a fixed number of fractional digits"""
    exponent = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(exponent, rounding=ROUND_HALF_EVEN)


def format_number(value: Decimal, places: int = 2) -> str:
    """Grouped number with exactly ``places`` fractional digits"""
    rounded = round_to_places(value, places)
    return f"{rounded:,.{places}f}"


def format_amount(value: Decimal, currency_code: str) -> str:
    """
    Format a money value for display, e.g. ``RM1,234.50`` or ``¥1,235``.

    The sign sits after the symbol (``RM-10.00``).
    """
    return f"{currency_symbol(currency_code)}{format_number(value, decimal_places(currency_code))}"


def format_with_code(value: Decimal, currency_code: str) -> str:
    return f"{format_amount(value, currency_code)} {currency_code}"


def format_percentage(value: Decimal) -> str:
    """At most one fractional digit, trailing ``.0`` dropped: ``6%``, ``12.5%``"""
    text = format_number(value, 1)
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}%"


def split_label(amount: Decimal, percentage: Decimal, is_manual_amount: bool) -> str:
    """Short label for an item split: ``Full``, ``1/2``, ``33.3%`` or a manual amount"""
    if is_manual_amount:
        return format_number(amount, 2)
    label = _FRACTION_LABELS.get(round_to_places(percentage, 2))
    if label:
        return label
    return format_percentage(percentage)
