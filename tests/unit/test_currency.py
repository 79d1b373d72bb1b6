"""Unit tests for currency formatting helpers."""

from decimal import Decimal

import pytest

from splitter.utils import currency


def test_supported_currency_lookup():
    myr = currency.get_currency("myr")
    assert myr.symbol == "RM"
    assert myr.display_name == "MYR - Malaysian Ringgit"
    assert currency.get_currency("XYZ") is None
    assert currency.default_currency().code == "MYR"


def test_unknown_code_uses_code_as_symbol():
    assert currency.currency_symbol("XYZ") == "XYZ"
    assert currency.decimal_places("XYZ") == 2


@pytest.mark.parametrize(
    "value,code,expected",
    [
        (Decimal("1234.5"), "MYR", "RM1,234.50"),
        (Decimal("0"), "USD", "$0.00"),
        (Decimal("1234.5"), "JPY", "¥1,234"),
        (Decimal("1235.5"), "JPY", "¥1,236"),
        (Decimal("-10"), "MYR", "RM-10.00"),
        (Decimal("33.333333"), "SGD", "S$33.33"),
        (Decimal("5"), "XYZ", "XYZ5.00"),
    ],
)
def test_format_amount(value, code, expected):
    assert currency.format_amount(value, code) == expected


def test_format_with_code():
    assert currency.format_with_code(Decimal("12"), "EUR") == "€12.00 EUR"


def test_round_to_places_is_half_even():
    assert currency.round_to_places(Decimal("2.665")) == Decimal("2.66")
    assert currency.round_to_places(Decimal("2.675")) == Decimal("2.68")


@pytest.mark.parametrize(
    "value,expected",
    [(Decimal("6"), "6%"), (Decimal("12.5"), "12.5%"), (Decimal("0"), "0%"), (Decimal("33.3333"), "33.3%")],
)
def test_format_percentage(value, expected):
    assert currency.format_percentage(value) == expected


@pytest.mark.parametrize(
    "percentage,expected",
    [
        (Decimal("100"), "Full"),
        (Decimal("50"), "1/2"),
        (Decimal("100") / 3, "1/3"),
        (Decimal("33.34"), "1/3"),
        (Decimal("25"), "1/4"),
        (Decimal("20"), "1/5"),
        (Decimal("40"), "40%"),
        (Decimal("100") / 6, "16.7%"),
    ],
)
def test_split_label_for_derived_splits(percentage, expected):
    assert currency.split_label(Decimal("1"), percentage, False) == expected


def test_split_label_for_manual_amount():
    assert currency.split_label(Decimal("7.5"), Decimal("75"), True) == "7.50"
