import pytest

from harvest.formatters import (
    format_currency, format_large_number, format_percentage, format_with_sign,
)


@pytest.mark.parametrize("amount, expected", [
    (0, "₹0.00"),
    (999.5, "₹999.50"),
    (1_000, "₹1,000.00"),
    (125_000, "₹1,25,000.00"),
    (1_234_567.891, "₹12,34,567.89"),
    (123_456_789, "₹12,34,56,789.00"),
    (-88_000, "-₹88,000.00"),
    (-0.001, "₹0.00"),
])
def test_format_currency_uses_indian_grouping(amount, expected):
    assert format_currency(amount) == expected


def test_format_currency_without_decimals():
    assert format_currency(125_000, show_decimals=False) == "₹1,25,000"
    assert format_currency(1_499.6, show_decimals=False) == "₹1,500"


@pytest.mark.parametrize("amount, expected", [
    (25_000_000, "₹2.50Cr"),
    (1_234_567, "₹12.35L"),
    (4_500, "₹4.5K"),
    (750, "₹750"),
])
def test_format_large_number(amount, expected):
    assert format_large_number(amount) == expected


def test_format_with_sign_and_percentage():
    assert format_with_sign(5_000) == "+₹5,000.00"
    assert format_with_sign(-5_000) == "-₹5,000.00"
    assert format_with_sign(0) == "₹0.00"
    assert format_percentage(12.346) == "12.35%"
    assert format_percentage(-3, decimals=0) == "-3%"
