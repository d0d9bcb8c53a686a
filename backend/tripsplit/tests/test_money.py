"""
Tests for money helpers.
"""
import pytest
from decimal import Decimal
from tripsplit.core.exceptions import ValidationError
from tripsplit.core.money import (
    floor_to_cent, format_amount, is_settled, quantize, to_decimal
)


def test_to_decimal_parses_strings_and_floats():
    assert to_decimal("12.34") == Decimal("12.34")
    assert to_decimal(" 7 ") == Decimal("7")
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(5) == Decimal("5")


def test_to_decimal_treats_missing_as_zero():
    assert to_decimal(None) == Decimal("0")
    assert to_decimal("") == Decimal("0")


@pytest.mark.parametrize("value", ["abc", "NaN", "Infinity", float("inf"), True, [1]])
def test_to_decimal_rejects_bad_values(value):
    with pytest.raises(ValidationError):
        to_decimal(value)


def test_quantize_rounds_half_up():
    assert quantize("2.675") == Decimal("2.68")
    assert quantize("-2.675") == Decimal("-2.68")
    assert quantize(1) == Decimal("1.00")


def test_floor_to_cent_truncates_toward_zero():
    assert floor_to_cent("33.339") == Decimal("33.33")
    assert floor_to_cent("-33.339") == Decimal("-33.33")


def test_format_amount():
    assert format_amount(Decimal("12.3")) == "12.30"
    assert format_amount(0) == "0.00"
    assert format_amount("-5.005") == "-5.01"


def test_is_settled_is_inclusive():
    tolerance = Decimal("0.01")
    assert is_settled(Decimal("0.01"), tolerance)
    assert is_settled(Decimal("-0.01"), tolerance)
    assert not is_settled(Decimal("0.02"), tolerance)


@pytest.mark.parametrize("value", [Decimal("1e30"), "-1e30", 1e30])
def test_amount_too_large_for_cents_rejected(value):
    with pytest.raises(ValidationError):
        quantize(value)
    with pytest.raises(ValidationError):
        floor_to_cent(value)
