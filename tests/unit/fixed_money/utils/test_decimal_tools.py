from __future__ import annotations

from decimal import Decimal

import pytest

from fixed_money.monetary.errors import MoneyOverflowError, PrecisionLossError, RoundingNecessaryError
from fixed_money.monetary.rounding_mode import RoundingMode
from fixed_money.utils.decimal_tools import (
    as_decimal,
    check_int,
    divide_to_scale,
    exact_arithmetic,
    from_unscaled,
    normalize_zero,
    rescale,
    scale_of,
    unscaled_of,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("1.50"), Decimal("1.50")),
        (3, Decimal("3")),
        ("2.555", Decimal("2.555")),
        (0.1, Decimal("0.1")),
    ],
)
def test_as_decimal(value, expected):
    result = as_decimal(value)
    assert result == expected
    assert scale_of(result) == scale_of(expected)


@pytest.mark.parametrize("value", [None, True, [1], object()])
def test_as_decimal_rejects_unsupported_types(value):
    with pytest.raises(TypeError):
        as_decimal(value)


@pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("Infinity"), float("inf"), "-Infinity"])
def test_as_decimal_rejects_non_finite(value):
    with pytest.raises(ValueError):
        as_decimal(value)


def test_scale_and_unscaled_helpers():
    assert scale_of(Decimal("25.95")) == 2
    assert scale_of(Decimal("1E+3")) == -3
    assert unscaled_of(Decimal("-25.95")) == -2595
    assert from_unscaled(-2595, 2) == Decimal("-25.95")
    assert scale_of(from_unscaled(0, 3)) == 3
    assert str(normalize_zero(Decimal("-0.00"))) == "0.00"


def test_rescale_widening_is_exact():
    assert str(rescale(Decimal("1.5"), 3, None, "test")) == "1.500"


def test_rescale_narrowing():
    assert rescale(Decimal("1.555"), 2, RoundingMode.HALF_EVEN, "test") == Decimal("1.56")
    assert rescale(Decimal("1.500"), 2, None, "test") == Decimal("1.50")
    with pytest.raises(PrecisionLossError):
        rescale(Decimal("1.555"), 2, None, "test")
    with pytest.raises(RoundingNecessaryError):
        rescale(Decimal("1.555"), 2, RoundingMode.UNNECESSARY, "test")


def test_rescale_never_returns_negative_zero():
    assert str(rescale(Decimal("-0.001"), 2, RoundingMode.HALF_UP, "test")) == "0.00"


def test_precision_loss_is_a_rounding_necessary_error():
    with pytest.raises(RoundingNecessaryError):
        rescale(Decimal("1.555"), 2, None, "test")


@pytest.mark.parametrize(
    "dividend, divisor, scale, rounding_mode, expected",
    [
        ("1", "3", 2, RoundingMode.HALF_UP, "0.33"),
        ("2", "3", 2, RoundingMode.DOWN, "0.66"),
        ("-2", "3", 0, RoundingMode.FLOOR, "-1"),
        ("1", "8", 3, RoundingMode.UNNECESSARY, "0.125"),
        ("12345", "10", -2, RoundingMode.HALF_EVEN, "1.2E+3"),
        ("0.00", "7", 2, RoundingMode.UNNECESSARY, "0.00"),
    ],
)
def test_divide_to_scale(dividend, divisor, scale, rounding_mode, expected):
    assert divide_to_scale(Decimal(dividend), Decimal(divisor), scale, rounding_mode, "test") == Decimal(expected)


def test_divide_to_scale_rounds_once():
    # Just above half a cent, so HALF_DOWN still rounds up
    assert divide_to_scale(Decimal("0.125000001"), Decimal("1"), 2, RoundingMode.HALF_DOWN, "test") == Decimal("0.13")
    assert divide_to_scale(Decimal("0.125"), Decimal("1"), 2, RoundingMode.HALF_DOWN, "test") == Decimal("0.12")


def test_divide_to_scale_errors():
    with pytest.raises(ZeroDivisionError):
        divide_to_scale(Decimal("1"), Decimal("0"), 2, RoundingMode.HALF_UP, "test")
    with pytest.raises(RoundingNecessaryError):
        divide_to_scale(Decimal("1"), Decimal("3"), 2, RoundingMode.UNNECESSARY, "test")


def test_exact_arithmetic_translates_inexact_results():
    with pytest.raises(MoneyOverflowError):
        with exact_arithmetic("test"):
            Decimal(10) ** 200 + Decimal("0.1")


def test_check_int():
    assert check_int(5, "value", "test") == 5
    with pytest.raises(TypeError):
        check_int(True, "value", "test")
    with pytest.raises(TypeError):
        check_int(Decimal("5"), "value", "test")
