from __future__ import annotations

from decimal import Decimal

import pytest

from fixed_money.monetary.currency_registry import BHD, EUR, JPY, USD
from fixed_money.monetary.errors import CurrencyMismatchError, MoneyFormatError, PrecisionLossError, RoundingNecessaryError
from fixed_money.monetary.money import Money
from fixed_money.monetary.rounding_mode import RoundingMode
from tests.helpers.helper_money import usd


def test_of_keeps_scale_of_amount():
    money = Money.of(USD, Decimal("25.951"))
    assert money.scale == 3
    assert not money.is_currency_scale
    assert str(money) == "USD 25.951"
    assert repr(money) == "Money('USD 25.951')"


def test_of_widens_positive_exponent_to_scale_zero():
    money = Money.of(USD, Decimal("1E+2"))
    assert money.scale == 0
    assert str(money) == "USD 100"


def test_negative_zero_is_normalized():
    assert str(Money.of(USD, Decimal("-0.00"))) == "USD 0.00"
    assert str(Money.of(USD, Decimal("0.01")).minus(Decimal("0.01"))) == "USD 0.00"


def test_of_scale_and_unscaled_value():
    money = Money.of_scale(USD, 2595, 3)
    assert money.amount == Decimal("2.595")
    assert money.unscaled_value == 2595
    assert Money.of_scale(USD, -5, 0).unscaled_value == -5


def test_of_major_and_minor():
    assert str(Money.of_major(USD, 25)) == "USD 25"
    assert str(Money.of_minor(USD, 2595)) == "USD 25.95"
    assert Money.of_minor(BHD, 1).scale == 3


def test_zero():
    assert str(Money.zero(USD)) == "USD 0.00"
    assert str(Money.zero(USD, 4)) == "USD 0.0000"


def test_parse_keeps_scale():
    assert Money.parse("USD 25.951").amount == Decimal("25.951")
    assert Money.parse("JPY 25.5").scale == 1
    with pytest.raises(MoneyFormatError):
        Money.parse("USD25")


def test_with_scale():
    money = Money.of(USD, Decimal("25.951"))
    assert money.with_scale(3) is money
    assert money.with_scale(5).amount.as_tuple().exponent == -5
    assert str(money.with_scale(2, RoundingMode.HALF_UP)) == "USD 25.95"
    with pytest.raises(PrecisionLossError):
        money.with_scale(2)
    with pytest.raises(RoundingNecessaryError):
        money.with_scale(2, RoundingMode.UNNECESSARY)


def test_with_currency_scale():
    assert str(Money.of(USD, Decimal("25.9")).with_currency_scale()) == "USD 25.90"
    assert str(Money.of(JPY, Decimal("25.5")).with_currency_scale(RoundingMode.HALF_EVEN)) == "JPY 26"


def test_arithmetic_is_exact():
    money = Money.of(USD, Decimal("2.50"))
    assert money.plus(Decimal("0.001")).amount == Decimal("2.501")
    assert money.plus(Money.of(USD, Decimal("0.0001"))).scale == 4
    assert money.multiplied_by(Decimal("1.5")).amount == Decimal("3.750")
    assert money.multiplied_by(Decimal("1.5")).scale == 3
    assert (money * 2).amount == Decimal("5.00")
    assert money.plus_major(1).amount == Decimal("3.50")
    assert money.minus_minor(1).amount == Decimal("2.49")


def test_plus_other_currency_raises():
    with pytest.raises(CurrencyMismatchError):
        Money.of(USD, 1).plus(Money.of(EUR, 1))


def test_divided_by_keeps_scale():
    assert Money.of(USD, Decimal("10.000")).divided_by(3, RoundingMode.HALF_UP).amount == Decimal("3.333")
    with pytest.raises(ZeroDivisionError):
        Money.of(USD, 1).divided_by(0, RoundingMode.HALF_UP)


def test_rounded_keeps_scale():
    rounded = Money.of(USD, Decimal("45.2345")).rounded(2, RoundingMode.HALF_UP)
    assert rounded.amount == Decimal("45.2300")
    assert rounded.scale == 4


def test_converted_to_is_exact():
    converted = Money.of(USD, Decimal("10.00")).converted_to(JPY, Decimal("151.237"))
    assert converted.currency == JPY
    assert converted.amount == Decimal("1512.37000")
    with pytest.raises(ValueError):
        Money.of(USD, 1).converted_to(USD, 1)
    with pytest.raises(ValueError):
        Money.of(USD, 1).converted_to(EUR, -1)


def test_equality_includes_scale():
    assert Money.of(USD, Decimal("1.0")) != Money.of(USD, Decimal("1.00"))
    assert Money.of(USD, Decimal("1.0")).is_equal(Money.of(USD, Decimal("1.00")))
    assert Money.of(USD, Decimal("1.00")) == Money.of_minor(USD, 100)
    assert hash(Money.of(USD, Decimal("1.00"))) == hash(Money.of_minor(USD, 100))


def test_compare_with_fixed_scale_money():
    assert Money.of(USD, Decimal("1.005")) > usd("1.00")
    assert Money.of(USD, Decimal("1.0")).is_equal(usd("1.00"))


def test_from_provider():
    money = usd("1.00")
    assert Money.from_provider(money) is money.to_money()

    class BadProvider:
        def to_money(self):
            return "USD 1.00"

    with pytest.raises(TypeError):
        Money.from_provider(BadProvider())
