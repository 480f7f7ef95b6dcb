from __future__ import annotations

from decimal import Decimal

from fixed_money.monetary.currency import Currency
from fixed_money.monetary.errors import CurrencyMismatchError, MoneyFormatError, MoneyOverflowError
from fixed_money.monetary.money_provider import MoneyProvider
from fixed_money.monetary.rounding_mode import RoundingMode, check_rounding_mode
from fixed_money.utils.decimal_tools import (
    DecimalLike,
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

INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1
INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1


class Money:
    """Monetary amount whose scale is free to differ from the currency's decimal places.

    All arithmetic is exact: sums and products keep every digit, and only `with_scale`,
    `with_currency_scale`, `rounded` and `divided_by` discard digits, always under an explicit
    `RoundingMode`. Results needing more significant digits than the configured precision raise
    `MoneyOverflowError`.

    Instances are immutable. Operations return `self` when they would not change anything.

    Amounts given with a positive exponent (e.g. `Decimal("1E+3")`) are widened to scale 0.

    Examples:
        >>> str(Money.of(USD, "25.951"))
        'USD 25.951'
        >>> str(Money.of(USD, "25.951").with_currency_scale(RoundingMode.HALF_UP))
        'USD 25.95'
    """

    __slots__ = ("_currency", "_amount")

    def __init__(self, currency: Currency, amount: DecimalLike):
        """Initialize Money with currency and amount.

        Args:
            currency: Currency of the amount.
            amount: Decimal-like amount, kept at its own scale.

        Raises:
            TypeError: If $currency is not a Currency or $amount has an unsupported type.
            ValueError: If $amount is not finite.
        """
        # Raise: $currency must be an instance of Currency
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency!r}")

        decimal_amount = as_decimal(amount)
        if scale_of(decimal_amount) < 0:
            decimal_amount = rescale(decimal_amount, 0, None, "Money.__init__")

        self._currency = currency
        self._amount = normalize_zero(decimal_amount)

    # region Factories

    @classmethod
    def of(cls, currency: Currency, amount: DecimalLike) -> Money:
        """Create Money holding $amount exactly, at the amount's own scale."""
        return cls(currency, amount)

    @classmethod
    def of_scale(cls, currency: Currency, unscaled: int, scale: int) -> Money:
        """Create Money from an unscaled integer and a scale, e.g. (2595, 2) for 25.95."""
        check_int(unscaled, "unscaled", "Money.of_scale")
        check_int(scale, "scale", "Money.of_scale")
        return cls(currency, from_unscaled(unscaled, scale))

    @classmethod
    def of_major(cls, currency: Currency, amount_major: int) -> Money:
        """Create Money from whole major units (e.g. dollars), at scale 0."""
        check_int(amount_major, "amount_major", "Money.of_major")
        return cls(currency, Decimal(amount_major))

    @classmethod
    def of_minor(cls, currency: Currency, amount_minor: int) -> Money:
        """Create Money from a count of minor units (e.g. cents), at the currency's scale."""
        check_int(amount_minor, "amount_minor", "Money.of_minor")
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency!r}")
        return cls(currency, from_unscaled(amount_minor, currency.decimal_places))

    @classmethod
    def zero(cls, currency: Currency, scale: int | None = None) -> Money:
        """Create a zero amount at $scale, or at the currency's scale when $scale is None."""
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency!r}")
        return cls(currency, from_unscaled(0, currency.decimal_places if scale is None else check_int(scale, "scale", "Money.zero")))

    @classmethod
    def from_provider(cls, provider: MoneyProvider) -> Money:
        """Get the Money behind any `MoneyProvider`.

        Raises:
            TypeError: If $provider is not a MoneyProvider or returns something other than Money.
        """
        if not isinstance(provider, MoneyProvider):
            raise TypeError(f"$provider must be a MoneyProvider, but provided value is: {provider!r}")

        money = provider.to_money()
        if not isinstance(money, Money):
            raise TypeError(f"Cannot call `Money.from_provider` because `to_money` of {type(provider).__name__} returned {money!r}")
        return money

    @classmethod
    def parse(cls, text: str) -> Money:
        """Parse Money from text like 'USD 25.951'. The amount keeps its scale.

        Raises:
            MoneyFormatError: If $text is not in format '<code> <amount>'.
            UnknownCurrencyError: If the code is not registered.
            decimal.InvalidOperation: If the amount cannot be parsed as a decimal.
        """
        currency, amount = parse_money_text(text, "Money.parse")
        return cls(currency, amount)

    # endregion

    # region Accessors

    @property
    def currency(self) -> Currency:
        """Get the currency."""
        return self._currency

    @property
    def amount(self) -> Decimal:
        """Get the decimal amount."""
        return self._amount

    @property
    def scale(self) -> int:
        """Get the number of decimal places of the amount."""
        return scale_of(self._amount)

    @property
    def unscaled_value(self) -> int:
        """Get the amount without its decimal point, e.g. 2595 for 25.95."""
        return unscaled_of(self._amount)

    @property
    def is_currency_scale(self) -> bool:
        """Check if the scale equals the currency's decimal places."""
        return self.scale == self._currency.decimal_places

    @property
    def amount_major(self) -> Decimal:
        """Get the whole major units, truncated toward zero (scale 0)."""
        return rescale(self._amount, 0, RoundingMode.DOWN, "Money.amount_major")

    @property
    def amount_minor(self) -> Decimal:
        """Get the amount in minor units, truncated toward zero (scale 0)."""
        return Decimal(self._amount_minor_int())

    @property
    def minor_part(self) -> int:
        """Get the minor units beyond the whole major units, signed like the amount.

        Example: -1.345 BHD has minor part -345.
        """
        major = unscaled_of(self.amount_major)
        return self._amount_minor_int() - major * 10**self._currency.decimal_places

    def amount_major_int64(self) -> int:
        return _check_range(unscaled_of(self.amount_major), INT64_MIN, INT64_MAX, "amount_major_int64")

    def amount_major_int32(self) -> int:
        return _check_range(unscaled_of(self.amount_major), INT32_MIN, INT32_MAX, "amount_major_int32")

    def amount_minor_int64(self) -> int:
        return _check_range(self._amount_minor_int(), INT64_MIN, INT64_MAX, "amount_minor_int64")

    def amount_minor_int32(self) -> int:
        return _check_range(self._amount_minor_int(), INT32_MIN, INT32_MAX, "amount_minor_int32")

    def _amount_minor_int(self) -> int:
        truncated = rescale(self._amount, self._currency.decimal_places, RoundingMode.DOWN, "Money.amount_minor")
        return unscaled_of(truncated)

    def to_money(self) -> Money:
        return self

    # endregion

    # region Sign

    def is_zero(self) -> bool:
        return self._amount.is_zero()

    def is_positive(self) -> bool:
        return self._amount > 0

    def is_positive_or_zero(self) -> bool:
        return self._amount >= 0

    def is_negative(self) -> bool:
        return self._amount < 0

    def is_negative_or_zero(self) -> bool:
        return self._amount <= 0

    # endregion

    # region Scale and identity changes

    def with_scale(self, scale: int, rounding_mode: RoundingMode | None = None) -> Money:
        """Return a copy with the amount at $scale.

        Args:
            scale: Target scale.
            rounding_mode: How to discard digits when narrowing; None requires exactness.

        Raises:
            PrecisionLossError: If $rounding_mode is None and non-zero digits would be discarded.
            RoundingNecessaryError: If $rounding_mode is `UNNECESSARY` and non-zero digits would be discarded.
        """
        check_int(scale, "scale", "Money.with_scale")
        check_rounding_mode(rounding_mode, "Money.with_scale", optional=True)
        if scale == self.scale:
            return self
        return Money(self._currency, rescale(self._amount, scale, rounding_mode, "Money.with_scale"))

    def with_currency_scale(self, rounding_mode: RoundingMode | None = None) -> Money:
        """Return a copy with the amount at the currency's decimal places. See `with_scale`."""
        check_rounding_mode(rounding_mode, "Money.with_currency_scale", optional=True)
        if self.is_currency_scale:
            return self
        return Money(self._currency, rescale(self._amount, self._currency.decimal_places, rounding_mode, "Money.with_currency_scale"))

    def with_amount(self, amount: DecimalLike) -> Money:
        """Return a copy with the same currency and a different amount."""
        new_amount = as_decimal(amount)
        if new_amount == self._amount and scale_of(new_amount) == self.scale:
            return self
        return Money(self._currency, new_amount)

    def with_currency(self, currency: Currency) -> Money:
        """Return a copy with the same amount relabeled to $currency. No conversion takes place."""
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency!r}")
        if currency == self._currency:
            return self
        return Money(currency, self._amount)

    # endregion

    # region Arithmetic

    def plus(self, other: MoneyProvider | DecimalLike) -> Money:
        """Add a monetary value of the same currency, or a plain amount. Always exact.

        Raises:
            CurrencyMismatchError: If $other is a MoneyProvider in a different currency.
        """
        amount = self._amount_of(other, "Money.plus")
        if amount.is_zero():
            return self
        with exact_arithmetic("Money.plus"):
            return Money(self._currency, self._amount + amount)

    def minus(self, other: MoneyProvider | DecimalLike) -> Money:
        """Subtract a monetary value of the same currency, or a plain amount. Always exact."""
        amount = self._amount_of(other, "Money.minus")
        if amount.is_zero():
            return self
        with exact_arithmetic("Money.minus"):
            return Money(self._currency, self._amount - amount)

    def plus_major(self, amount_major: int) -> Money:
        check_int(amount_major, "amount_major", "Money.plus_major")
        return self.plus(Decimal(amount_major))

    def minus_major(self, amount_major: int) -> Money:
        check_int(amount_major, "amount_major", "Money.minus_major")
        return self.minus(Decimal(amount_major))

    def plus_minor(self, amount_minor: int) -> Money:
        check_int(amount_minor, "amount_minor", "Money.plus_minor")
        return self.plus(from_unscaled(amount_minor, self._currency.decimal_places))

    def minus_minor(self, amount_minor: int) -> Money:
        check_int(amount_minor, "amount_minor", "Money.minus_minor")
        return self.minus(from_unscaled(amount_minor, self._currency.decimal_places))

    def multiplied_by(self, value: DecimalLike) -> Money:
        """Multiply exactly. The result scale is the sum of both scales."""
        multiplier = as_decimal(value)
        if multiplier == 1 and scale_of(multiplier) <= 0:
            return self
        with exact_arithmetic("Money.multiplied_by"):
            return Money(self._currency, self._amount * multiplier)

    def divided_by(self, value: DecimalLike, rounding_mode: RoundingMode) -> Money:
        """Divide, keeping the current scale and rounding the quotient with $rounding_mode.

        Raises:
            ZeroDivisionError: If $value is zero.
            RoundingNecessaryError: If $rounding_mode is `UNNECESSARY` and the quotient is inexact.
        """
        divisor = as_decimal(value)
        check_rounding_mode(rounding_mode, "Money.divided_by")
        if divisor == 1 and not divisor.is_zero():
            return self
        return Money(self._currency, divide_to_scale(self._amount, divisor, self.scale, rounding_mode, "Money.divided_by"))

    def negated(self) -> Money:
        if self.is_zero():
            return self
        return Money(self._currency, self._amount.copy_negate())

    def abs(self) -> Money:
        return self.negated() if self.is_negative() else self

    def rounded(self, scale: int, rounding_mode: RoundingMode) -> Money:
        """Round to $scale digits while keeping the current scale.

        Digits below $scale become zero. $scale may be negative (-1 rounds to tens). Has no effect
        when $scale is not below the current scale.

        Example: EUR 45.23 rounded to -1 with HALF_UP is EUR 50.00.
        """
        check_int(scale, "scale", "Money.rounded")
        check_rounding_mode(rounding_mode, "Money.rounded")
        if scale >= self.scale:
            return self
        rounded_amount = rescale(self._amount, scale, rounding_mode, "Money.rounded")
        return self.with_amount(rescale(rounded_amount, self.scale, None, "Money.rounded"))

    def converted_to(self, currency: Currency, multiplier: DecimalLike) -> Money:
        """Convert to $currency by multiplying exactly with $multiplier. The result is not rescaled.

        Raises:
            ValueError: If $currency is the current currency or $multiplier is negative.
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency!r}")

        # Raise: converting to the same currency is a usage error, not a conversion
        if currency == self._currency:
            raise ValueError(f"Cannot call `converted_to` because $currency ({currency}) is the same as the current currency")

        rate = as_decimal(multiplier)
        # Raise: a conversion rate below zero has no meaning
        if rate < 0:
            raise ValueError(f"Cannot call `converted_to` because $multiplier ({rate}) is negative")

        with exact_arithmetic("Money.converted_to"):
            return Money(currency, self._amount * rate)

    def _amount_of(self, other: MoneyProvider | DecimalLike, operation: str) -> Decimal:
        if isinstance(other, MoneyProvider):
            money = Money.from_provider(other)
            self._check_same_currency(money, operation)
            return money.amount
        return as_decimal(other)

    # endregion

    # region Comparison

    def is_same_currency(self, other: MoneyProvider) -> bool:
        return Money.from_provider(other).currency == self._currency

    def _check_same_currency(self, other: Money, operation: str) -> None:
        """Raise `CurrencyMismatchError` unless $other has the same currency."""
        if other.currency != self._currency:
            raise CurrencyMismatchError(f"Cannot call `{operation}` because currencies differ: {self._currency} and {other.currency}")

    def compare_to(self, other: MoneyProvider) -> int:
        """Compare numeric values, ignoring scale.

        Returns:
            int: -1, 0 or 1.

        Raises:
            CurrencyMismatchError: If $other has a different currency.
        """
        money = Money.from_provider(other)
        self._check_same_currency(money, "compare_to")
        return int(self._amount.compare(money.amount))

    def is_equal(self, other: MoneyProvider) -> bool:
        """Check numeric equality, ignoring scale (USD 1.0 equals USD 1.00)."""
        return self.compare_to(other) == 0

    def is_greater_than(self, other: MoneyProvider) -> bool:
        return self.compare_to(other) > 0

    def is_greater_than_or_equal(self, other: MoneyProvider) -> bool:
        return self.compare_to(other) >= 0

    def is_less_than(self, other: MoneyProvider) -> bool:
        return self.compare_to(other) < 0

    def is_less_than_or_equal(self, other: MoneyProvider) -> bool:
        return self.compare_to(other) <= 0

    # endregion

    # region Operators

    def __eq__(self, other) -> bool:
        """Structural equality: same currency, same amount and same scale."""
        if self is other:
            return True
        if not isinstance(other, Money):
            return False
        return self._currency == other._currency and self._amount == other._amount and self.scale == other.scale

    def __hash__(self) -> int:
        return hash((self._currency.code, self._amount, self.scale))

    def __lt__(self, other) -> bool:
        if not isinstance(other, MoneyProvider):
            return NotImplemented
        return self.is_less_than(other)

    def __le__(self, other) -> bool:
        if not isinstance(other, MoneyProvider):
            return NotImplemented
        return self.is_less_than_or_equal(other)

    def __gt__(self, other) -> bool:
        if not isinstance(other, MoneyProvider):
            return NotImplemented
        return self.is_greater_than(other)

    def __ge__(self, other) -> bool:
        if not isinstance(other, MoneyProvider):
            return NotImplemented
        return self.is_greater_than_or_equal(other)

    def __add__(self, other):
        if not isinstance(other, MoneyProvider):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other):
        if not isinstance(other, MoneyProvider):
            return NotImplemented
        return self.minus(other)

    def __mul__(self, other):
        if isinstance(other, MoneyProvider) or isinstance(other, bool) or not isinstance(other, (Decimal, int, float, str)):
            return NotImplemented
        return self.multiplied_by(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self) -> Money:
        return self.negated()

    def __abs__(self) -> Money:
        return self.abs()

    # endregion

    def __str__(self) -> str:
        """Return text like 'USD 25.951'. The amount is written out in plain digits."""
        return f"{self._currency.code} {self._amount:f}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self}')"


def parse_money_text(text: str, operation: str) -> tuple[Currency, Decimal]:
    """Split text in format '<3-letter code><one space><amount>' into currency and amount.

    The shape is checked before any currency lookup. No surrounding whitespace is tolerated.

    Args:
        text: Text to parse, e.g. 'USD 25.95'.
        operation: Name of the calling operation, used in error messages.

    Returns:
        tuple[Currency, Decimal]: The currency and the amount at the scale it was written with.

    Raises:
        TypeError: If $text is not a string.
        MoneyFormatError: If $text does not have the required shape.
        UnknownCurrencyError: If the code is not registered.
        decimal.InvalidOperation: If the amount cannot be parsed as a decimal.
        ValueError: If the amount is NaN or infinite.
    """
    if not isinstance(text, str):
        raise TypeError(f"$text must be a string, but provided value is: {text!r}")

    # Raise: 3-letter code, one space, at least one amount character
    if len(text) < 5 or text[3] != " ":
        raise MoneyFormatError(f"Cannot call `{operation}` because $text ('{text}') is not in format '<code> <amount>'")

    amount_text = text[4:]
    # Raise: `Decimal` itself tolerates surrounding whitespace and underscores, the text form does not
    if any(char.isspace() or char == "_" for char in amount_text):
        raise MoneyFormatError(f"Cannot call `{operation}` because amount '{amount_text}' in $text ('{text}') contains whitespace or underscores")

    currency = Currency.of(text[:3])
    return currency, as_decimal(amount_text)


def _check_range(value: int, minimum: int, maximum: int, operation: str) -> int:
    # Raise: narrowing never wraps around
    if not minimum <= value <= maximum:
        raise MoneyOverflowError(f"Cannot call `{operation}` because {value} is outside [{minimum}, {maximum}]")
    return value
