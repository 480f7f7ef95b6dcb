from __future__ import annotations

from decimal import Decimal

from fixed_money.monetary.currency import Currency
from fixed_money.monetary.errors import PrecisionLossError
from fixed_money.monetary.money import Money, parse_money_text
from fixed_money.monetary.money_provider import MoneyProvider
from fixed_money.monetary.rounding_mode import RoundingMode, check_rounding_mode
from fixed_money.utils.decimal_tools import DecimalLike, as_decimal, check_int, scale_of

# Only the factories below hold this key, which keeps `FixedScaleMoney(...)` unreachable from outside
_FACTORY_KEY = object()


class FixedScaleMoney:
    """Monetary amount whose scale always equals its currency's decimal places.

    USD amounts always have 2 decimal places, JPY amounts 0, BHD amounts 3. Every operation
    computes its exact result with the variable-scale `Money` and then forces it back to the
    currency scale:

    - without a rounding mode, the operation fails with `PrecisionLossError` if that would
      discard non-zero digits;
    - with a `RoundingMode`, the digits are discarded as the mode says (and `UNNECESSARY`
      fails with `RoundingNecessaryError` instead).

    Instances are immutable and created only through the classmethod factories (`of`, `of_major`,
    `of_minor`, `zero`, `from_provider`, `parse`). Operations return `self` when they would not
    change anything.

    The text form is '<code> <amount>', e.g. 'USD 25.00', 'JPY 25', 'BHD -1.345'. `parse` and
    `str` are exact inverses.
    """

    __slots__ = ("_money",)

    def __init__(self, money: Money, _key: object = None):
        """Internal. Use the classmethod factories.

        Raises:
            TypeError: If called without going through a factory.
        """
        if _key is not _FACTORY_KEY:
            raise TypeError(f"Cannot call `{self.__class__.__name__}.__init__` directly; use `of`, `of_major`, `of_minor`, `zero`, `from_provider` or `parse`")
        assert isinstance(money, Money), "money must be Money"
        assert money.is_currency_scale, f"scale of {money} must equal the currency scale"
        self._money = money

    @classmethod
    def _create(cls, money: Money) -> FixedScaleMoney:
        return cls(money, _FACTORY_KEY)

    def _with(self, money: Money) -> FixedScaleMoney:
        """Wrap $money unless it is the value already held."""
        if money is self._money:
            return self
        return self._create(money)

    def _with_restored_scale(self, money: Money, rounding_mode: RoundingMode | None, operation: str) -> FixedScaleMoney:
        check_rounding_mode(rounding_mode, operation, optional=True)
        return self._with(money.with_currency_scale(rounding_mode))

    # region Factories

    @classmethod
    def of(cls, currency: Currency, amount: DecimalLike, rounding_mode: RoundingMode | None = None) -> FixedScaleMoney:
        """Create an amount in $currency.

        Args:
            currency: Currency of the amount.
            amount: Decimal-like amount. Floats are read through `str`, so `0.1` is exactly 0.1.
            rounding_mode: How to reduce an amount with more decimal places than the currency has.
                With None, such an amount is rejected.

        Returns:
            FixedScaleMoney: The amount padded or rounded to the currency scale.

        Raises:
            TypeError: If $currency is not a Currency.
            PrecisionLossError: If $rounding_mode is None and the scale of $amount exceeds the currency scale.
            RoundingNecessaryError: If $rounding_mode is `UNNECESSARY` and rounding would be needed.

        Examples:
            >>> str(FixedScaleMoney.of(USD, "25.9"))
            'USD 25.90'
            >>> str(FixedScaleMoney.of(JPY, "25.5", RoundingMode.HALF_EVEN))
            'JPY 26'
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency!r}")
        check_rounding_mode(rounding_mode, "FixedScaleMoney.of", optional=True)

        decimal_amount = as_decimal(amount)
        # Raise: without a rounding mode the amount must already fit the currency scale
        if rounding_mode is None and scale_of(decimal_amount) > currency.decimal_places:
            raise PrecisionLossError(
                f"Cannot call `FixedScaleMoney.of` because scale of $amount ({decimal_amount}) is greater than the scale of the currency {currency} ({currency.decimal_places}); pass a $rounding_mode to round"
            )
        return cls._create(Money.of(currency, decimal_amount).with_currency_scale(rounding_mode or RoundingMode.UNNECESSARY))

    @classmethod
    def of_major(cls, currency: Currency, amount_major: int) -> FixedScaleMoney:
        """Create from whole major units, e.g. `of_major(USD, 25)` is 'USD 25.00'."""
        return cls._create(Money.of_major(currency, amount_major).with_currency_scale(RoundingMode.UNNECESSARY))

    @classmethod
    def of_minor(cls, currency: Currency, amount_minor: int) -> FixedScaleMoney:
        """Create from minor units, e.g. `of_minor(USD, 2595)` is 'USD 25.95'."""
        return cls._create(Money.of_minor(currency, amount_minor))

    @classmethod
    def zero(cls, currency: Currency) -> FixedScaleMoney:
        return cls._create(Money.zero(currency))

    @classmethod
    def from_provider(cls, provider: MoneyProvider, rounding_mode: RoundingMode | None = None) -> FixedScaleMoney:
        """Create from any `MoneyProvider`, rounding to the currency scale with $rounding_mode if needed.

        Raises:
            TypeError: If $provider is not a MoneyProvider.
            PrecisionLossError: If $rounding_mode is None and rounding would be needed.
        """
        if isinstance(provider, FixedScaleMoney):
            return provider
        check_rounding_mode(rounding_mode, "FixedScaleMoney.from_provider", optional=True)
        return cls._create(Money.from_provider(provider).with_currency_scale(rounding_mode))

    @classmethod
    def parse(cls, text: str) -> FixedScaleMoney:
        """Parse text in format '<code> <amount>', e.g. 'USD 25.95'.

        The code must be exactly three letters followed by exactly one space. No other whitespace,
        separators or symbols are accepted.

        Raises:
            MoneyFormatError: If $text does not have the required shape.
            UnknownCurrencyError: If the code is not registered.
            decimal.InvalidOperation: If the amount cannot be parsed as a decimal.
            PrecisionLossError: If the amount has more decimal places than the currency.
        """
        currency, amount = parse_money_text(text, "FixedScaleMoney.parse")
        return cls.of(currency, amount)

    # endregion

    # region Accessors

    @property
    def currency(self) -> Currency:
        """Get the currency."""
        return self._money.currency

    @property
    def amount(self) -> Decimal:
        """Get the amount, always at the currency scale."""
        return self._money.amount

    @property
    def scale(self) -> int:
        """Get the scale, always the currency's decimal places."""
        return self._money.scale

    @property
    def amount_major(self) -> Decimal:
        """Get the whole major units, truncated toward zero. BHD -1.345 gives -1."""
        return self._money.amount_major

    @property
    def amount_minor(self) -> Decimal:
        """Get the amount in minor units. BHD -1.345 gives -1345."""
        return self._money.amount_minor

    @property
    def minor_part(self) -> int:
        """Get the minor units beyond the whole major units. BHD -1.345 gives -345."""
        return self._money.minor_part

    def amount_major_int64(self) -> int:
        """Get the major units as an int within the signed 64-bit range.

        Raises:
            MoneyOverflowError: If the value does not fit.
        """
        return self._money.amount_major_int64()

    def amount_major_int32(self) -> int:
        """Get the major units as an int within the signed 32-bit range.

        Raises:
            MoneyOverflowError: If the value does not fit.
        """
        return self._money.amount_major_int32()

    def amount_minor_int64(self) -> int:
        """Get the minor units as an int within the signed 64-bit range.

        Raises:
            MoneyOverflowError: If the value does not fit.
        """
        return self._money.amount_minor_int64()

    def amount_minor_int32(self) -> int:
        """Get the minor units as an int within the signed 32-bit range.

        Raises:
            MoneyOverflowError: If the value does not fit.
        """
        return self._money.amount_minor_int32()

    def to_money(self) -> Money:
        """Get the same value as a variable-scale `Money`."""
        return self._money

    # endregion

    # region Sign

    def is_zero(self) -> bool:
        return self._money.is_zero()

    def is_positive(self) -> bool:
        return self._money.is_positive()

    def is_positive_or_zero(self) -> bool:
        return self._money.is_positive_or_zero()

    def is_negative(self) -> bool:
        return self._money.is_negative()

    def is_negative_or_zero(self) -> bool:
        return self._money.is_negative_or_zero()

    # endregion

    # region Arithmetic

    def with_amount(self, amount: DecimalLike, rounding_mode: RoundingMode | None = None) -> FixedScaleMoney:
        """Return a copy with the same currency and a different amount, fitted to the currency scale."""
        return self._with_restored_scale(self._money.with_amount(amount), rounding_mode, "FixedScaleMoney.with_amount")

    def with_currency(self, currency: Currency, rounding_mode: RoundingMode | None = None) -> FixedScaleMoney:
        """Relabel the amount to $currency and fit it to that currency's scale.

        This is not a conversion: the numeric value stays the same (up to rounding).
        'USD 25.95' relabeled to JPY needs a rounding mode, while relabeled to BHD it becomes 'BHD 25.950'.

        Raises:
            PrecisionLossError: If $rounding_mode is None and the new scale would discard non-zero digits.
        """
        return self._with_restored_scale(self._money.with_currency(currency), rounding_mode, "FixedScaleMoney.with_currency")

    def plus(self, other: MoneyProvider | DecimalLike, rounding_mode: RoundingMode | None = None) -> FixedScaleMoney:
        """Add a monetary value of the same currency, or a plain amount.

        Adding another `FixedScaleMoney` is always exact. A plain amount, or a variable-scale `Money`,
        with more decimal places than the currency needs $rounding_mode.

        Raises:
            CurrencyMismatchError: If $other is a MoneyProvider in a different currency.
            PrecisionLossError: If $rounding_mode is None and the sum needs rounding.
        """
        return self._with_restored_scale(self._money.plus(other), rounding_mode, "FixedScaleMoney.plus")

    def minus(self, other: MoneyProvider | DecimalLike, rounding_mode: RoundingMode | None = None) -> FixedScaleMoney:
        """Subtract a monetary value of the same currency, or a plain amount. See `plus`."""
        return self._with_restored_scale(self._money.minus(other), rounding_mode, "FixedScaleMoney.minus")

    def plus_major(self, amount_major: int) -> FixedScaleMoney:
        """Add whole major units. 'USD 23.45' plus 138 major units is 'USD 161.45'."""
        return self._with(self._money.plus_major(amount_major))

    def minus_major(self, amount_major: int) -> FixedScaleMoney:
        return self._with(self._money.minus_major(amount_major))

    def plus_minor(self, amount_minor: int) -> FixedScaleMoney:
        """Add minor units. 'USD 23.45' plus 138 minor units is 'USD 24.83'."""
        return self._with(self._money.plus_minor(amount_minor))

    def minus_minor(self, amount_minor: int) -> FixedScaleMoney:
        return self._with(self._money.minus_minor(amount_minor))

    def multiplied_by(self, value: DecimalLike, rounding_mode: RoundingMode | None = None) -> FixedScaleMoney:
        """Multiply by $value and round the product to the currency scale.

        Multiplying by an int is always exact and needs no rounding mode. Any other multiplier
        requires $rounding_mode.

        Raises:
            TypeError: If $value is not an int and $rounding_mode is None.
            RoundingNecessaryError: If $rounding_mode is `UNNECESSARY` and the product needs rounding.
        """
        # Raise: only integer multiplication is exact at the currency scale in general
        if rounding_mode is None and (isinstance(value, bool) or not isinstance(value, int)):
            raise TypeError(f"Cannot call `FixedScaleMoney.multiplied_by` because $rounding_mode is required for non-int $value ({value!r})")
        return self._with_restored_scale(self._money.multiplied_by(value), rounding_mode, "FixedScaleMoney.multiplied_by")

    def divided_by(self, value: DecimalLike, rounding_mode: RoundingMode) -> FixedScaleMoney:
        """Divide by $value, rounding the quotient to the currency scale with $rounding_mode.

        Raises:
            ZeroDivisionError: If $value is zero.
            RoundingNecessaryError: If $rounding_mode is `UNNECESSARY` and the quotient needs rounding.
        """
        return self._with(self._money.divided_by(value, rounding_mode))

    def negated(self) -> FixedScaleMoney:
        return self._with(self._money.negated())

    def abs(self) -> FixedScaleMoney:
        return self.negated() if self.is_negative() else self

    def rounded(self, scale: int, rounding_mode: RoundingMode) -> FixedScaleMoney:
        """Round to $scale decimal places while keeping the currency scale.

        Digits below $scale become zero; $scale may be negative. Has no effect when $scale is not
        below the currency scale.

        Example: 'EUR 45.23' rounded to -1 with HALF_UP is 'EUR 50.00'.
        """
        return self._with(self._money.rounded(scale, rounding_mode))

    def converted_to(self, currency: Currency, multiplier: DecimalLike, rounding_mode: RoundingMode) -> FixedScaleMoney:
        """Convert to $currency at rate $multiplier, rounding to the new currency's scale.

        Raises:
            ValueError: If $currency is the current currency or $multiplier is negative.
            RoundingNecessaryError: If $rounding_mode is `UNNECESSARY` and the result needs rounding.
        """
        check_rounding_mode(rounding_mode, "FixedScaleMoney.converted_to")
        return self._with_restored_scale(self._money.converted_to(currency, multiplier), rounding_mode, "FixedScaleMoney.converted_to")

    # endregion

    # region Comparison

    def is_same_currency(self, other: MoneyProvider) -> bool:
        return self._money.is_same_currency(other)

    def compare_to(self, other: MoneyProvider) -> int:
        """Compare numeric values with any MoneyProvider of the same currency.

        Returns:
            int: -1, 0 or 1.

        Raises:
            CurrencyMismatchError: If $other has a different currency.
        """
        return self._money.compare_to(other)

    def is_equal(self, other: MoneyProvider) -> bool:
        """Check numeric equality, ignoring scale, so it also works against variable-scale `Money`."""
        return self._money.is_equal(other)

    def is_greater_than(self, other: MoneyProvider) -> bool:
        return self._money.is_greater_than(other)

    def is_greater_than_or_equal(self, other: MoneyProvider) -> bool:
        return self._money.is_greater_than_or_equal(other)

    def is_less_than(self, other: MoneyProvider) -> bool:
        return self._money.is_less_than(other)

    def is_less_than_or_equal(self, other: MoneyProvider) -> bool:
        return self._money.is_less_than_or_equal(other)

    # endregion

    # region Operators

    def __eq__(self, other) -> bool:
        """Structural equality: another FixedScaleMoney with the same currency and amount."""
        if self is other:
            return True
        if not isinstance(other, FixedScaleMoney):
            return False
        return self._money == other._money

    def __hash__(self) -> int:
        return hash(self._money) + 3

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
        if not isinstance(other, FixedScaleMoney):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other):
        if not isinstance(other, FixedScaleMoney):
            return NotImplemented
        return self.minus(other)

    def __mul__(self, other):
        # Only exact (int) multiplication has an operator
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return self.multiplied_by(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self) -> FixedScaleMoney:
        return self.negated()

    def __abs__(self) -> FixedScaleMoney:
        return self.abs()

    # endregion

    def __str__(self) -> str:
        """Return the text form, e.g. 'USD 25.00'."""
        return str(self._money)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self}')"
