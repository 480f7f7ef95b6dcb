from __future__ import annotations


class RoundingNecessaryError(ArithmeticError):
    """Raised when a rounding mode refuses to discard non-zero digits.

    This is what `RoundingMode.UNNECESSARY` raises when the value is not exact at the target scale.
    """


class PrecisionLossError(RoundingNecessaryError):
    """Raised when an operation called without a rounding mode would have to round."""


class MoneyOverflowError(ArithmeticError):
    """Raised when a value cannot be represented in the requested width or precision."""


class CurrencyMismatchError(ValueError):
    """Raised when two monetary values of different currencies meet where one currency is required."""


class UnknownCurrencyError(ValueError):
    """Raised when a currency code is not present in the registry."""


class MoneyFormatError(ValueError):
    """Raised when text does not have the shape '<code> <amount>'."""
