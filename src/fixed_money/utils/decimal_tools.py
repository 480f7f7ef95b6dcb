from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    ROUND_05UP,
    ROUND_DOWN,
    ROUND_HALF_EVEN,
    localcontext,
)
from typing import TypeAlias

from fixed_money.config import get_settings
from fixed_money.monetary.errors import MoneyOverflowError, PrecisionLossError, RoundingNecessaryError
from fixed_money.monetary.rounding_mode import RoundingMode

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to a finite `Decimal`.

    Floats are converted via `str` to avoid binary noise, so `0.1` becomes `Decimal("0.1")`.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.

    Raises:
        TypeError: If $value is None, a bool or an unsupported type.
        ValueError: If $value is NaN or infinite.
        decimal.InvalidOperation: If $value is a string `Decimal` cannot parse.
    """
    # Raise: bool is an int subclass but never a meaningful amount
    if value is None or isinstance(value, bool) or not isinstance(value, (Decimal, int, str, float)):
        raise TypeError(f"$value must be Decimal, int, str or float, but provided value is: {value!r} (type '{type(value).__name__}')")

    result = value if isinstance(value, Decimal) else Decimal(str(value))

    # Raise: only finite amounts are representable
    if not result.is_finite():
        raise ValueError(f"$value must be finite, but provided value is: {value!r}")

    return result


def scale_of(value: Decimal) -> int:
    """Number of digits right of the decimal point (negative for values like `1E+3`)."""
    return -value.as_tuple().exponent


def quantum(scale: int) -> Decimal:
    """Decimal whose exponent is `-scale`, for use with `Decimal.quantize`."""
    return Decimal((0, (1,), -scale))


def normalize_zero(value: Decimal) -> Decimal:
    """Drop the sign of a negative zero, keeping its scale."""
    return value.copy_abs() if value.is_zero() else value


def exact_context() -> Context:
    """Context that refuses to round: any inexact result raises instead."""
    return Context(
        prec=get_settings().decimal_precision,
        rounding=ROUND_HALF_EVEN,
        traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
    )


def rounding_context(rounding: str) -> Context:
    """Context that rounds with $rounding but still fails on results longer than the configured precision."""
    return Context(
        prec=get_settings().decimal_precision,
        rounding=rounding,
        traps=[InvalidOperation, DivisionByZero, Overflow],
    )


@contextmanager
def exact_arithmetic(operation: str) -> Iterator[None]:
    """Run the block under `exact_context`, translating `decimal` signals to `MoneyOverflowError`.

    Args:
        operation: Name of the calling operation, used in the error message.

    Raises:
        MoneyOverflowError: If a result inside the block needs more digits than the configured precision.
    """
    try:
        with localcontext(exact_context()):
            yield
    except (Inexact, InvalidOperation) as e:
        raise MoneyOverflowError(f"Cannot call `{operation}` because the result needs more than {get_settings().decimal_precision} significant digits") from e


def rescale(value: Decimal, scale: int, rounding_mode: RoundingMode | None, operation: str) -> Decimal:
    """Return $value with exactly $scale decimal places.

    Widening is always exact. Narrowing uses $rounding_mode; with None or `UNNECESSARY` it only
    succeeds when the discarded digits are all zero.

    Args:
        value: Amount to rescale.
        scale: Target scale, may be negative.
        rounding_mode: How to discard digits, or None to require exactness.
        operation: Name of the calling operation, used in error messages.

    Returns:
        Amount at $scale.

    Raises:
        PrecisionLossError: If $rounding_mode is None and rounding would be needed.
        RoundingNecessaryError: If $rounding_mode is `UNNECESSARY` and rounding would be needed.
        MoneyOverflowError: If the result needs more digits than the configured precision.
    """
    if scale_of(value) == scale:
        return value

    target = quantum(scale)
    decimal_rounding = ROUND_DOWN if rounding_mode is None else (rounding_mode.decimal_rounding or ROUND_DOWN)
    try:
        result = value.quantize(target, context=rounding_context(decimal_rounding))
    except InvalidOperation as e:
        raise MoneyOverflowError(f"Cannot call `{operation}` because {value} at scale {scale} needs more than {get_settings().decimal_precision} significant digits") from e

    if (rounding_mode is None or rounding_mode is RoundingMode.UNNECESSARY) and result != value:
        if rounding_mode is None:
            raise PrecisionLossError(f"Cannot call `{operation}` because scale of {value} ({scale_of(value)}) exceeds scale {scale} and no $rounding_mode was given")
        raise RoundingNecessaryError(f"Cannot call `{operation}` because {value} cannot be represented at scale {scale} without rounding")

    return normalize_zero(result)


def divide_to_scale(dividend: Decimal, divisor: Decimal, scale: int, rounding_mode: RoundingMode, operation: str) -> Decimal:
    """Divide and round the quotient once, directly to $scale.

    The quotient is first computed with `ROUND_05UP` at two or more digits past $scale, which keeps the
    final rounding identical to rounding the exact (possibly non-terminating) quotient.

    Args:
        dividend: Value to divide.
        divisor: Value to divide by.
        scale: Scale of the result.
        rounding_mode: How to discard digits of the quotient.
        operation: Name of the calling operation, used in error messages.

    Returns:
        Quotient at $scale.

    Raises:
        ZeroDivisionError: If $divisor is zero.
        RoundingNecessaryError: If $rounding_mode is `UNNECESSARY` and the quotient is not exact at $scale.
        MoneyOverflowError: If the result needs more digits than the configured precision.
    """
    # Raise: division by zero is checked before the rounding mode is considered
    if divisor.is_zero():
        raise ZeroDivisionError(f"Cannot call `{operation}` because $divisor is zero")

    digits = max(1, dividend.adjusted() - divisor.adjusted() + 1 + scale + 3)
    quotient = Context(prec=digits, rounding=ROUND_05UP, traps=[InvalidOperation]).divide(dividend, divisor)

    if rounding_mode is RoundingMode.UNNECESSARY:
        result = rescale(quotient, scale, RoundingMode.DOWN, operation)
        with exact_arithmetic(operation):
            is_exact = result * divisor == dividend
        if not is_exact:
            raise RoundingNecessaryError(f"Cannot call `{operation}` because {dividend} / {divisor} cannot be represented at scale {scale} without rounding")
        return result

    return rescale(quotient, scale, rounding_mode, operation)


def from_unscaled(unscaled: int, scale: int) -> Decimal:
    """Exact `Decimal` equal to `unscaled * 10 ** -scale`, with exponent `-scale`."""
    return Decimal(f"{unscaled}E{-scale}")


def unscaled_of(value: Decimal) -> int:
    """Integer digits of $value without the decimal point, e.g. 2595 for `Decimal("25.95")`."""
    sign, digits, _ = value.as_tuple()
    result = int("".join(map(str, digits))) if digits else 0
    return -result if sign else result


def check_int(value: int, name: str, operation: str) -> int:
    """Return $value if it is an `int` (and not a bool), otherwise raise `TypeError`."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Cannot call `{operation}` because ${name} must be int, but provided value is: {value!r} (type '{type(value).__name__}')")
    return value
