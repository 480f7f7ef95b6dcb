from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_DOWN, ROUND_HALF_EVEN, ROUND_HALF_UP, ROUND_UP
from enum import Enum


class RoundingMode(Enum):
    """Strategy for discarding digits when a decimal amount is reduced to a smaller scale.

    Every value except `UNNECESSARY` maps to one of the `decimal.ROUND_*` constants.
    `UNNECESSARY` asserts that no non-zero digit is discarded and raises
    `RoundingNecessaryError` otherwise.

    Rounding modes are always passed explicitly. There is no ambient default.
    """

    UP = "UP"  # away from zero
    DOWN = "DOWN"  # toward zero
    CEILING = "CEILING"
    FLOOR = "FLOOR"
    HALF_UP = "HALF_UP"
    HALF_DOWN = "HALF_DOWN"
    HALF_EVEN = "HALF_EVEN"
    UNNECESSARY = "UNNECESSARY"

    @property
    def decimal_rounding(self) -> str | None:
        """Get the matching `decimal` rounding constant, or None for `UNNECESSARY`."""
        return _DECIMAL_ROUNDING[self]

    def __str__(self) -> str:
        return self.name


_DECIMAL_ROUNDING: dict[RoundingMode, str | None] = {
    RoundingMode.UP: ROUND_UP,
    RoundingMode.DOWN: ROUND_DOWN,
    RoundingMode.CEILING: ROUND_CEILING,
    RoundingMode.FLOOR: ROUND_FLOOR,
    RoundingMode.HALF_UP: ROUND_HALF_UP,
    RoundingMode.HALF_DOWN: ROUND_HALF_DOWN,
    RoundingMode.HALF_EVEN: ROUND_HALF_EVEN,
    RoundingMode.UNNECESSARY: None,
}


def check_rounding_mode(rounding_mode: RoundingMode | None, operation: str, optional: bool = False) -> RoundingMode | None:
    """Return $rounding_mode if valid, otherwise raise `TypeError`.

    Args:
        rounding_mode: Value to check.
        operation: Name of the calling operation, used in the error message.
        optional: Whether None is accepted (meaning "must be exact").
    """
    if rounding_mode is None and optional:
        return None
    if not isinstance(rounding_mode, RoundingMode):
        raise TypeError(f"Cannot call `{operation}` because $rounding_mode must be a RoundingMode, but provided value is: {rounding_mode!r}")
    return rounding_mode
