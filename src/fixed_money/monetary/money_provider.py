from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fixed_money.monetary.money import Money


# region Interface


@runtime_checkable
class MoneyProvider(Protocol):
    """Anything that can express itself as a currency and a decimal amount.

    Both `Money` and `FixedScaleMoney` implement it. Operations that accept "any monetary value"
    accept a `MoneyProvider` and work on the `Money` it returns.
    """

    def to_money(self) -> Money:
        """Returns the value as a variable-scale `Money`.

        Returns:
            The currency and amount, at whatever scale the provider holds them.
        """
        ...


# endregion
