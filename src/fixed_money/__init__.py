__version__ = "0.1.0"

from fixed_money.monetary.currency import Currency, CurrencyType
from fixed_money.monetary import currency_registry
from fixed_money.monetary.errors import (
    CurrencyMismatchError,
    MoneyFormatError,
    MoneyOverflowError,
    PrecisionLossError,
    RoundingNecessaryError,
    UnknownCurrencyError,
)
from fixed_money.monetary.fixed_scale_money import FixedScaleMoney
from fixed_money.monetary.money import Money
from fixed_money.monetary.money_provider import MoneyProvider
from fixed_money.monetary.rounding_mode import RoundingMode

__all__ = [
    "Currency",
    "CurrencyType",
    "CurrencyMismatchError",
    "FixedScaleMoney",
    "Money",
    "MoneyFormatError",
    "MoneyOverflowError",
    "MoneyProvider",
    "PrecisionLossError",
    "RoundingMode",
    "RoundingNecessaryError",
    "UnknownCurrencyError",
    "currency_registry",
]
