from __future__ import annotations

import logging
import re
from enum import Enum
from typing import ClassVar

from bidict import bidict

from fixed_money.monetary.errors import UnknownCurrencyError

logger = logging.getLogger(__name__)

_CODE_PATTERN = re.compile(r"[A-Z]{3}")

MAX_DECIMAL_PLACES = 30


class CurrencyType(Enum):
    """Enumeration of currency types."""

    FIAT = "FIAT"
    CRYPTO = "CRYPTO"
    COMMODITY = "COMMODITY"


class Currency:
    """A currency unit: code, ISO numeric code and the number of decimal places it is quoted at.

    Currencies are immutable and compared by $code. Lookups go through a class-level registry,
    where the code-to-numeric-code mapping is kept one-to-one.

    Attributes:
        code (str): Three upper-case letters (e.g., "USD", "JPY").
        numeric_code (int | None): ISO 4217 numeric code (e.g., 840 for USD), None when the currency has none.
        decimal_places (int): Canonical scale (0-30), e.g. 2 for USD, 0 for JPY, 3 for BHD.
        name (str): Full currency name.
        currency_type (CurrencyType): Type of currency (FIAT, CRYPTO, COMMODITY).
    """

    __slots__ = ("_code", "_numeric_code", "_decimal_places", "_name", "_currency_type")

    # Class-level registry of currencies by code
    _registry: ClassVar[dict[str, Currency]] = {}
    # One-to-one mapping: code <-> numeric code
    _numeric_codes: ClassVar[bidict[str, int]] = bidict()

    def __init__(self, code: str, numeric_code: int | None, decimal_places: int, name: str, currency_type: CurrencyType = CurrencyType.FIAT):
        """Initialize a Currency instance.

        Args:
            code: Three upper-case letters.
            numeric_code: ISO 4217 numeric code between 0 and 999, or None for currencies without one (e.g. crypto).
            decimal_places: Canonical scale between 0 and 30.
            name: Full currency name.
            currency_type: Type of currency.

        Raises:
            ValueError: If parameters are invalid.
            TypeError: If $currency_type is not a CurrencyType instance.
        """
        # Raise: $code must be exactly three upper-case letters so that text parsing can rely on its length
        if not isinstance(code, str) or not _CODE_PATTERN.fullmatch(code):
            raise ValueError(f"$code must be three upper-case letters, but provided value is: '{code}'")

        if numeric_code is not None and (isinstance(numeric_code, bool) or not isinstance(numeric_code, int) or not 0 <= numeric_code <= 999):
            raise ValueError(f"$numeric_code must be an integer between 0 and 999, but provided value is: {numeric_code}")

        if isinstance(decimal_places, bool) or not isinstance(decimal_places, int) or not 0 <= decimal_places <= MAX_DECIMAL_PLACES:
            raise ValueError(f"$decimal_places must be an integer between 0 and {MAX_DECIMAL_PLACES}, but provided value is: {decimal_places}")

        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"$name must be a non-empty string, but provided value is: '{name}'")

        if not isinstance(currency_type, CurrencyType):
            raise TypeError(f"$currency_type must be a CurrencyType instance, but provided value is: {currency_type}")

        self._code = code
        self._numeric_code = numeric_code
        self._decimal_places = decimal_places
        self._name = name.strip()
        self._currency_type = currency_type

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._code

    @property
    def numeric_code(self) -> int | None:
        """Get the ISO numeric code, or None."""
        return self._numeric_code

    @property
    def numeric_code_str(self) -> str:
        """Get the ISO numeric code as three digits, e.g. '036' for AUD, or an empty string."""
        return "" if self._numeric_code is None else f"{self._numeric_code:03d}"

    @property
    def decimal_places(self) -> int:
        """Get the canonical scale of amounts in this currency."""
        return self._decimal_places

    @property
    def name(self) -> str:
        """Get the currency name."""
        return self._name

    @property
    def currency_type(self) -> CurrencyType:
        """Get the currency type."""
        return self._currency_type

    @property
    def is_fiat(self) -> bool:
        return self._currency_type == CurrencyType.FIAT

    @property
    def is_crypto(self) -> bool:
        return self._currency_type == CurrencyType.CRYPTO

    @property
    def is_commodity(self) -> bool:
        return self._currency_type == CurrencyType.COMMODITY

    # region Registry

    @classmethod
    def register(cls, currency: Currency, overwrite: bool = False) -> Currency:
        """Register a currency in the global registry.

        Args:
            currency: The currency to register.
            overwrite: Whether to replace a currency already registered under the same code.

        Returns:
            Currency: The registered currency.

        Raises:
            TypeError: If $currency is not a Currency instance.
            ValueError: If the code already exists and $overwrite is False, or if the numeric code
                belongs to a different currency.
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        if currency.code in cls._registry and not overwrite:
            raise ValueError(f"Currency with code '{currency.code}' already exists in registry. Use overwrite=True to replace it.")

        # Raise: numeric codes stay unique across different currency codes
        owner = cls._numeric_codes.inverse.get(currency.numeric_code) if currency.numeric_code is not None else None
        if owner is not None and owner != currency.code:
            raise ValueError(f"Cannot register currency '{currency.code}' because $numeric_code {currency.numeric_code_str} already belongs to '{owner}'")

        cls._numeric_codes.pop(currency.code, None)
        if currency.numeric_code is not None:
            cls._numeric_codes[currency.code] = currency.numeric_code
        cls._registry[currency.code] = currency
        logger.debug(f"Registered currency {currency!r}")
        return currency

    @classmethod
    def of(cls, code: str) -> Currency:
        """Get a registered currency by code.

        Args:
            code: Three-letter currency code.

        Returns:
            Currency: The registered currency.

        Raises:
            TypeError: If $code is not a string.
            UnknownCurrencyError: If $code is not registered.
        """
        if not isinstance(code, str):
            raise TypeError(f"$code must be a string, but provided value is: {code!r}")

        currency = cls._registry.get(code)
        if currency is None:
            raise UnknownCurrencyError(f"Currency with code '{code}' not found in registry")
        return currency

    @classmethod
    def of_numeric_code(cls, numeric_code: int) -> Currency:
        """Get a registered currency by ISO numeric code.

        Raises:
            UnknownCurrencyError: If no registered currency has $numeric_code.
        """
        code = cls._numeric_codes.inverse.get(numeric_code)
        if code is None:
            raise UnknownCurrencyError(f"Currency with numeric code {numeric_code} not found in registry")
        return cls._registry[code]

    @classmethod
    def registered_currencies(cls) -> list[Currency]:
        """Get all registered currencies, sorted by code."""
        return [cls._registry[code] for code in sorted(cls._registry)]

    # endregion

    def __eq__(self, other) -> bool:
        if not isinstance(other, Currency):
            return False
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self.code}', {self.numeric_code}, {self.decimal_places}, '{self.name}', {self.currency_type.name})"
