from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_DECIMAL_PRECISION = "FIXED_MONEY_DECIMAL_PRECISION"
ENV_CURRENCY_DATA = "FIXED_MONEY_CURRENCY_DATA"

DEFAULT_DECIMAL_PRECISION = 100
MIN_DECIMAL_PRECISION = 28
MAX_DECIMAL_PRECISION = 10_000


@dataclass(frozen=True)
class Settings:
    """Process-wide settings for fixed-money.

    Attributes:
        decimal_precision: Significant digits the exact decimal context may hold. Any result
            needing more digits raises `MoneyOverflowError` instead of being rounded.
        currency_data_path: Optional CSV file with extra currencies, loaded after the bundled data.
    """

    decimal_precision: int = DEFAULT_DECIMAL_PRECISION
    currency_data_path: Path | None = None


def load_settings() -> Settings:
    """Read settings from environment variables (a `.env` file is read first, without overriding).

    Returns:
        Settings: Freshly parsed settings.

    Raises:
        ValueError: If $FIXED_MONEY_DECIMAL_PRECISION is not an integer in the allowed range.
    """
    load_dotenv()

    raw_precision = os.environ.get(ENV_DECIMAL_PRECISION, "").strip()
    if raw_precision:
        try:
            precision = int(raw_precision)
        except ValueError as e:
            raise ValueError(f"Cannot call `load_settings` because ${ENV_DECIMAL_PRECISION} ('{raw_precision}') is not an integer") from e
    else:
        precision = DEFAULT_DECIMAL_PRECISION

    # Raise: precision below the default `decimal` context would make ordinary amounts overflow
    if not MIN_DECIMAL_PRECISION <= precision <= MAX_DECIMAL_PRECISION:
        raise ValueError(f"Cannot call `load_settings` because ${ENV_DECIMAL_PRECISION} ({precision}) is not between {MIN_DECIMAL_PRECISION} and {MAX_DECIMAL_PRECISION}")

    raw_path = os.environ.get(ENV_CURRENCY_DATA, "").strip()
    currency_data_path = Path(raw_path) if raw_path else None

    settings = Settings(decimal_precision=precision, currency_data_path=currency_data_path)
    logger.debug(f"Loaded settings: {settings}")
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings, loading them on first use."""
    return load_settings()


def reset_settings() -> None:
    """Forget cached settings so the next `get_settings` call reads the environment again."""
    get_settings.cache_clear()
