from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from importlib import resources
from pathlib import Path

from fixed_money.config import get_settings
from fixed_money.monetary.currency import Currency, CurrencyType

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("code", "numeric_code", "decimal_places", "name", "currency_type")


def parse_currency_rows(rows: Iterable[dict[str, str]], source: str) -> list[Currency]:
    """Build currencies from CSV rows with columns `code,numeric_code,decimal_places,name,currency_type`.

    An empty $numeric_code means the currency has no ISO numeric code.

    Args:
        rows: Rows as produced by `csv.DictReader`.
        source: Description of where the rows come from, used in error messages.

    Returns:
        list[Currency]: Parsed currencies in file order.

    Raises:
        ValueError: If a row is malformed. The message names $source and the line number.
    """
    result = []
    # Header is line 1
    for line_number, row in enumerate(rows, start=2):
        try:
            numeric_code = row["numeric_code"].strip()
            currency = Currency(
                code=row["code"].strip(),
                numeric_code=int(numeric_code) if numeric_code else None,
                decimal_places=int(row["decimal_places"]),
                name=row["name"],
                currency_type=CurrencyType(row["currency_type"].strip().upper()),
            )
        except (KeyError, AttributeError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid currency data in {source} at line {line_number}: {e}") from e
        result.append(currency)
    return result


def load_currency_data(path: Path | str, overwrite: bool = True) -> list[Currency]:
    """Register every currency listed in the CSV file at $path.

    Args:
        path: CSV file with a header row naming the columns in `CSV_COLUMNS`.
        overwrite: Whether entries replace currencies already registered under the same code.

    Returns:
        list[Currency]: The registered currencies.

    Raises:
        FileNotFoundError: If $path does not exist.
        ValueError: If the header or a row is malformed, or registration is rejected.
    """
    path = Path(path)
    with path.open(newline="", encoding="utf-8") as f:
        currencies = _read_csv(f, str(path))

    for currency in currencies:
        Currency.register(currency, overwrite=overwrite)

    logger.info(f"Loaded {len(currencies)} currency(ies) from '{path}'")
    return currencies


def load_bundled_currency_data() -> list[Currency]:
    """Register the currencies shipped with the package."""
    source = resources.files("fixed_money").joinpath("data", "currencies.csv")
    with source.open("r", newline="", encoding="utf-8") as f:
        currencies = _read_csv(f, "bundled currencies.csv")

    for currency in currencies:
        Currency.register(currency, overwrite=True)

    logger.debug(f"Loaded {len(currencies)} bundled currency(ies)")
    return currencies


def _read_csv(lines: Iterable[str], source: str) -> list[Currency]:
    reader = csv.DictReader(lines)
    missing = [column for column in CSV_COLUMNS if column not in (reader.fieldnames or [])]
    if missing:
        raise ValueError(f"Invalid currency data in {source}: missing column(s) {missing}")
    return parse_currency_rows(reader, source)


load_bundled_currency_data()

_extra_path = get_settings().currency_data_path
if _extra_path is not None:
    load_currency_data(_extra_path)

# Commonly used currencies
USD = Currency.of("USD")
EUR = Currency.of("EUR")
GBP = Currency.of("GBP")
CHF = Currency.of("CHF")
CAD = Currency.of("CAD")
AUD = Currency.of("AUD")
JPY = Currency.of("JPY")
KRW = Currency.of("KRW")
BHD = Currency.of("BHD")
KWD = Currency.of("KWD")
XAU = Currency.of("XAU")
XAG = Currency.of("XAG")
BTC = Currency.of("BTC")
ETH = Currency.of("ETH")
