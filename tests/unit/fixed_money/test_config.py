from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from fixed_money.config import DEFAULT_DECIMAL_PRECISION, ENV_CURRENCY_DATA, ENV_DECIMAL_PRECISION, get_settings, load_settings, reset_settings
from fixed_money.monetary.currency_registry import USD
from fixed_money.monetary.errors import MoneyOverflowError
from fixed_money.monetary.money import Money


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    monkeypatch.delenv(ENV_DECIMAL_PRECISION, raising=False)
    monkeypatch.delenv(ENV_CURRENCY_DATA, raising=False)
    reset_settings()
    yield
    monkeypatch.undo()
    reset_settings()


def test_defaults():
    settings = load_settings()
    assert settings.decimal_precision == DEFAULT_DECIMAL_PRECISION
    assert settings.currency_data_path is None


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv(ENV_DECIMAL_PRECISION, "50")
    monkeypatch.setenv(ENV_CURRENCY_DATA, "extra/currencies.csv")

    settings = load_settings()

    assert settings.decimal_precision == 50
    assert settings.currency_data_path == Path("extra/currencies.csv")


@pytest.mark.parametrize("value", ["abc", "1.5", "27", "10001"])
def test_invalid_precision(monkeypatch, value):
    monkeypatch.setenv(ENV_DECIMAL_PRECISION, value)
    with pytest.raises(ValueError):
        load_settings()


def test_get_settings_is_cached_until_reset(monkeypatch):
    first = get_settings()
    monkeypatch.setenv(ENV_DECIMAL_PRECISION, "60")
    assert get_settings() is first

    reset_settings()
    assert get_settings().decimal_precision == 60


def test_precision_limits_exact_arithmetic(monkeypatch):
    large = Money.of_major(USD, 10**30)
    assert large.plus(1).amount == Decimal(10**30 + 1)

    monkeypatch.setenv(ENV_DECIMAL_PRECISION, "28")
    reset_settings()

    with pytest.raises(MoneyOverflowError):
        large.plus(1)
