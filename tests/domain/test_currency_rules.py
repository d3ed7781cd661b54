"""Tests for currency resolution and conversion rules."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.errors import ValidationError
from src.domain.models import ExchangeRate
from src.domain.services.currency import (
    build_import_rates,
    compute_snapshot_value,
    current_rate_table,
    display_currency_options,
    latest_rates,
    parse_rates_rows,
    rate_for,
    resolve_currency,
    to_display_currency,
)


def test_resolve_currency_prefers_supported_explicit_column() -> None:
    assert resolve_currency(" usd ", "沪深300") == "USD"
    assert resolve_currency("GBP", "美股 QQQ") == "GBP"


def test_resolve_currency_falls_back_to_name_hints_then_cny() -> None:
    """Unsupported codes fall through to name hints; the later hint wins."""
    assert resolve_currency("CHF", "港股 腾讯") == "HKD"
    assert resolve_currency(None, "美股ETF") == "USD"
    assert resolve_currency("", "日元存款") == "JPY"
    assert resolve_currency(None, "USD HKD 混合") == "HKD"
    assert resolve_currency(None, "美股 港股通") == "HKD"
    assert resolve_currency(None, "余额宝") == "CNY"


def test_parse_rates_rows_skips_header_and_invalid_rates() -> None:
    logger = MagicMock()
    rows = [
        ["货币", "名称", "汇率"],
        ["usd", "美元", 7.2],
        ["hkd", "港币", "0"],
        [None, "", 1],
        [],
        ["jpy", "日元"],
    ]

    rates = parse_rates_rows(rows, logger)

    assert rates == {"USD": Decimal("7.2")}
    assert logger.warning.call_count == 2


def test_build_import_rates_overlays_defaults() -> None:
    rates = build_import_rates({"USD": Decimal("7.3"), "EUR": Decimal("7.8")})

    assert rates["USD"] == Decimal("7.3")
    assert rates["HKD"] == Decimal("0.91")
    assert rates["JPY"] == Decimal("0.047")
    assert rates["EUR"] == Decimal("7.8")
    assert rates["CNY"] == Decimal("1")


def test_rate_for_missing_currency_warns_and_uses_one() -> None:
    logger = MagicMock()

    assert rate_for("GBP", {"USD": Decimal("7.1")}, logger) == Decimal("1")
    logger.warning.assert_called_once()
    assert rate_for("CNY", {}, logger) == Decimal("1")


def test_new_format_computes_cny_from_original() -> None:
    """Empty CNY column converts the native amount at the import rate."""
    original, cny = compute_snapshot_value(
        "USD",
        Decimal("7.1"),
        original_cell=1000,
        value_cell=None,
        is_new_format=True,
    )

    assert original == Decimal("1000")
    assert cny == Decimal("7100.0")


def test_new_format_keeps_explicit_cny_value() -> None:
    original, cny = compute_snapshot_value(
        "USD",
        Decimal("7.1"),
        original_cell=1000,
        value_cell=7250.5,
        is_new_format=True,
    )

    assert original == Decimal("1000")
    assert cny == Decimal("7250.5")


def test_new_format_cny_asset_mirrors_original() -> None:
    original, cny = compute_snapshot_value(
        "CNY",
        Decimal("1"),
        original_cell="5,000",
        value_cell=4800,
        is_new_format=True,
    )

    assert original == cny == Decimal("5000")


def test_old_format_back_computes_original() -> None:
    original, cny = compute_snapshot_value(
        "HKD",
        Decimal("0.5"),
        value_cell=100,
        is_new_format=False,
    )

    assert cny == Decimal("100")
    assert original == Decimal("200")


def test_old_format_zero_rate_keeps_cny_value() -> None:
    original, cny = compute_snapshot_value(
        "USD",
        Decimal("0"),
        value_cell=100,
        is_new_format=False,
    )

    assert original == cny == Decimal("100")


def test_latest_rates_and_current_rate_table() -> None:
    stored = [
        ExchangeRate(1, "USD", "CNY", Decimal("7.0"), date(2024, 1, 1)),
        ExchangeRate(2, "USD", "CNY", Decimal("7.2"), date(2024, 6, 1)),
        ExchangeRate(3, "EUR", "CNY", Decimal("7.9"), date(2024, 3, 1)),
    ]

    assert latest_rates(stored) == {
        "USD": Decimal("7.2"),
        "EUR": Decimal("7.9"),
    }
    table = current_rate_table(stored)
    assert table["USD"] == Decimal("7.2")
    assert table["HKD"] == Decimal("0.91")


def test_to_display_currency_divides_by_current_rate() -> None:
    rates = {"USD": Decimal("8")}

    assert to_display_currency(Decimal("800"), "USD", rates) == Decimal("100")
    assert to_display_currency(Decimal("800"), "CNY", rates) == Decimal("800")


def test_to_display_currency_without_rate_is_rejected() -> None:
    """A raw CNY amount is never passed off as another currency."""
    with pytest.raises(ValidationError, match="EUR"):
        to_display_currency(Decimal("7100"), "EUR", current_rate_table([]))
    with pytest.raises(ValidationError):
        to_display_currency(Decimal("1"), "USD", {"USD": Decimal("0")})


def test_display_currency_options_follow_the_rate_table() -> None:
    stored = [ExchangeRate(1, "EUR", "CNY", Decimal("7.9"), date(2024, 3, 1))]

    options = display_currency_options(current_rate_table(stored))

    assert options == ["CNY", "USD", "HKD", "JPY", "EUR"]
    assert display_currency_options({}) == ["CNY"]
