"""Currency resolution and conversion rules."""

from collections.abc import Iterable
from decimal import Decimal
from logging import Logger
from typing import Any

from src.domain.constants import (
    BASE_CURRENCY,
    CURRENCY_NAME_HINTS,
    DEFAULT_IMPORT_RATES,
    DISPLAY_CURRENCIES,
    IMPORT_CURRENCIES,
)
from src.domain.errors import ValidationError
from src.domain.models import ExchangeRate
from src.utils.decimal_utils import coerce_decimal


def normalize_currency_code(value: Any) -> str | None:
    """Upper-case a currency cell, returning None for blanks."""
    if value is None:
        return None
    cleaned = str(value).strip().upper()
    return cleaned or None


def resolve_currency(currency_cell: Any, asset_name: str) -> str:
    """Resolve an asset row's currency.

    The explicit currency column wins when it holds a supported code. Then
    the asset name is searched for market hints, where a later hint entry
    overrides an earlier one. Everything else is CNY.

    Args:
        currency_cell: Value of the currency column, if the sheet has one.
        asset_name: Asset name from the second column.

    Returns:
        str: Resolved currency code.
    """
    code = normalize_currency_code(currency_cell)
    if code in IMPORT_CURRENCIES:
        return code
    for currency, hints in reversed(CURRENCY_NAME_HINTS):
        if any(hint in asset_name for hint in hints):
            return currency
    return BASE_CURRENCY


def parse_rates_rows(
    rows: list[list[Any]] | None,
    logger: Logger | None = None,
) -> dict[str, Decimal]:
    """Read ``[code, _, rate]`` rows from the rates sheet.

    The first row is a header. Rows with a blank code or a non-positive rate
    are ignored.
    """
    rates: dict[str, Decimal] = {}
    for row in (rows or [])[1:]:
        if not row:
            continue
        code = normalize_currency_code(row[0])
        if code is None:
            continue
        rate = coerce_decimal(row[2] if len(row) > 2 else None)
        if rate <= 0:
            if logger is not None:
                logger.warning(f"Ignoring rate for {code}: {row[2:3]}")
            continue
        rates[code] = rate
    return rates


def build_import_rates(
    sheet_rates: dict[str, Decimal] | None = None,
) -> dict[str, Decimal]:
    """Overlay rates read from the workbook on the import defaults."""
    rates = dict(DEFAULT_IMPORT_RATES)
    rates.update(sheet_rates or {})
    return rates


def rate_for(
    currency: str,
    rates: dict[str, Decimal],
    logger: Logger | None = None,
) -> Decimal:
    """Return the CNY rate for ``currency``, falling back to 1."""
    if currency == BASE_CURRENCY:
        return Decimal("1")
    rate = rates.get(currency)
    if rate is None:
        if logger is not None:
            logger.warning(f"Missing rate for {currency}, using 1")
        return Decimal("1")
    return rate


def compute_snapshot_value(
    currency: str,
    rate: Decimal,
    *,
    original_cell: Any = None,
    value_cell: Any = None,
    is_new_format: bool,
) -> tuple[Decimal, Decimal]:
    """Compute ``(original_value, cny_value)`` for one asset and snapshot.

    New format rows carry the native amount. An explicit CNY column is kept
    as-is unless it is empty while the native amount is not, and CNY assets
    always mirror the native amount. Old format rows carry only the CNY
    value, so the native amount is back-computed.
    """
    if is_new_format:
        original = coerce_decimal(original_cell)
        cny = coerce_decimal(value_cell)
        if cny == 0 and original != 0:
            cny = original * rate
        if currency == BASE_CURRENCY:
            cny = original
        return original, cny

    cny = coerce_decimal(value_cell)
    if currency == BASE_CURRENCY or rate == 0:
        return cny, cny
    return cny / rate, cny


def latest_rates(rates: Iterable[ExchangeRate]) -> dict[str, Decimal]:
    """Keep the most recent stored rate per source currency."""
    latest: dict[str, ExchangeRate] = {}
    for rate in rates:
        current = latest.get(rate.from_currency)
        if current is None or rate.effective_date >= current.effective_date:
            latest[rate.from_currency] = rate
    return {code: rate.rate for code, rate in latest.items()}


def current_rate_table(rates: Iterable[ExchangeRate]) -> dict[str, Decimal]:
    """Stored latest rates overlaid on the import defaults."""
    table = dict(DEFAULT_IMPORT_RATES)
    table.update(latest_rates(rates))
    return table


def to_display_currency(
    cny_value: Decimal,
    currency: str,
    rates: dict[str, Decimal],
) -> Decimal:
    """Convert a stored CNY amount to a display currency.

    Raises:
        ValidationError: If ``rates`` has no positive rate for ``currency``.
    """
    if currency == BASE_CURRENCY:
        return cny_value
    rate = rates.get(currency)
    if rate is None or rate <= 0:
        raise ValidationError(f"No exchange rate for display currency {currency}")
    return cny_value / rate


def display_currency_options(rates: dict[str, Decimal]) -> list[str]:
    """Display currencies that ``rates`` can convert to, CNY first."""
    return [
        code
        for code in DISPLAY_CURRENCIES
        if code == BASE_CURRENCY or rates.get(code, Decimal("0")) > 0
    ]


__all__ = [
    "normalize_currency_code",
    "resolve_currency",
    "parse_rates_rows",
    "build_import_rates",
    "rate_for",
    "compute_snapshot_value",
    "latest_rates",
    "current_rate_table",
    "to_display_currency",
    "display_currency_options",
]
