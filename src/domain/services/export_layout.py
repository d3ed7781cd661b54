"""Sheet grids produced by the workbook export."""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from src.domain.constants import (
    CHANGE_MARKER,
    CNY_VALUE_SUFFIX,
    CURRENCY_NAMES,
    ORIGINAL_AMOUNT_SUFFIX,
    TOTAL_MARKER,
)
from src.domain.models import (
    Asset,
    AssetValue,
    Category,
    PortfolioSummary,
    Snapshot,
)
from src.domain.services.currency import rate_for
from src.utils.decimal_utils import quantize_money

DATA_HEADER_PREFIX = ["资产大类", "标的", "币种"]
RATE_HEADER = ["货币", "货币名称", "汇率(兑人民币)", "生效日期"]


def format_original_amount(value: Decimal) -> str:
    """Render a native amount the way the sheet stores it (``1000.00``)."""
    return f"{quantize_money(value):.2f}"


def _number(value: Decimal) -> int | float:
    quantized = quantize_money(value)
    if quantized == quantized.to_integral_value():
        return int(quantized)
    return float(quantized)


def build_data_rows(
    categories: list[Category],
    assets: list[Asset],
    snapshots: list[Snapshot],
    values: list[AssetValue],
    summaries: list[PortfolioSummary],
    rates: Mapping[str, Decimal],
) -> list[list[Any]]:
    """Lay out the 投资组合 sheet in the importer's new format.

    Assets are grouped by category sort order; only the first row of a group
    carries the category label. A missing native amount is back-computed from
    the CNY value with the current rate.

    Args:
        categories: Categories to export.
        assets: Assets to export.
        snapshots: Snapshots, in any order (exported by date).
        values: Stored asset values.
        summaries: Stored portfolio summaries.
        rates: Current rate table.

    Returns:
        list[list[Any]]: Header row, asset rows and the 总计 row.
    """
    ordered_snapshots = sorted(snapshots, key=lambda item: item.snapshot_date)
    header = list(DATA_HEADER_PREFIX)
    for snapshot in ordered_snapshots:
        header.extend(
            [
                f"{snapshot.label}{ORIGINAL_AMOUNT_SUFFIX}",
                f"{snapshot.label}{CNY_VALUE_SUFFIX}",
                CHANGE_MARKER,
            ]
        )
    rows: list[list[Any]] = [header]

    by_key = {(value.asset_id, value.snapshot_id): value for value in values}
    for category in sorted(categories, key=lambda item: (item.sort_order, item.id)):
        category_assets = sorted(
            (asset for asset in assets if asset.category_id == category.id),
            key=lambda item: (item.sort_order, item.id),
        )
        for position, asset in enumerate(category_assets):
            row: list[Any] = [
                category.name if position == 0 else "",
                asset.name,
                asset.currency,
            ]
            rate = rate_for(asset.currency, dict(rates))
            for snapshot in ordered_snapshots:
                value = by_key.get((asset.id, snapshot.id))
                if value is None:
                    row.extend([format_original_amount(Decimal("0")), 0, 0])
                    continue
                original = value.original_value
                if original is None:
                    original = value.cny_value / rate if rate else value.cny_value
                row.extend(
                    [
                        format_original_amount(original),
                        _number(value.cny_value),
                        _number(value.change_from_previous or Decimal("0")),
                    ]
                )
            rows.append(row)

    totals = {summary.snapshot_id: summary.total_value for summary in summaries}
    total_row: list[Any] = [TOTAL_MARKER, "", ""]
    for snapshot in ordered_snapshots:
        total_row.extend(
            ["", _number(totals.get(snapshot.id, Decimal("0"))), ""]
        )
    rows.append(total_row)
    return rows


def build_rate_rows(
    rates: Mapping[str, Decimal],
    rate_dates: Mapping[str, date],
) -> list[list[Any]]:
    """Lay out the 汇率参考 sheet (readable back as the import rates sheet)."""
    rows: list[list[Any]] = [list(RATE_HEADER)]
    for code in sorted(rates, key=lambda item: (item != "CNY", item)):
        effective = rate_dates.get(code)
        rows.append(
            [
                code,
                CURRENCY_NAMES.get(code, code),
                float(rates[code]),
                effective.isoformat() if effective else "",
            ]
        )
    return rows


def export_filename(today: date) -> str:
    return f"portfolio_{today.isoformat()}.xlsx"


__all__ = [
    "DATA_HEADER_PREFIX",
    "RATE_HEADER",
    "build_data_rows",
    "build_rate_rows",
    "export_filename",
    "format_original_amount",
]
