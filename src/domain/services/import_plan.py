"""Pure planning step of the replace-import."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from logging import Logger
from typing import Any

from src.domain.constants import IMPORT_CURRENCIES
from src.domain.models.workbook import (
    AssetRow,
    CategoryHeader,
    ImportPlan,
    ParsedWorkbook,
    PlannedAsset,
    PlannedSnapshot,
    PlannedTotal,
    PlannedValue,
    SnapshotColumns,
    TotalRow,
)
from src.domain.services.classification import classify_rows
from src.domain.services.currency import (
    build_import_rates,
    compute_snapshot_value,
    normalize_currency_code,
    parse_rates_rows,
    rate_for,
    resolve_currency,
)
from src.domain.services.header_layout import interpret_header
from src.domain.services.snapshot_dates import resolve_snapshot_date
from src.utils.decimal_utils import coerce_decimal

_RATIO_STEP = Decimal("0.000001")


def build_import_plan(
    workbook: ParsedWorkbook,
    *,
    today: date,
    logger: Logger,
) -> ImportPlan:
    """Compute every record a replace-import writes.

    Args:
        workbook: Raw grid read from the uploaded file.
        today: Import-time clock used for snapshot years.
        logger: Logger used for soft resolution warnings.

    Returns:
        ImportPlan: Snapshots, categories, assets with values, totals and the
        rate table used for conversion.
    """
    layout = interpret_header(workbook.header_row)
    rates = build_import_rates(
        parse_rates_rows(workbook.rates_sheet_rows, logger)
    )

    columns: list[SnapshotColumns] = []
    snapshots: list[PlannedSnapshot] = []
    for snapshot_columns in layout.snapshots:
        snapshot_date = resolve_snapshot_date(snapshot_columns.label, today)
        if snapshot_date is None:
            logger.warning(
                f"Skipping snapshot label {snapshot_columns.label}: not a valid date"
            )
            continue
        columns.append(snapshot_columns)
        snapshots.append(
            PlannedSnapshot(
                label=snapshot_columns.label,
                snapshot_date=snapshot_date,
            )
        )

    categories: list[str] = []
    assets: dict[tuple[str, str], PlannedAsset] = {}
    totals: dict[str, PlannedTotal] = {}
    asset_order = 0
    for row in classify_rows(workbook.data_rows):
        if isinstance(row, CategoryHeader):
            if row.name not in categories:
                categories.append(row.name)
            asset_order = 0
        elif isinstance(row, AssetRow):
            currency_cell = _cell(row.cells, layout.currency_index)
            code = normalize_currency_code(currency_cell)
            if code is not None and code not in IMPORT_CURRENCIES:
                logger.warning(
                    f"Row {row.row_number}: unsupported currency {code!r}, "
                    "falling back to name hints"
                )
            currency = resolve_currency(currency_cell, row.name)
            rate = rate_for(currency, rates, logger)
            values = _plan_values(row.cells, columns, currency, rate)
            key = (row.category, row.name)
            existing = assets.get(key)
            if existing is None:
                assets[key] = PlannedAsset(
                    category=row.category,
                    name=row.name,
                    currency=currency,
                    sort_order=asset_order,
                    values=values,
                )
                asset_order += 1
            else:
                merged = {value.label: value for value in existing.values}
                merged.update({value.label: value for value in values})
                assets[key] = replace(existing, values=list(merged.values()))
        elif isinstance(row, TotalRow):
            for snapshot_columns in columns:
                total = coerce_decimal(
                    _cell(row.cells, snapshot_columns.total_index)
                )
                if total > 0:
                    totals[snapshot_columns.label] = PlannedTotal(
                        label=snapshot_columns.label,
                        total_value=total,
                    )

    return ImportPlan(
        snapshots=snapshots,
        categories=categories,
        assets=_with_ratios(list(assets.values())),
        totals=list(totals.values()),
        rates=rates,
    )


def _plan_values(
    cells: list[Any],
    columns: list[SnapshotColumns],
    currency: str,
    rate: Decimal,
) -> list[PlannedValue]:
    values: list[PlannedValue] = []
    for snapshot_columns in columns:
        original, cny = compute_snapshot_value(
            currency,
            rate,
            original_cell=_cell(cells, snapshot_columns.original_index),
            value_cell=_cell(cells, snapshot_columns.value_index),
            is_new_format=snapshot_columns.is_new_format,
        )
        # Zero on both sides means no data for this date.
        if original == 0 and cny == 0:
            continue
        values.append(
            PlannedValue(
                label=snapshot_columns.label,
                original_value=original,
                cny_value=cny,
                change_from_previous=coerce_decimal(
                    _cell(cells, snapshot_columns.change_index)
                ),
            )
        )
    return values


def _with_ratios(assets: list[PlannedAsset]) -> list[PlannedAsset]:
    sums: dict[str, Decimal] = {}
    for asset in assets:
        for value in asset.values:
            sums[value.label] = sums.get(value.label, Decimal("0")) + value.cny_value
    return [
        replace(
            asset,
            values=[
                replace(
                    value,
                    current_ratio=_ratio(value.cny_value, sums[value.label]),
                )
                for value in asset.values
            ],
        )
        for asset in assets
    ]


def _ratio(value: Decimal, total: Decimal) -> Decimal:
    if total == 0:
        return Decimal("0")
    return (value / total).quantize(_RATIO_STEP)


def _cell(cells: list[Any], index: int | None) -> Any:
    if index is None or index >= len(cells):
        return None
    return cells[index]


__all__ = ["build_import_plan"]
