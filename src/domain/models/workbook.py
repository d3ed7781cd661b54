"""Domain models for the spreadsheet import pipeline."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Union


@dataclass(frozen=True)
class ParsedWorkbook:
    """Raw grid read from an uploaded workbook.

    Attributes:
        header_row: First row of the data sheet.
        data_rows: Remaining rows of the data sheet.
        rates_sheet_rows: Rows of the optional second sheet, if present.
    """

    header_row: list[Any]
    data_rows: list[list[Any]]
    rates_sheet_rows: list[list[Any]] | None = None


@dataclass(frozen=True)
class SnapshotColumns:
    """Column positions holding one snapshot's values.

    ``original_index`` is set for the new format (``<MMDD>原始金额``);
    ``value_index`` points at the CNY column and is ``None`` when the
    original-amount column is the only value source.
    """

    label: str
    original_index: int | None = None
    value_index: int | None = None
    change_index: int | None = None

    @property
    def is_new_format(self) -> bool:
        return self.original_index is not None

    @property
    def total_index(self) -> int | None:
        """Column read for the 总计 row."""
        if self.value_index is not None:
            return self.value_index
        return self.original_index


@dataclass(frozen=True)
class HeaderLayout:
    """Interpretation of the data sheet header row."""

    snapshots: list[SnapshotColumns]
    currency_index: int | None = None

    @property
    def labels(self) -> list[str]:
        return [columns.label for columns in self.snapshots]


@dataclass(frozen=True)
class CategoryHeader:
    """Row that opens a category section."""

    row_number: int
    name: str


@dataclass(frozen=True)
class AssetRow:
    """Row describing one holding under the current category."""

    row_number: int
    category: str
    name: str
    cells: list[Any]


@dataclass(frozen=True)
class TotalRow:
    """The 总计 row feeding PortfolioSummary."""

    row_number: int
    cells: list[Any]


@dataclass(frozen=True)
class SkipRow:
    """Row ignored by the importer."""

    row_number: int
    reason: str


ParsedRow = Union[CategoryHeader, AssetRow, TotalRow, SkipRow]


@dataclass(frozen=True)
class PlannedValue:
    """Value computed for one asset at one snapshot label."""

    label: str
    original_value: Decimal
    cny_value: Decimal
    change_from_previous: Decimal
    current_ratio: Decimal | None = None


@dataclass(frozen=True)
class PlannedAsset:
    """Asset to create or reuse, with its values."""

    category: str
    name: str
    currency: str
    sort_order: int
    values: list[PlannedValue] = field(default_factory=list)


@dataclass(frozen=True)
class PlannedSnapshot:
    label: str
    snapshot_date: date


@dataclass(frozen=True)
class PlannedTotal:
    label: str
    total_value: Decimal


@dataclass(frozen=True)
class ImportPlan:
    """Everything the replace-import writes, computed before any write."""

    snapshots: list[PlannedSnapshot]
    categories: list[str]
    assets: list[PlannedAsset]
    totals: list[PlannedTotal]
    rates: dict[str, Decimal]

    @property
    def value_count(self) -> int:
        return sum(len(asset.values) for asset in self.assets)

    @property
    def is_empty(self) -> bool:
        return not self.snapshots


__all__ = [
    "ParsedWorkbook",
    "SnapshotColumns",
    "HeaderLayout",
    "CategoryHeader",
    "AssetRow",
    "TotalRow",
    "SkipRow",
    "ParsedRow",
    "PlannedValue",
    "PlannedAsset",
    "PlannedSnapshot",
    "PlannedTotal",
    "ImportPlan",
]
