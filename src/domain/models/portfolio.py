"""Domain models for persisted portfolio records."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Category:
    """Top-level asset grouping (e.g. 美股, 黄金)."""

    id: int
    name: str
    suggested_ratio: Decimal | None = None
    sort_order: int = 0


@dataclass(frozen=True)
class Asset:
    """Holding tracked under a category.

    Identity is ``(category_id, name)``; the currency is fixed at creation.
    """

    id: int
    category_id: int
    name: str
    currency: str
    suggested_ratio: Decimal | None = None
    sort_order: int = 0


@dataclass(frozen=True)
class Snapshot:
    """Labeled point in time (label is an MMDD string)."""

    id: int
    snapshot_date: date
    label: str


@dataclass(frozen=True)
class AssetValue:
    """Value of one asset at one snapshot.

    Attributes:
        original_value: Amount in the asset's native currency.
        cny_value: Canonical comparable amount, fixed at import time.
        asset_name: Name of the joined asset.
        category_id: Category of the joined asset.
    """

    id: int
    asset_id: int
    snapshot_id: int
    original_value: Decimal | None
    cny_value: Decimal
    change_from_previous: Decimal | None = None
    current_ratio: Decimal | None = None
    asset_name: str = ""
    category_id: int = 0


@dataclass(frozen=True)
class PortfolioSummary:
    """Grand total recorded for a snapshot (the workbook's 总计 row)."""

    id: int
    snapshot_id: int
    total_value: Decimal
    change_from_previous: Decimal | None = None
    change_from_two_previous: Decimal | None = None
    snapshot_label: str = ""
    snapshot_date: date | None = None


@dataclass(frozen=True)
class CashFlow:
    """Append-only ledger entry, unrelated to assets and snapshots."""

    id: int
    flow_date: date
    flow_type: str
    original_amount: Decimal
    currency: str
    cny_amount: Decimal
    source_account: str | None = None
    target_account: str | None = None
    asset_name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ExchangeRate:
    """Conversion rate from ``from_currency`` to CNY."""

    id: int
    from_currency: str
    to_currency: str
    rate: Decimal
    effective_date: date


__all__ = [
    "Category",
    "Asset",
    "Snapshot",
    "AssetValue",
    "PortfolioSummary",
    "CashFlow",
    "ExchangeRate",
]
