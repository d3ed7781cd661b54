"""Domain models for valuation and analytics results."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from src.domain.constants import (
    TARGET_DEVIATION_TOLERANCE,
    TARGET_SUM_TOLERANCE,
)


@dataclass(frozen=True)
class CategoryTotal:
    """Category value at the latest snapshot.

    Attributes:
        name: Category name.
        value: Sum of CNY values.
        roi: Percentage change against the first snapshot.
        ratio: Share of the portfolio total.
    """

    name: str
    value: Decimal
    roi: Decimal
    ratio: Decimal = Decimal("0")


@dataclass(frozen=True)
class TrendPoint:
    """Portfolio total at a snapshot and its change from the previous one."""

    label: str
    snapshot_date: date | None
    value: Decimal
    change: Decimal


@dataclass(frozen=True)
class DashboardOverview:
    """Headline figures for the dashboard."""

    total_value: Decimal
    latest_snapshot_label: str
    category_totals: list[CategoryTotal]
    trend_data: list[TrendPoint]
    overall_roi: Decimal
    snapshot_count: int
    asset_count: int


@dataclass(frozen=True)
class SnapshotRef:
    id: int
    label: str
    snapshot_date: date


@dataclass(frozen=True)
class AssetChange:
    """Change of one asset between two snapshots."""

    asset_id: int
    asset_name: str
    category_name: str
    start_value: Decimal
    end_value: Decimal
    change: Decimal
    change_percent: Decimal

    @property
    def direction(self) -> str:
        if self.change > 0:
            return "up"
        if self.change < 0:
            return "down"
        return "unchanged"


@dataclass(frozen=True)
class PriceChangeSummary:
    start_snapshot: SnapshotRef
    end_snapshot: SnapshotRef
    start_total: Decimal
    end_total: Decimal
    total_change: Decimal
    total_change_percent: Decimal
    days_diff: int


@dataclass(frozen=True)
class PriceChangeStatistics:
    up_count: int
    down_count: int
    unchanged_count: int
    average_change_percent: Decimal


@dataclass(frozen=True)
class QuickRange:
    """Preset comparison window for the price-change view."""

    label: str
    start_snapshot_id: int
    end_snapshot_id: int


@dataclass(frozen=True)
class PriceChangeAnalysis:
    """Result of comparing two arbitrary snapshots."""

    currency_code: str
    summary: PriceChangeSummary
    asset_changes: list[AssetChange]
    top_gainers: list[AssetChange]
    top_losers: list[AssetChange]
    statistics: PriceChangeStatistics
    quick_ranges: list[QuickRange] = field(default_factory=list)


@dataclass(frozen=True)
class HistoryPoint:
    """Category totals and grand total at one snapshot."""

    label: str
    snapshot_date: date
    category_totals: dict[str, Decimal]
    total: Decimal


@dataclass(frozen=True)
class PeriodProfitLoss:
    label: str
    previous_label: str
    change: Decimal
    change_percent: Decimal


@dataclass(frozen=True)
class CategoryProfitLoss:
    name: str
    value: Decimal
    change: Decimal
    change_percent: Decimal


@dataclass(frozen=True)
class HistoryTrend:
    points: list[HistoryPoint]
    period_profit_loss: list[PeriodProfitLoss]
    category_profit_loss: list[CategoryProfitLoss]


@dataclass(frozen=True)
class CategoryForecast:
    category: str
    current_value: Decimal
    predicted_change: Decimal
    predicted_value: Decimal
    trend: str
    confidence: str


@dataclass(frozen=True)
class ForecastPoint:
    day: int
    label: str
    values: dict[str, Decimal]


@dataclass(frozen=True)
class Forecast:
    categories: list[CategoryForecast]
    points: list[ForecastPoint]
    current_total: Decimal
    predicted_total: Decimal
    predicted_change_percent: Decimal


@dataclass(frozen=True)
class CashflowSummary:
    """Summary of cash flow totals in CNY."""

    total_in: Decimal
    total_out: Decimal
    currency_code: str = "CNY"

    @property
    def difference(self) -> Decimal:
        """Return total_in minus total_out."""
        return self.total_in - self.total_out


@dataclass(frozen=True)
class TargetAllocation:
    """Actual against target share of one category, in percent.

    Attributes:
        category_id: Category id.
        name: Category name.
        value: Category CNY value at the snapshot.
        actual_percent: Share of the snapshot total.
        target_percent: Stored target (0 when unset).
        deviation: ``actual_percent - target_percent``.
    """

    category_id: int
    name: str
    value: Decimal
    actual_percent: Decimal
    target_percent: Decimal
    deviation: Decimal

    @property
    def status(self) -> str:
        if self.deviation > TARGET_DEVIATION_TOLERANCE:
            return "over"
        if self.deviation < -TARGET_DEVIATION_TOLERANCE:
            return "under"
        return "on_target"


@dataclass(frozen=True)
class TargetAllocationReport:
    snapshot_label: str
    total_value: Decimal
    allocations: list[TargetAllocation]
    target_sum: Decimal

    @property
    def is_balanced(self) -> bool:
        """Whether the targets add up to 100%."""
        return abs(self.target_sum - Decimal("100")) <= TARGET_SUM_TOLERANCE

    def with_status(self, status: str) -> list[TargetAllocation]:
        return [item for item in self.allocations if item.status == status]


@dataclass(frozen=True)
class Holding:
    """One asset value row of the holdings view."""

    asset_id: int
    asset_name: str
    category_name: str
    currency: str
    snapshot_label: str
    snapshot_date: date | None
    original_value: Decimal | None
    cny_value: Decimal
    change_from_previous: Decimal | None
    current_ratio: Decimal | None


@dataclass(frozen=True)
class HoldingGroup:
    category_name: str
    holdings: list[Holding]

    @property
    def total(self) -> Decimal:
        return sum((item.cny_value for item in self.holdings), Decimal("0"))


@dataclass(frozen=True)
class CategorySnapshotChange:
    """Category value at a snapshot against the previous snapshot."""

    name: str
    value: Decimal
    ratio: Decimal
    previous_value: Decimal
    change: Decimal
    change_percent: Decimal


@dataclass(frozen=True)
class SnapshotSummary:
    """Totals of one snapshot compared with the snapshot before it.

    ``previous`` is None for the earliest snapshot; every change is then 0.
    """

    snapshot: SnapshotRef
    previous: SnapshotRef | None
    total_value: Decimal
    previous_total: Decimal
    total_change: Decimal
    total_change_percent: Decimal
    asset_count: int
    categories: list[CategorySnapshotChange]


__all__ = [
    "CategoryTotal",
    "TrendPoint",
    "DashboardOverview",
    "SnapshotRef",
    "AssetChange",
    "PriceChangeSummary",
    "PriceChangeStatistics",
    "QuickRange",
    "PriceChangeAnalysis",
    "HistoryPoint",
    "PeriodProfitLoss",
    "CategoryProfitLoss",
    "HistoryTrend",
    "CategoryForecast",
    "ForecastPoint",
    "Forecast",
    "CashflowSummary",
    "TargetAllocation",
    "TargetAllocationReport",
    "Holding",
    "HoldingGroup",
    "CategorySnapshotChange",
    "SnapshotSummary",
]
