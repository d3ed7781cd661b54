"""Domain models package."""

from .finance import (
    AssetChange,
    CashflowSummary,
    CategoryForecast,
    CategoryProfitLoss,
    CategorySnapshotChange,
    CategoryTotal,
    DashboardOverview,
    Forecast,
    ForecastPoint,
    HistoryPoint,
    HistoryTrend,
    Holding,
    HoldingGroup,
    PeriodProfitLoss,
    PriceChangeAnalysis,
    PriceChangeStatistics,
    PriceChangeSummary,
    QuickRange,
    SnapshotRef,
    SnapshotSummary,
    TargetAllocation,
    TargetAllocationReport,
    TrendPoint,
)
from .portfolio import (
    Asset,
    AssetValue,
    CashFlow,
    Category,
    ExchangeRate,
    PortfolioSummary,
    Snapshot,
)
from .workbook import (
    AssetRow,
    CategoryHeader,
    HeaderLayout,
    ImportPlan,
    ParsedRow,
    ParsedWorkbook,
    PlannedAsset,
    PlannedSnapshot,
    PlannedTotal,
    PlannedValue,
    SkipRow,
    SnapshotColumns,
    TotalRow,
)

__all__ = [
    "Asset",
    "AssetValue",
    "CashFlow",
    "Category",
    "ExchangeRate",
    "PortfolioSummary",
    "Snapshot",
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
    "AssetChange",
    "CashflowSummary",
    "CategoryForecast",
    "CategoryProfitLoss",
    "CategoryTotal",
    "DashboardOverview",
    "Forecast",
    "ForecastPoint",
    "HistoryPoint",
    "HistoryTrend",
    "PeriodProfitLoss",
    "PriceChangeAnalysis",
    "PriceChangeStatistics",
    "PriceChangeSummary",
    "QuickRange",
    "SnapshotRef",
    "TrendPoint",
    "TargetAllocation",
    "TargetAllocationReport",
    "Holding",
    "HoldingGroup",
    "CategorySnapshotChange",
    "SnapshotSummary",
]
