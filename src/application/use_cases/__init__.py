"""Application use cases package."""

from .export_workbook import ExportResult, ExportWorkbookUseCase
from .get_dashboard_overview import GetDashboardOverviewUseCase
from .get_forecast import GetForecastUseCase
from .get_holdings import GetHoldingsUseCase
from .get_history_trend import GetHistoryTrendUseCase
from .get_portfolio_records import GetPortfolioRecordsUseCase
from .get_price_change_analysis import GetPriceChangeAnalysisUseCase
from .get_snapshot_summary import GetSnapshotSummaryUseCase
from .import_workbook import ImportResult, ImportWorkbookUseCase
from .live_exchange_rates import ExchangeRateCache, LiveExchangeRateService
from .manage_allocation_targets import ManageAllocationTargetsUseCase
from .manage_assets import ManageAssetsUseCase
from .manage_cash_flows import ManageCashFlowsUseCase
from .manage_exchange_rates import ManageExchangeRatesUseCase

__all__ = [
    "ExchangeRateCache",
    "ExportResult",
    "ExportWorkbookUseCase",
    "GetDashboardOverviewUseCase",
    "GetForecastUseCase",
    "GetHoldingsUseCase",
    "GetHistoryTrendUseCase",
    "GetPortfolioRecordsUseCase",
    "GetPriceChangeAnalysisUseCase",
    "GetSnapshotSummaryUseCase",
    "ImportResult",
    "ImportWorkbookUseCase",
    "LiveExchangeRateService",
    "ManageAllocationTargetsUseCase",
    "ManageAssetsUseCase",
    "ManageCashFlowsUseCase",
    "ManageExchangeRatesUseCase",
]
