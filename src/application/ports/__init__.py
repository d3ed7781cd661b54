"""Application ports package."""

from .cash_flow_repository import CashFlowRepositoryPort
from .database import DatabaseEnginePort
from .exchange_rate_repository import ExchangeRateRepositoryPort
from .portfolio_repository import PortfolioRepositoryPort
from .rates_provider import RatesProviderPort
from .workbook import WorkbookReaderPort, WorkbookWriterPort

__all__ = [
    "CashFlowRepositoryPort",
    "DatabaseEnginePort",
    "ExchangeRateRepositoryPort",
    "PortfolioRepositoryPort",
    "RatesProviderPort",
    "WorkbookReaderPort",
    "WorkbookWriterPort",
]
