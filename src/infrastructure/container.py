"""Composition root for wiring infrastructure adapters."""

import os
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url

from src.application.ports.cash_flow_repository import CashFlowRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.exchange_rate_repository import (
    ExchangeRateRepositoryPort,
)
from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.application.use_cases.export_workbook import ExportWorkbookUseCase
from src.application.use_cases.import_workbook import ImportWorkbookUseCase
from src.application.use_cases.live_exchange_rates import (
    ExchangeRateCache,
    LiveExchangeRateService,
)
from src.application.use_cases.manage_exchange_rates import (
    ManageExchangeRatesUseCase,
)
from src.infrastructure.cash_flow_repository import SqlAlchemyCashFlowRepository
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter, _create_engine
from src.infrastructure.exchange_rate_api import ExchangeRateApiClient
from src.infrastructure.exchange_rate_repository import (
    SqlAlchemyExchangeRateRepository,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.portfolio_repository import SqlAlchemyPortfolioRepository
from src.infrastructure.schema import ensure_schema
from src.infrastructure.settings import PortfolioSettings
from src.infrastructure.workbook_reader import OpenpyxlWorkbookReader
from src.infrastructure.workbook_writer import OpenpyxlWorkbookWriter

_default_engines: dict[str, Engine] = {}


def build_settings() -> PortfolioSettings:
    """Return settings sourced from the environment."""
    return PortfolioSettings.from_env()


def build_database_adapter(
    settings: PortfolioSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance.

    ``PORTFOLIO_DB_URL`` is honored through the shared engine singleton;
    without it the SQLite file under ``data/`` is used.
    """
    resolved = settings or build_settings()
    if os.getenv("PORTFOLIO_DB_URL"):
        return SqlAlchemyDatabaseEngineAdapter()
    engine = _default_engines.get(resolved.db_url)
    if engine is None:
        database = make_url(resolved.db_url).database
        if database:
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        engine = _create_engine(resolved.db_url)
        _default_engines[resolved.db_url] = engine
        get_app_logger().info(f"Using default database {resolved.db_url}")
    return SqlAlchemyDatabaseEngineAdapter(engine=engine)


def initialize_database(db_port: DatabaseEnginePort | None = None) -> None:
    """Create missing tables."""
    resolved_db = db_port or build_database_adapter()
    ensure_schema(resolved_db.get_portfolio_engine())


def build_portfolio_repository(
    db_port: DatabaseEnginePort | None = None,
) -> PortfolioRepositoryPort:
    """Return the portfolio records repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyPortfolioRepository(resolved_db)


def build_exchange_rate_repository(
    db_port: DatabaseEnginePort | None = None,
) -> ExchangeRateRepositoryPort:
    """Return the exchange-rate repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyExchangeRateRepository(resolved_db)


def build_cash_flow_repository(
    db_port: DatabaseEnginePort | None = None,
) -> CashFlowRepositoryPort:
    """Return the cash flow repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyCashFlowRepository(resolved_db)


def build_live_rate_service(
    settings: PortfolioSettings | None = None,
    cache: ExchangeRateCache | None = None,
) -> LiveExchangeRateService:
    """Return the live rate service; pass ``cache`` to share it."""
    resolved = settings or build_settings()
    client = ExchangeRateApiClient(
        url_template=resolved.rates_api_url,
        timeout=resolved.rates_api_timeout,
    )
    return LiveExchangeRateService(
        client,
        cache=cache or ExchangeRateCache(resolved.rate_cache_ttl_seconds),
        logger=get_app_logger(),
    )


def build_import_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: PortfolioSettings | None = None,
) -> ImportWorkbookUseCase:
    """Return the import use case configured from settings."""
    resolved = settings or build_settings()
    resolved_db = db_port or build_database_adapter(resolved)
    return ImportWorkbookUseCase(
        build_portfolio_repository(resolved_db),
        build_exchange_rate_repository(resolved_db),
        OpenpyxlWorkbookReader(),
        logger=get_app_logger(),
        transactional=resolved.import_transactional,
    )


def build_export_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> ExportWorkbookUseCase:
    """Return the export use case."""
    resolved_db = db_port or build_database_adapter()
    return ExportWorkbookUseCase(
        build_portfolio_repository(resolved_db),
        build_exchange_rate_repository(resolved_db),
        OpenpyxlWorkbookWriter(),
        logger=get_app_logger(),
    )


def build_exchange_rates_use_case(
    db_port: DatabaseEnginePort | None = None,
    live_service: LiveExchangeRateService | None = None,
) -> ManageExchangeRatesUseCase:
    """Return the exchange-rate maintenance use case."""
    resolved_db = db_port or build_database_adapter()
    return ManageExchangeRatesUseCase(
        build_exchange_rate_repository(resolved_db),
        live_service=live_service,
        logger=get_app_logger(),
    )


__all__ = [
    "build_settings",
    "build_database_adapter",
    "initialize_database",
    "build_portfolio_repository",
    "build_exchange_rate_repository",
    "build_cash_flow_repository",
    "build_live_rate_service",
    "build_import_use_case",
    "build_export_use_case",
    "build_exchange_rates_use_case",
]
