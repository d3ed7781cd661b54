"""Use case exporting the stored portfolio as a workbook."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from src.application.ports.exchange_rate_repository import (
    ExchangeRateRepositoryPort,
)
from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.application.ports.workbook import WorkbookWriterPort
from src.domain.services.currency import current_rate_table
from src.domain.services.export_layout import (
    build_data_rows,
    build_rate_rows,
    export_filename,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ExportResult:
    """Exported workbook bytes and the suggested file name."""

    content: bytes
    filename: str


class ExportWorkbookUseCase:
    """Serialize the portfolio in the layout the importer reads."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort,
        rate_repository: ExchangeRateRepositoryPort,
        writer: WorkbookWriterPort,
        logger=None,
        today_provider: Callable[[], date] | None = None,
    ) -> None:
        self._repository = repository
        self._rate_repository = rate_repository
        self._writer = writer
        self._logger = logger or get_app_logger()
        self._today = today_provider or date.today

    def execute(self) -> ExportResult:
        """Build the workbook.

        Returns:
            ExportResult: Workbook bytes and ``portfolio_<date>.xlsx``.
        """
        stored_rates = self._rate_repository.list_rates()
        rates = current_rate_table(stored_rates)
        rate_dates: dict[str, date] = {}
        for rate in stored_rates:
            current = rate_dates.get(rate.from_currency)
            if current is None or rate.effective_date > current:
                rate_dates[rate.from_currency] = rate.effective_date

        data_rows = build_data_rows(
            self._repository.list_categories(),
            self._repository.list_assets(),
            self._repository.list_snapshots(),
            self._repository.list_asset_values(),
            self._repository.list_summaries(),
            rates,
        )
        content = self._writer.write(data_rows, build_rate_rows(rates, rate_dates))
        filename = export_filename(self._today())
        self._logger.info(
            f"Exported {len(data_rows) - 2} asset rows to {filename}"
        )
        return ExportResult(content=content, filename=filename)


__all__ = ["ExportWorkbookUseCase", "ExportResult"]
