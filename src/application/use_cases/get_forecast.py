"""Use case projecting category values one month ahead."""

from collections.abc import Callable
from datetime import date
from decimal import Decimal

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.models import Forecast
from src.domain.services.forecast import build_forecast
from src.domain.services.valuation import category_totals
from src.infrastructure.logging.logger import get_app_logger


class GetForecastUseCase:
    """Apply the static expected-change table to the latest snapshot."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort,
        logger=None,
        today_provider: Callable[[], date] | None = None,
    ) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._today = today_provider or date.today

    def execute(self) -> Forecast:
        snapshots = self._repository.list_snapshots()
        current: dict[str, Decimal] = {}
        if snapshots:
            latest = max(snapshots, key=lambda snapshot: snapshot.snapshot_date)
            totals = category_totals(
                self._repository.list_asset_values(snapshot_id=latest.id),
                latest.id,
            )
            for category in self._repository.list_categories():
                current[category.name] = totals.get(category.id, Decimal("0"))
        forecast = build_forecast(current, today=self._today())
        self._logger.debug(
            f"Forecast built for {len(forecast.categories)} categories"
        )
        return forecast


__all__ = ["GetForecastUseCase"]
