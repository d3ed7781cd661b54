"""Use case building the per-snapshot history and profit/loss tables."""

from decimal import Decimal

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.models import (
    CategoryProfitLoss,
    HistoryPoint,
    HistoryTrend,
    PeriodProfitLoss,
)
from src.domain.services.valuation import (
    category_totals,
    change_percent,
    round_percent,
)
from src.infrastructure.logging.logger import get_app_logger


class GetHistoryTrendUseCase:
    """Category totals per snapshot with period and category profit/loss."""

    def __init__(self, repository: PortfolioRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self) -> HistoryTrend:
        snapshots = self._repository.list_snapshots()
        values = self._repository.list_asset_values()
        names = {
            category.id: category.name
            for category in self._repository.list_categories()
        }

        points: list[HistoryPoint] = []
        for snapshot in snapshots:
            totals = {
                names.get(category_id, str(category_id)): total
                for category_id, total in category_totals(
                    values, snapshot.id
                ).items()
            }
            points.append(
                HistoryPoint(
                    label=snapshot.label,
                    snapshot_date=snapshot.snapshot_date,
                    category_totals=totals,
                    total=sum(totals.values(), Decimal("0")),
                )
            )

        period = [
            PeriodProfitLoss(
                label=current.label,
                previous_label=previous.label,
                change=current.total - previous.total,
                change_percent=round_percent(
                    change_percent(previous.total, current.total)
                ),
            )
            for previous, current in zip(points, points[1:])
        ]

        by_category: list[CategoryProfitLoss] = []
        if points:
            first, last = points[0], points[-1]
            for name in names.values():
                start = first.category_totals.get(name, Decimal("0"))
                end = last.category_totals.get(name, Decimal("0"))
                if start == 0 and end == 0:
                    continue
                by_category.append(
                    CategoryProfitLoss(
                        name=name,
                        value=end,
                        change=end - start,
                        change_percent=round_percent(change_percent(start, end)),
                    )
                )

        self._logger.debug(f"History trend built for {len(points)} snapshots")
        return HistoryTrend(
            points=points,
            period_profit_loss=period,
            category_profit_loss=by_category,
        )


__all__ = ["GetHistoryTrendUseCase"]
