"""Use case computing the dashboard headline figures."""

from decimal import Decimal

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.models import (
    AssetValue,
    CategoryTotal,
    DashboardOverview,
    PortfolioSummary,
    Snapshot,
    TrendPoint,
)
from src.domain.services.valuation import (
    allocation_ratios,
    category_totals,
    compute_roi,
    period_changes,
    portfolio_total,
    reconcile_total,
    round_percent,
)
from src.infrastructure.logging.logger import get_app_logger


class GetDashboardOverviewUseCase:
    """Compute totals, category ROI, allocation and the value trend."""

    def __init__(self, repository: PortfolioRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            repository: Port reading portfolio records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self) -> DashboardOverview:
        """Return the dashboard overview.

        Snapshot totals come from the recorded summary when one exists and
        are re-derived from asset values otherwise.

        Returns:
            DashboardOverview: Headline figures at the latest snapshot.
        """
        snapshots = self._repository.list_snapshots()
        values = self._repository.list_asset_values()
        summaries = {
            summary.snapshot_id: summary
            for summary in self._repository.list_summaries()
        }
        asset_count = len(self._repository.list_assets())

        if not snapshots:
            return DashboardOverview(
                total_value=Decimal("0"),
                latest_snapshot_label="",
                category_totals=[],
                trend_data=[],
                overall_roi=Decimal("0"),
                snapshot_count=0,
                asset_count=asset_count,
            )

        first, latest = snapshots[0], snapshots[-1]
        totals = [
            self._snapshot_total(snapshot, values, summaries)
            for snapshot in snapshots
        ]
        changes = period_changes(totals)
        trend = [
            TrendPoint(
                label=snapshot.label,
                snapshot_date=snapshot.snapshot_date,
                value=total,
                change=change,
            )
            for snapshot, total, change in zip(snapshots, totals, changes)
        ]

        return DashboardOverview(
            total_value=totals[-1],
            latest_snapshot_label=latest.label,
            category_totals=self._category_totals(values, first, latest),
            trend_data=trend,
            overall_roi=round_percent(compute_roi(totals[0], totals[-1])),
            snapshot_count=len(snapshots),
            asset_count=asset_count,
        )

    def _snapshot_total(
        self,
        snapshot: Snapshot,
        values: list[AssetValue],
        summaries: dict[int, PortfolioSummary],
    ) -> Decimal:
        derived = portfolio_total(values, snapshot.id)
        summary = summaries.get(snapshot.id)
        if summary is None:
            return derived
        if not reconcile_total(derived, summary.total_value):
            self._logger.warning(
                f"Snapshot {snapshot.label}: derived total {derived} differs "
                f"from recorded total {summary.total_value}"
            )
        return summary.total_value

    def _category_totals(
        self,
        values: list[AssetValue],
        first: Snapshot,
        latest: Snapshot,
    ) -> list[CategoryTotal]:
        latest_totals = category_totals(values, latest.id)
        first_totals = category_totals(values, first.id)
        positive = {
            category_id: total
            for category_id, total in latest_totals.items()
            if total > 0
        }
        ratios = allocation_ratios(positive)
        names = {
            category.id: category.name
            for category in self._repository.list_categories()
        }
        order = list(names)
        return [
            CategoryTotal(
                name=names.get(category_id, str(category_id)),
                value=total,
                roi=round_percent(
                    compute_roi(
                        first_totals.get(category_id, Decimal("0")),
                        total,
                    )
                ),
                ratio=ratios[category_id],
            )
            for category_id, total in sorted(
                positive.items(),
                key=lambda item: (
                    order.index(item[0]) if item[0] in names else len(order)
                ),
            )
        ]


__all__ = ["GetDashboardOverviewUseCase"]
