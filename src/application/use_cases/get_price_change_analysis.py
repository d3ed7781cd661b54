"""Use case comparing asset values between two snapshots."""

from dataclasses import replace

from src.application.ports.exchange_rate_repository import (
    ExchangeRateRepositoryPort,
)
from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.constants import BASE_CURRENCY, DISPLAY_CURRENCIES
from src.domain.errors import ValidationError
from src.domain.models import PriceChangeAnalysis, QuickRange, SnapshotRef
from src.domain.services.currency import (
    current_rate_table,
    display_currency_options,
)
from src.domain.services.valuation import (
    analyze_price_change,
    build_quick_ranges,
)
from src.infrastructure.logging.logger import get_app_logger


class GetPriceChangeAnalysisUseCase:
    """Per-asset price change analysis in a display currency."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort,
        rate_repository: ExchangeRateRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port reading portfolio records.
            rate_repository: Port reading the current rate table.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._rate_repository = rate_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        start_snapshot_id: int,
        end_snapshot_id: int,
        currency: str = BASE_CURRENCY,
        category_filter: str | None = None,
    ) -> PriceChangeAnalysis:
        """Compare two snapshots.

        Args:
            start_snapshot_id: Earlier snapshot id.
            end_snapshot_id: Later snapshot id.
            currency: Display currency code.
            category_filter: Optional category name.

        Returns:
            PriceChangeAnalysis: Analysis with the preset quick ranges.

        Raises:
            ValidationError: If a snapshot id is unknown or the currency
                is unsupported or has no stored rate.
        """
        currency = (currency or BASE_CURRENCY).upper()
        if currency not in DISPLAY_CURRENCIES:
            raise ValidationError(f"Unsupported display currency: {currency}")

        refs = self._snapshot_refs()
        by_id = {ref.id: ref for ref in refs}
        for snapshot_id in (start_snapshot_id, end_snapshot_id):
            if snapshot_id not in by_id:
                raise ValidationError(f"Unknown snapshot id: {snapshot_id}")

        rates = current_rate_table(self._rate_repository.list_rates())
        if currency not in display_currency_options(rates):
            raise ValidationError(f"No exchange rate stored for {currency}")

        names = {
            category.id: category.name
            for category in self._repository.list_categories()
        }
        analysis = analyze_price_change(
            by_id[start_snapshot_id],
            by_id[end_snapshot_id],
            self._repository.list_asset_values(),
            names,
            currency=currency,
            rates=rates,
            category_filter=category_filter or None,
        )
        self._logger.info(
            f"Price change {by_id[start_snapshot_id].label} -> "
            f"{by_id[end_snapshot_id].label}: "
            f"{len(analysis.asset_changes)} assets in {currency}"
        )
        return replace(analysis, quick_ranges=build_quick_ranges(refs))

    def quick_ranges(self) -> list[QuickRange]:
        return build_quick_ranges(self._snapshot_refs())

    def _snapshot_refs(self) -> list[SnapshotRef]:
        return [
            SnapshotRef(
                id=snapshot.id,
                label=snapshot.label,
                snapshot_date=snapshot.snapshot_date,
            )
            for snapshot in self._repository.list_snapshots()
        ]


__all__ = ["GetPriceChangeAnalysisUseCase"]
