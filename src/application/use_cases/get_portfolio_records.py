"""Use case listing stored portfolio records."""

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.models import (
    Asset,
    AssetValue,
    Category,
    PortfolioSummary,
    Snapshot,
)
from src.infrastructure.logging.logger import get_app_logger


class GetPortfolioRecordsUseCase:
    """Read categories, assets, snapshots, values and summaries."""

    def __init__(self, repository: PortfolioRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def get_categories(self) -> list[Category]:
        return self._repository.list_categories()

    def get_assets(self) -> list[Asset]:
        return self._repository.list_assets()

    def get_snapshots(self) -> list[Snapshot]:
        return self._repository.list_snapshots()

    def get_asset_values(
        self,
        category_id: int | None = None,
        snapshot_id: int | None = None,
    ) -> list[AssetValue]:
        """Return values, optionally filtered by category and snapshot.

        Values whose asset was deleted are not returned.
        """
        values = self._repository.list_asset_values(
            category_id=category_id,
            snapshot_id=snapshot_id,
        )
        self._logger.debug(
            f"Loaded {len(values)} asset values "
            f"(category_id={category_id}, snapshot_id={snapshot_id})"
        )
        return values

    def get_summaries(self) -> list[PortfolioSummary]:
        return self._repository.list_summaries()


__all__ = ["GetPortfolioRecordsUseCase"]
