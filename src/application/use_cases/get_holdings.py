"""Use case listing holdings per category."""

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.errors import ValidationError
from src.domain.models import Holding, HoldingGroup
from src.infrastructure.logging.logger import get_app_logger

OTHER_CATEGORY = "其他"


class GetHoldingsUseCase:
    """Group the asset values of one snapshot by category."""

    def __init__(self, repository: PortfolioRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        category_id: int | None = None,
        snapshot_id: int | None = None,
        search: str | None = None,
    ) -> list[HoldingGroup]:
        """Return holdings grouped in category order.

        Args:
            category_id: Only list this category.
            snapshot_id: Snapshot to list; defaults to the latest one.
            search: Case-insensitive fragment of the asset or category name.

        Returns:
            list[HoldingGroup]: Non-empty groups, largest holding first.

        Raises:
            ValidationError: If ``snapshot_id`` is unknown.
        """
        snapshots = self._repository.list_snapshots()
        if not snapshots:
            return []
        by_id = {snapshot.id: snapshot for snapshot in snapshots}
        if snapshot_id is None:
            snapshot = snapshots[-1]
        elif snapshot_id in by_id:
            snapshot = by_id[snapshot_id]
        else:
            raise ValidationError(f"Unknown snapshot id: {snapshot_id}")

        categories = self._repository.list_categories()
        names = {category.id: category.name for category in categories}
        currencies = {
            asset.id: asset.currency for asset in self._repository.list_assets()
        }
        needle = (search or "").strip().casefold()

        grouped: dict[str, list[Holding]] = {}
        for value in self._repository.list_asset_values(
            category_id=category_id,
            snapshot_id=snapshot.id,
        ):
            category_name = names.get(value.category_id, OTHER_CATEGORY)
            if needle and needle not in value.asset_name.casefold() and (
                needle not in category_name.casefold()
            ):
                continue
            grouped.setdefault(category_name, []).append(
                Holding(
                    asset_id=value.asset_id,
                    asset_name=value.asset_name,
                    category_name=category_name,
                    currency=currencies.get(value.asset_id, ""),
                    snapshot_label=snapshot.label,
                    snapshot_date=snapshot.snapshot_date,
                    original_value=value.original_value,
                    cny_value=value.cny_value,
                    change_from_previous=value.change_from_previous,
                    current_ratio=value.current_ratio,
                )
            )

        order = [category.name for category in categories] + [OTHER_CATEGORY]
        groups = [
            HoldingGroup(
                category_name=name,
                holdings=sorted(
                    grouped[name],
                    key=lambda item: item.cny_value,
                    reverse=True,
                ),
            )
            for name in order
            if name in grouped
        ]
        self._logger.debug(
            f"Holdings at {snapshot.label}: {len(groups)} categories "
            f"(category_id={category_id}, search={search!r})"
        )
        return groups


__all__ = ["GetHoldingsUseCase", "OTHER_CATEGORY"]
