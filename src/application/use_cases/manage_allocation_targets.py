"""Use case for category allocation targets.

Targets are stored per category as a fraction in ``suggested_ratio`` and
handled in percent everywhere else.
"""

from collections.abc import Mapping
from decimal import Decimal

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.constants import TARGET_SUM_TOLERANCE
from src.domain.errors import ValidationError
from src.domain.models import Category, TargetAllocationReport
from src.domain.services.allocation import target_allocations, target_sum
from src.domain.services.valuation import portfolio_total
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import parse_decimal

_HUNDRED = Decimal("100")


class ManageAllocationTargetsUseCase:
    """Compare actual allocation with targets and maintain the targets."""

    def __init__(self, repository: PortfolioRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            repository: Port reading and writing portfolio records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def report(self) -> TargetAllocationReport:
        """Actual against target allocation at the latest snapshot.

        Without snapshots the report lists the stored targets with an
        actual share of 0.
        """
        categories = self._repository.list_categories()
        snapshots = self._repository.list_snapshots()
        if snapshots:
            latest = snapshots[-1]
            values = self._repository.list_asset_values(snapshot_id=latest.id)
            label, snapshot_id = latest.label, latest.id
            total = portfolio_total(values, latest.id)
        else:
            values, label, snapshot_id, total = [], "", 0, Decimal("0")
        return TargetAllocationReport(
            snapshot_label=label,
            total_value=total,
            allocations=target_allocations(values, categories, snapshot_id),
            target_sum=target_sum(categories),
        )

    def set_target(self, category_name: str, percent) -> None:
        """Set or clear (``None`` or ``""``) the target of one category.

        Raises:
            ValidationError: If the category is unknown or the percent is
                not a number between 0 and 100.
        """
        category = self._category(self._repository.list_categories(), category_name)
        ratio = _parse_ratio(category.name, percent)
        self._repository.set_category_ratio(category.id, ratio)
        self._logger.info(f"Target for {category.name} set to {percent}")

    def set_targets(self, percents: Mapping[str, object]) -> None:
        """Replace every target at once.

        Categories missing from ``percents`` lose their target.

        Raises:
            ValidationError: If a category or percent is invalid, or the
                percents do not add up to 100.
        """
        categories = self._repository.list_categories()
        ratios = {
            self._category(categories, name).id: _parse_ratio(name, percent)
            for name, percent in percents.items()
        }
        total = sum(
            (ratio for ratio in ratios.values() if ratio is not None),
            Decimal("0"),
        ) * _HUNDRED
        if abs(total - _HUNDRED) > TARGET_SUM_TOLERANCE:
            raise ValidationError(
                f"目标配置总和必须为100%，当前为{total.normalize():f}%"
            )
        with self._repository.transaction() as repository:
            for category in categories:
                repository.set_category_ratio(category.id, ratios.get(category.id))
        self._logger.info(f"Stored targets for {len(ratios)} categories")

    @staticmethod
    def _category(categories: list[Category], name: str) -> Category:
        cleaned = (name or "").strip()
        for category in categories:
            if category.name == cleaned:
                return category
        raise ValidationError(f"Unknown category: {name!r}")


def _parse_ratio(name: str, percent) -> Decimal | None:
    if percent is None or (isinstance(percent, str) and not percent.strip()):
        return None
    try:
        value = parse_decimal(percent, f"target of {name}")
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    if value < 0 or value > _HUNDRED:
        raise ValidationError(f"Target of {name} must be between 0 and 100")
    return value / _HUNDRED


__all__ = ["ManageAllocationTargetsUseCase"]
