"""Use case summarizing one snapshot against the previous one."""

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.errors import ValidationError
from src.domain.models import SnapshotRef, SnapshotSummary
from src.domain.services.allocation import compare_snapshots
from src.infrastructure.logging.logger import get_app_logger


class GetSnapshotSummaryUseCase:
    def __init__(self, repository: PortfolioRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, snapshot_id: int | None = None) -> SnapshotSummary | None:
        """Summarize a snapshot (the latest by default).

        Returns:
            SnapshotSummary | None: None when nothing has been imported.

        Raises:
            ValidationError: If ``snapshot_id`` is unknown.
        """
        refs = [
            SnapshotRef(
                id=snapshot.id,
                label=snapshot.label,
                snapshot_date=snapshot.snapshot_date,
            )
            for snapshot in self._repository.list_snapshots()
        ]
        if not refs:
            return None
        if snapshot_id is None:
            index = len(refs) - 1
        else:
            ids = [ref.id for ref in refs]
            if snapshot_id not in ids:
                raise ValidationError(f"Unknown snapshot id: {snapshot_id}")
            index = ids.index(snapshot_id)
        previous = refs[index - 1] if index > 0 else None

        summary = compare_snapshots(
            self._repository.list_asset_values(),
            self._repository.list_categories(),
            refs[index],
            previous,
        )
        self._logger.info(
            f"Snapshot {summary.snapshot.label}: total {summary.total_value}, "
            f"change {summary.total_change_percent}%"
        )
        return summary


__all__ = ["GetSnapshotSummaryUseCase"]
