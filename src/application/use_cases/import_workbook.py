"""Use case for the full-replace workbook import.

The import reads the uploaded workbook, plans every record in memory and
then rebuilds the portfolio:

* all categories, assets, snapshots, values and summaries are cleared;
* records are rebuilt row by row with independent upserts, carrying over
  the allocation targets of categories that reappear;
* default USD and HKD rates are written to the live rate table.

Without transactional mode a failure after the clear step leaves the store
partially rebuilt. Re-running the import repairs it.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.ports.exchange_rate_repository import (
    ExchangeRateRepositoryPort,
)
from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.application.ports.workbook import WorkbookReaderPort
from src.domain.constants import (
    IMPORT_EMPTY_MESSAGE,
    IMPORT_FAILURE_PREFIX,
    IMPORT_SUCCESS_MESSAGE,
    POST_IMPORT_RATES,
)
from src.domain.errors import ParseError, PartialImportFailure
from src.domain.models import ImportPlan
from src.domain.services.import_plan import build_import_plan
from src.domain.services.valuation import reconcile_total, summary_changes
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ImportResult:
    """Outcome of an import run.

    Attributes:
        success: Whether the import completed.
        message: User-facing message (``导入失败: <error>`` on failure).
        snapshot_count: Snapshots written.
        asset_count: Assets written.
        value_count: Asset values written.
        summary_count: Portfolio summaries written.
    """

    success: bool
    message: str
    snapshot_count: int = 0
    asset_count: int = 0
    value_count: int = 0
    summary_count: int = 0


class ImportWorkbookUseCase:
    """Replace the stored portfolio with the content of a workbook."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort,
        rate_repository: ExchangeRateRepositoryPort,
        reader: WorkbookReaderPort,
        logger=None,
        today_provider: Callable[[], date] | None = None,
        transactional: bool = False,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port storing portfolio records.
            rate_repository: Port storing live exchange rates.
            reader: Port decoding workbook bytes.
            logger: Optional logger compatible with logging.Logger-like API.
            today_provider: Clock used for snapshot years and rate dates.
            transactional: Wrap clear and rebuild in one transaction.
        """
        self._repository = repository
        self._rate_repository = rate_repository
        self._reader = reader
        self._logger = logger or get_app_logger()
        self._today = today_provider or date.today
        self._transactional = transactional

    def execute(self, payload: bytes) -> ImportResult:
        """Import a workbook.

        Args:
            payload: Raw workbook bytes.

        Returns:
            ImportResult: Success flag, message and counts.
        """
        try:
            workbook = self._reader.read(payload)
        except ParseError as exc:
            self._logger.error(f"Workbook could not be read: {exc}")
            return ImportResult(
                success=False,
                message=f"{IMPORT_FAILURE_PREFIX}: {exc}",
            )

        today = self._today()
        try:
            plan = build_import_plan(workbook, today=today, logger=self._logger)
            if not plan.is_empty:
                self._check_totals(plan)
        except Exception as exc:
            self._logger.error(f"Workbook could not be planned: {exc}")
            return ImportResult(
                success=False,
                message=f"{IMPORT_FAILURE_PREFIX}: {exc}",
            )
        if plan.is_empty:
            self._logger.warning("Workbook has no snapshot columns; nothing imported")
            return ImportResult(success=True, message=IMPORT_EMPTY_MESSAGE)

        try:
            if self._transactional:
                with self._repository.transaction() as repository:
                    summary_count = self._rebuild(repository, plan)
            else:
                summary_count = self._rebuild(self._repository, plan)
            self._write_default_rates(today)
        except Exception as exc:
            failure = PartialImportFailure(str(exc))
            self._logger.error(
                f"Import failed after clearing data "
                f"(transactional={self._transactional}): {failure}"
            )
            return ImportResult(
                success=False,
                message=f"{IMPORT_FAILURE_PREFIX}: {failure}",
            )

        self._logger.info(
            f"Imported {len(plan.snapshots)} snapshots, "
            f"{len(plan.categories)} categories, {len(plan.assets)} assets, "
            f"{plan.value_count} values, {summary_count} summaries"
        )
        return ImportResult(
            success=True,
            message=IMPORT_SUCCESS_MESSAGE,
            snapshot_count=len(plan.snapshots),
            asset_count=len(plan.assets),
            value_count=plan.value_count,
            summary_count=summary_count,
        )

    def _rebuild(
        self,
        repository: PortfolioRepositoryPort,
        plan: ImportPlan,
    ) -> int:
        """Clear the store and write the planned records.

        Allocation targets of categories that are imported again are kept.

        Returns:
            int: Number of summaries written.
        """
        targets = {
            category.name: category.suggested_ratio
            for category in repository.list_categories()
            if category.suggested_ratio is not None
        }
        repository.clear_portfolio()

        snapshot_ids = {
            snapshot.label: repository.upsert_snapshot(
                snapshot.label,
                snapshot.snapshot_date,
            )
            for snapshot in plan.snapshots
        }
        category_ids = {
            name: repository.upsert_category(name, sort_order)
            for sort_order, name in enumerate(plan.categories)
        }
        for name, ratio in targets.items():
            if name in category_ids:
                repository.set_category_ratio(category_ids[name], ratio)

        for asset in plan.assets:
            asset_id = repository.upsert_asset(
                category_ids[asset.category],
                asset.name,
                asset.currency,
                asset.sort_order,
            )
            for value in asset.values:
                repository.upsert_asset_value(
                    asset_id,
                    snapshot_ids[value.label],
                    value.original_value,
                    value.cny_value,
                    change_from_previous=value.change_from_previous,
                    current_ratio=value.current_ratio,
                )

        dates = {snapshot.label: snapshot.snapshot_date for snapshot in plan.snapshots}
        totals = sorted(plan.totals, key=lambda total: dates[total.label])
        changes = summary_changes([total.total_value for total in totals])
        for total, (previous, two_previous) in zip(totals, changes):
            repository.upsert_summary(
                snapshot_ids[total.label],
                total.total_value,
                change_from_previous=previous,
                change_from_two_previous=two_previous,
            )
        return len(totals)

    def _write_default_rates(self, today: date) -> None:
        for currency, rate in POST_IMPORT_RATES.items():
            self._rate_repository.upsert_rate(currency, rate, today)

    def _check_totals(self, plan: ImportPlan) -> None:
        derived: dict[str, Decimal] = {}
        for asset in plan.assets:
            for value in asset.values:
                derived[value.label] = (
                    derived.get(value.label, Decimal("0")) + value.cny_value
                )
        for total in plan.totals:
            value = derived.get(total.label, Decimal("0"))
            if not reconcile_total(value, total.total_value):
                self._logger.warning(
                    f"Snapshot {total.label}: asset values sum to {value}, "
                    f"总计 row says {total.total_value}"
                )


__all__ = ["ImportWorkbookUseCase", "ImportResult"]
