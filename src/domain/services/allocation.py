"""Target allocation and snapshot-to-snapshot comparison."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from src.domain.models import (
    AssetValue,
    Category,
    CategorySnapshotChange,
    SnapshotRef,
    SnapshotSummary,
    TargetAllocation,
)
from src.domain.services.valuation import (
    allocation_ratios,
    category_totals,
    change_percent,
    round_percent,
)

_HUNDRED = Decimal("100")


def target_percent(category: Category) -> Decimal:
    """Stored target of a category in percent (0 when unset)."""
    if category.suggested_ratio is None:
        return Decimal("0")
    return category.suggested_ratio * _HUNDRED


def target_sum(categories: Iterable[Category]) -> Decimal:
    return sum((target_percent(category) for category in categories), Decimal("0"))


def target_allocations(
    values: Iterable[AssetValue],
    categories: Sequence[Category],
    snapshot_id: int,
) -> list[TargetAllocation]:
    """Compare each category's share at a snapshot with its target.

    Categories with neither a value nor a target are left out.

    Args:
        values: Asset values joined with their assets.
        categories: Categories in display order.
        snapshot_id: Snapshot to measure.

    Returns:
        list[TargetAllocation]: One entry per category, in category order.
    """
    totals = category_totals(values, snapshot_id)
    ratios = allocation_ratios(totals)
    allocations = []
    for category in categories:
        actual = ratios.get(category.id, Decimal("0")) * _HUNDRED
        target = target_percent(category)
        if actual <= 0 and target <= 0:
            continue
        allocations.append(
            TargetAllocation(
                category_id=category.id,
                name=category.name,
                value=totals.get(category.id, Decimal("0")),
                actual_percent=round_percent(actual),
                target_percent=round_percent(target),
                deviation=round_percent(actual - target),
            )
        )
    return allocations


def compare_snapshots(
    values: Sequence[AssetValue],
    categories: Sequence[Category],
    current: SnapshotRef,
    previous: SnapshotRef | None,
) -> SnapshotSummary:
    """Summarize ``current`` against ``previous`` per category.

    A category that is new at ``current`` reports a 100% change. Categories
    without value at ``current`` are omitted.
    """
    current_totals = category_totals(values, current.id)
    previous_totals = (
        category_totals(values, previous.id) if previous is not None else {}
    )
    total = sum(current_totals.values(), Decimal("0"))
    previous_total = (
        sum(previous_totals.values(), Decimal("0"))
        if previous is not None
        else total
    )
    ratios = allocation_ratios(current_totals)

    changes = []
    for category in categories:
        value = current_totals.get(category.id, Decimal("0"))
        if value <= 0:
            continue
        if previous is None:
            before = value
        else:
            before = previous_totals.get(category.id, Decimal("0"))
        change = value - before
        if before > 0:
            percent = change / before * _HUNDRED
        else:
            percent = _HUNDRED
        changes.append(
            CategorySnapshotChange(
                name=category.name,
                value=value,
                ratio=ratios[category.id],
                previous_value=before,
                change=change,
                change_percent=round_percent(percent),
            )
        )

    total_change = total - previous_total
    total_percent = (
        change_percent(previous_total, total)
        if previous_total > 0
        else Decimal("0")
    )
    return SnapshotSummary(
        snapshot=current,
        previous=previous,
        total_value=total,
        previous_total=previous_total,
        total_change=total_change,
        total_change_percent=round_percent(total_percent),
        asset_count=sum(1 for value in values if value.snapshot_id == current.id),
        categories=changes,
    )


__all__ = [
    "target_percent",
    "target_sum",
    "target_allocations",
    "compare_snapshots",
]
