"""Read-side valuation and aggregation over persisted portfolio records."""

from collections.abc import Iterable, Mapping
from datetime import timedelta
from decimal import Decimal
from typing import TypeVar

from src.domain.constants import BASE_CURRENCY, TOTAL_TOLERANCE
from src.domain.models import (
    AssetChange,
    AssetValue,
    PriceChangeAnalysis,
    PriceChangeStatistics,
    PriceChangeSummary,
    QuickRange,
    SnapshotRef,
)
from src.domain.services.currency import to_display_currency

K = TypeVar("K")

_HUNDRED = Decimal("100")
_PERCENT_STEP = Decimal("0.01")


def category_totals(
    values: Iterable[AssetValue],
    snapshot_id: int,
) -> dict[int, Decimal]:
    """Sum CNY values per category id at one snapshot."""
    totals: dict[int, Decimal] = {}
    for value in values:
        if value.snapshot_id != snapshot_id:
            continue
        totals[value.category_id] = (
            totals.get(value.category_id, Decimal("0")) + value.cny_value
        )
    return totals


def portfolio_total(values: Iterable[AssetValue], snapshot_id: int) -> Decimal:
    """Re-derive the grand total at a snapshot from its category totals."""
    return sum(category_totals(values, snapshot_id).values(), Decimal("0"))


def compute_roi(start: Decimal, end: Decimal) -> Decimal:
    """Percentage change from ``start`` to ``end``; 0 for a non-positive base."""
    if start <= 0:
        return Decimal("0")
    return (end - start) / start * _HUNDRED


def change_percent(start: Decimal, end: Decimal) -> Decimal:
    """Percentage change with a zero guard only (negative bases allowed)."""
    if start == 0:
        return Decimal("0")
    return (end - start) / start * _HUNDRED


def round_percent(value: Decimal) -> Decimal:
    return value.quantize(_PERCENT_STEP)


def period_changes(totals: list[Decimal]) -> list[Decimal]:
    """Change of each point from the previous one; the first change is 0."""
    return [
        Decimal("0") if index == 0 else total - totals[index - 1]
        for index, total in enumerate(totals)
    ]


def summary_changes(
    totals: list[Decimal],
) -> list[tuple[Decimal | None, Decimal | None]]:
    """Changes from the previous and the second previous total.

    Args:
        totals: Summary totals ordered by snapshot date.

    Returns:
        list[tuple]: ``(change_from_previous, change_from_two_previous)`` per
        total, ``None`` where no earlier total exists.
    """
    changes: list[tuple[Decimal | None, Decimal | None]] = []
    for index, total in enumerate(totals):
        previous = total - totals[index - 1] if index >= 1 else None
        two_previous = total - totals[index - 2] if index >= 2 else None
        changes.append((previous, two_previous))
    return changes


def allocation_ratios(totals: Mapping[K, Decimal]) -> dict[K, Decimal]:
    """Share of each entry in the sum of all entries (0 when the sum is 0)."""
    grand_total = sum(totals.values(), Decimal("0"))
    if grand_total == 0:
        return {key: Decimal("0") for key in totals}
    return {key: value / grand_total for key, value in totals.items()}


def reconcile_total(
    derived: Decimal,
    summary: Decimal,
    tolerance: Decimal = TOTAL_TOLERANCE,
) -> bool:
    """Return True when a derived total agrees with the recorded one."""
    return abs(derived - summary) <= tolerance


def analyze_price_change(
    start: SnapshotRef,
    end: SnapshotRef,
    values: Iterable[AssetValue],
    category_names: Mapping[int, str],
    *,
    currency: str = BASE_CURRENCY,
    rates: Mapping[str, Decimal] | None = None,
    category_filter: str | None = None,
    top_n: int = 5,
) -> PriceChangeAnalysis:
    """Compare asset values between two arbitrary snapshots.

    Assets present in only one of the snapshots are compared against zero.

    Args:
        start: Earlier snapshot.
        end: Later snapshot.
        values: Asset values (joined with their assets).
        category_names: Category names keyed by id.
        currency: Display currency of the result.
        rates: Current rate table used for display conversion.
        category_filter: Only include assets of this category name.
        top_n: Size of the gainers and losers lists.

    Returns:
        PriceChangeAnalysis: Per-asset changes, rankings and statistics.
    """
    rate_table = dict(rates or {})
    start_values: dict[int, Decimal] = {}
    end_values: dict[int, Decimal] = {}
    names: dict[int, tuple[str, str]] = {}
    for value in values:
        if value.snapshot_id not in (start.id, end.id):
            continue
        category_name = category_names.get(value.category_id, "")
        if category_filter and category_name != category_filter:
            continue
        names[value.asset_id] = (value.asset_name, category_name)
        amount = to_display_currency(value.cny_value, currency, rate_table)
        if value.snapshot_id == start.id:
            start_values[value.asset_id] = amount
        if value.snapshot_id == end.id:
            end_values[value.asset_id] = amount

    changes: list[AssetChange] = []
    for asset_id, (asset_name, category_name) in names.items():
        start_value = start_values.get(asset_id, Decimal("0"))
        end_value = end_values.get(asset_id, Decimal("0"))
        changes.append(
            AssetChange(
                asset_id=asset_id,
                asset_name=asset_name,
                category_name=category_name,
                start_value=start_value,
                end_value=end_value,
                change=end_value - start_value,
                change_percent=round_percent(
                    change_percent(start_value, end_value)
                ),
            )
        )
    changes.sort(key=lambda item: item.change, reverse=True)

    gainers = [item for item in changes if item.change > 0][:top_n]
    losers = sorted(
        (item for item in changes if item.change < 0),
        key=lambda item: item.change,
    )[:top_n]

    start_total = sum(start_values.values(), Decimal("0"))
    end_total = sum(end_values.values(), Decimal("0"))
    average = (
        sum((item.change_percent for item in changes), Decimal("0"))
        / len(changes)
        if changes
        else Decimal("0")
    )
    return PriceChangeAnalysis(
        currency_code=currency,
        summary=PriceChangeSummary(
            start_snapshot=start,
            end_snapshot=end,
            start_total=start_total,
            end_total=end_total,
            total_change=end_total - start_total,
            total_change_percent=round_percent(
                change_percent(start_total, end_total)
            ),
            days_diff=(end.snapshot_date - start.snapshot_date).days,
        ),
        asset_changes=changes,
        top_gainers=gainers,
        top_losers=losers,
        statistics=PriceChangeStatistics(
            up_count=sum(1 for item in changes if item.direction == "up"),
            down_count=sum(1 for item in changes if item.direction == "down"),
            unchanged_count=sum(
                1 for item in changes if item.direction == "unchanged"
            ),
            average_change_percent=round_percent(average),
        ),
    )


QUICK_RANGE_DAYS = (
    ("近一个月", 30),
    ("近三个月", 90),
)


def build_quick_ranges(snapshots: list[SnapshotRef]) -> list[QuickRange]:
    """Preset comparison windows ending at the latest snapshot.

    Each window starts at the closest snapshot on or before its cut-off date,
    or at the first snapshot when none is that old.
    """
    ordered = sorted(snapshots, key=lambda snapshot: snapshot.snapshot_date)
    if len(ordered) < 2:
        return []
    latest = ordered[-1]
    ranges = [
        QuickRange(
            label="最近一次",
            start_snapshot_id=ordered[-2].id,
            end_snapshot_id=latest.id,
        )
    ]
    for label, days in QUICK_RANGE_DAYS:
        cutoff = latest.snapshot_date - timedelta(days=days)
        candidates = [
            snapshot
            for snapshot in ordered[:-1]
            if snapshot.snapshot_date <= cutoff
        ]
        start = candidates[-1] if candidates else ordered[0]
        ranges.append(
            QuickRange(
                label=label,
                start_snapshot_id=start.id,
                end_snapshot_id=latest.id,
            )
        )
    ranges.append(
        QuickRange(
            label="全部",
            start_snapshot_id=ordered[0].id,
            end_snapshot_id=latest.id,
        )
    )
    return ranges


__all__ = [
    "category_totals",
    "portfolio_total",
    "compute_roi",
    "change_percent",
    "round_percent",
    "period_changes",
    "summary_changes",
    "allocation_ratios",
    "reconcile_total",
    "analyze_price_change",
    "build_quick_ranges",
]
