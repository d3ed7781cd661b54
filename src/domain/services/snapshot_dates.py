"""Snapshot label to calendar date resolution."""

from datetime import date


def resolve_snapshot_year(month: int, today: date) -> int:
    """Pick the year for an MMDD label relative to the import clock.

    Labels from late in the year seen early in the next year belong to the
    previous year, and early-year labels seen at year end belong to the next
    one. Labels older than a year cannot be told apart from recent ones.
    """
    if month >= 11 and today.month <= 3:
        return today.year - 1
    if month <= 3 and today.month >= 11:
        return today.year + 1
    return today.year


def resolve_snapshot_date(label: str, today: date) -> date | None:
    """Convert an MMDD label to a date, or None when it is not a real day.

    Args:
        label: Four-digit ``MMDD`` snapshot label.
        today: Import-time clock.

    Returns:
        date | None: Resolved snapshot date.
    """
    if len(label) != 4 or not label.isdigit():
        return None
    month = int(label[:2])
    day = int(label[2:])
    try:
        return date(resolve_snapshot_year(month, today), month, day)
    except ValueError:
        return None


__all__ = ["resolve_snapshot_date", "resolve_snapshot_year"]
