"""Row classification for the portfolio data sheet."""

from typing import Any

from src.domain.constants import (
    CATEGORY_NAMES,
    SKIP_MARKERS,
    SUBTOTAL_MARKER,
    TOTAL_MARKER,
)
from src.domain.models.workbook import (
    AssetRow,
    CategoryHeader,
    ParsedRow,
    SkipRow,
    TotalRow,
)
from src.domain.services.header_layout import cell_text

# Data rows start on the second sheet row.
FIRST_DATA_ROW = 2


def resolve_category(cursor: str | None, first_cell: Any) -> str | None:
    """Return the category in effect after reading ``first_cell``.

    A recognized category label moves the cursor; anything else, including
    unknown labels, keeps the current one.
    """
    text = cell_text(first_cell)
    if text in CATEGORY_NAMES:
        return text
    return cursor


def classify_rows(data_rows: list[list[Any]]) -> list[ParsedRow]:
    """Classify data rows top to bottom into a closed set of row kinds.

    A category label followed by an asset name on the same row yields a
    ``CategoryHeader`` and then an ``AssetRow``.

    Args:
        data_rows: Rows below the header row.

    Returns:
        list[ParsedRow]: Classified rows in sheet order.
    """
    parsed: list[ParsedRow] = []
    cursor: str | None = None
    for offset, row in enumerate(data_rows or []):
        row_number = offset + FIRST_DATA_ROW
        cells = list(row or [])
        first = cell_text(cells[0]) if cells else ""
        second = cell_text(cells[1]) if len(cells) > 1 else ""

        if first == TOTAL_MARKER:
            parsed.append(TotalRow(row_number=row_number, cells=cells))
            continue
        if any(marker in first for marker in SKIP_MARKERS):
            parsed.append(SkipRow(row_number=row_number, reason="comparison"))
            continue
        if not first and not second:
            parsed.append(SkipRow(row_number=row_number, reason="empty"))
            continue

        cursor = resolve_category(cursor, first)
        if first in CATEGORY_NAMES:
            parsed.append(CategoryHeader(row_number=row_number, name=first))
            if not second:
                continue

        if cursor is None:
            parsed.append(SkipRow(row_number=row_number, reason="no category"))
        elif not second:
            parsed.append(SkipRow(row_number=row_number, reason="no asset name"))
        elif second == SUBTOTAL_MARKER:
            parsed.append(SkipRow(row_number=row_number, reason="subtotal"))
        else:
            parsed.append(
                AssetRow(
                    row_number=row_number,
                    category=cursor,
                    name=second,
                    cells=cells,
                )
            )
    return parsed


__all__ = ["FIRST_DATA_ROW", "classify_rows", "resolve_category"]
