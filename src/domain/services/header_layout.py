"""Header interpretation for the portfolio data sheet.

The header row encodes snapshot labels in column names. Two layouts coexist:

* new format: ``<MMDD>原始金额`` (native amount), optionally followed by
  ``<MMDD>人民币价值`` (CNY value) and ``期末减期初`` (change);
* old format: ``<MMDD>人民币价值`` alone, optionally followed by
  ``期末减期初``.

Interpretation runs in two passes: every cell is classified once, then
pairings are resolved by scanning forward from each value header.
"""

import re
from dataclasses import dataclass
from typing import Any

from src.domain.constants import (
    CHANGE_MARKER,
    CNY_VALUE_SUFFIX,
    CURRENCY_HEADER_CI,
    CURRENCY_HEADERS,
    ORIGINAL_AMOUNT_SUFFIX,
)
from src.domain.models.workbook import HeaderLayout, SnapshotColumns

ORIGINAL_HEADER_RE = re.compile(rf"^(\d{{4}}){ORIGINAL_AMOUNT_SUFFIX}$")
VALUE_HEADER_RE = re.compile(rf"^(\d{{4}}){CNY_VALUE_SUFFIX}$")

_CURRENCY = "currency"
_ORIGINAL = "original"
_VALUE = "value"
_CHANGE = "change"


@dataclass(frozen=True)
class _HeaderCell:
    index: int
    kind: str
    label: str | None = None


def cell_text(value: Any) -> str:
    """Render a workbook cell as trimmed text.

    Integral floats lose their ``.0`` so numeric codes such as ``600519``
    read the same whether the sheet stored them as text or numbers.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def classify_header_cell(index: int, value: Any) -> _HeaderCell | None:
    """Classify one header cell, or return None for unmatched headers."""
    text = cell_text(value)
    if not text:
        return None
    if text in CURRENCY_HEADERS or text.lower() == CURRENCY_HEADER_CI:
        return _HeaderCell(index=index, kind=_CURRENCY)
    match = ORIGINAL_HEADER_RE.match(text)
    if match:
        return _HeaderCell(index=index, kind=_ORIGINAL, label=match.group(1))
    match = VALUE_HEADER_RE.match(text)
    if match:
        return _HeaderCell(index=index, kind=_VALUE, label=match.group(1))
    if CHANGE_MARKER in text:
        return _HeaderCell(index=index, kind=_CHANGE)
    return None


def interpret_header(header_row: list[Any]) -> HeaderLayout:
    """Locate the currency column and every snapshot's value columns.

    Args:
        header_row: First row of the data sheet.

    Returns:
        HeaderLayout: Snapshot columns in sheet order (first occurrence of a
        label wins) and the currency column index, if any.
    """
    cells = [
        cell
        for cell in (
            classify_header_cell(index, value)
            for index, value in enumerate(header_row or [])
        )
        if cell is not None
    ]

    currency_index = next(
        (cell.index for cell in cells if cell.kind == _CURRENCY),
        None,
    )
    labels_with_original = {
        cell.label for cell in cells if cell.kind == _ORIGINAL
    }

    snapshots: list[SnapshotColumns] = []
    seen: set[str] = set()
    consumed: set[int] = set()
    for position, cell in enumerate(cells):
        if cell.label is None or cell.label in seen:
            continue
        if cell.kind == _ORIGINAL:
            value_index = _find_paired_value(cells, position, cell.label)
            if value_index is not None:
                consumed.add(value_index)
            anchor = value_index if value_index is not None else cell.index
            snapshots.append(
                SnapshotColumns(
                    label=cell.label,
                    original_index=cell.index,
                    value_index=value_index,
                    change_index=_find_change(cells, anchor),
                )
            )
            seen.add(cell.label)
        elif cell.kind == _VALUE:
            if cell.index in consumed or cell.label in labels_with_original:
                continue
            snapshots.append(
                SnapshotColumns(
                    label=cell.label,
                    value_index=cell.index,
                    change_index=_find_change(cells, cell.index),
                )
            )
            seen.add(cell.label)

    return HeaderLayout(snapshots=snapshots, currency_index=currency_index)


def _find_paired_value(
    cells: list[_HeaderCell],
    position: int,
    label: str,
) -> int | None:
    for cell in cells[position + 1:]:
        if cell.kind in (_ORIGINAL, _CHANGE):
            return None
        if cell.kind == _VALUE and cell.label == label:
            return cell.index
    return None


def _find_change(cells: list[_HeaderCell], anchor: int) -> int | None:
    for cell in cells:
        if cell.index <= anchor:
            continue
        if cell.kind in (_ORIGINAL, _VALUE):
            return None
        if cell.kind == _CHANGE:
            return cell.index
    return None


__all__ = ["cell_text", "classify_header_cell", "interpret_header"]
