"""Tests for data row classification."""

from src.domain.models.workbook import AssetRow, CategoryHeader, SkipRow, TotalRow
from src.domain.services.classification import classify_rows, resolve_category


def test_total_row_is_tracked_separately() -> None:
    rows = classify_rows([["美股", "QQQ", 1], ["总计", "", 100]])

    assert isinstance(rows[-1], TotalRow)
    assert rows[-1].row_number == 3
    assert rows[-1].cells == ["总计", "", 100]
    assert [row for row in rows if isinstance(row, AssetRow)][0].name == "QQQ"


def test_category_header_with_empty_asset_cell() -> None:
    """A bare category row moves the cursor without creating an asset."""
    rows = classify_rows([["黄金", "", None], ["", "伦敦金", 500]])

    assert rows[0] == CategoryHeader(row_number=2, name="黄金")
    assert isinstance(rows[1], AssetRow)
    assert rows[1].category == "黄金"
    assert rows[1].name == "伦敦金"
    assert len(rows) == 2


def test_category_and_asset_on_same_row() -> None:
    rows = classify_rows([["美股", "QQQ", 1]])

    assert isinstance(rows[0], CategoryHeader)
    assert isinstance(rows[1], AssetRow)
    assert rows[1].row_number == rows[0].row_number


def test_skip_rows_and_reasons() -> None:
    rows = classify_rows(
        [
            ["", "孤儿", 1],
            ["与上月对比", "", 1],
            ["标的里的说明", "x", 1],
            ["", "", 1],
            ["现金", ""],
            ["", "合计", 9],
            ["未知大类", "", 1],
        ]
    )

    reasons = [row.reason for row in rows if isinstance(row, SkipRow)]
    assert reasons == [
        "no category",
        "comparison",
        "comparison",
        "empty",
        "subtotal",
        "no asset name",
    ]


def test_unknown_label_keeps_current_category() -> None:
    rows = classify_rows([["美股", ""], ["其它", "SPY", 1]])

    assert rows[1].category == "美股"
    assert rows[1].name == "SPY"


def test_resolve_category_moves_cursor_only_for_known_names() -> None:
    assert resolve_category(None, "日股") == "日股"
    assert resolve_category("日股", "") == "日股"
    assert resolve_category("日股", "不认识") == "日股"
    assert resolve_category(None, None) is None


def test_numeric_asset_names_are_text() -> None:
    rows = classify_rows([["A+H股", 600519.0, 1]])

    assert rows[1].name == "600519"
