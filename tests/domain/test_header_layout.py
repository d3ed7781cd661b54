"""Tests for header interpretation."""

from src.domain.services.header_layout import cell_text, interpret_header


def test_new_format_pairs_original_value_and_change_columns() -> None:
    """Original-amount headers pair with the next CNY and change columns."""
    header = [
        "资产大类",
        "标的",
        "币种",
        "1119原始金额",
        "1119人民币价值",
        "期末减期初",
        "1219原始金额",
        "1219人民币价值",
        "期末减期初",
    ]

    layout = interpret_header(header)

    assert layout.currency_index == 2
    assert layout.labels == ["1119", "1219"]
    first, second = layout.snapshots
    assert (first.original_index, first.value_index, first.change_index) == (3, 4, 5)
    assert (second.original_index, second.value_index, second.change_index) == (
        6,
        7,
        8,
    )
    assert first.is_new_format is True
    assert first.total_index == 4


def test_original_column_without_cny_column_is_value_source() -> None:
    """A lone original-amount column doubles as the value source."""
    layout = interpret_header(["资产大类", "标的", "1119原始金额"])

    (columns,) = layout.snapshots
    assert columns.original_index == 2
    assert columns.value_index is None
    assert columns.total_index == 2


def test_pairing_stops_at_change_column() -> None:
    """A CNY column after a change column does not pair backwards."""
    layout = interpret_header(
        ["1119原始金额", "期末减期初", "1119人民币价值"]
    )

    (columns,) = layout.snapshots
    assert columns.value_index is None
    assert columns.change_index == 1


def test_old_format_value_only_columns() -> None:
    """CNY-only headers form old-format snapshots with optional change."""
    layout = interpret_header(
        ["资产大类", "标的", "0901人民币价值", "期末减期初", "1001人民币价值"]
    )

    assert layout.labels == ["0901", "1001"]
    assert layout.snapshots[0].is_new_format is False
    assert layout.snapshots[0].change_index == 3
    assert layout.snapshots[1].change_index is None
    assert layout.currency_index is None


def test_duplicate_labels_keep_first_occurrence_and_ignore_noise() -> None:
    """Duplicate labels are dropped and unmatched headers ignored."""
    layout = interpret_header(
        ["备注", "0301人民币价值", None, "0301人民币价值", "Currency"]
    )

    assert layout.labels == ["0301"]
    assert layout.snapshots[0].value_index == 1
    assert layout.currency_index == 4


def test_columns_need_not_be_chronological() -> None:
    """Sheet order is preserved even when dates go backwards."""
    layout = interpret_header(["1201人民币价值", "0101人民币价值"])

    assert layout.labels == ["1201", "0101"]


def test_empty_header_yields_no_snapshots() -> None:
    assert interpret_header([]).snapshots == []
    assert interpret_header(None).snapshots == []


def test_cell_text_drops_integral_float_suffix() -> None:
    assert cell_text(600519.0) == "600519"
    assert cell_text("  QQQ ") == "QQQ"
    assert cell_text(None) == ""
    assert cell_text(1.5) == "1.5"
