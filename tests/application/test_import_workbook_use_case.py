"""Tests for the ImportWorkbookUseCase."""

from datetime import date
from decimal import Decimal
from itertools import count
from unittest.mock import MagicMock

from src.application.use_cases import import_workbook
from src.application.use_cases.import_workbook import ImportWorkbookUseCase
from src.domain.errors import ParseError
from src.domain.models import Category, ParsedWorkbook

TODAY = date(2024, 12, 1)


def _repository() -> MagicMock:
    ids = count(1)
    repository = MagicMock()
    repository.upsert_snapshot.side_effect = lambda *args: next(ids)
    repository.upsert_category.side_effect = lambda *args: next(ids)
    repository.upsert_asset.side_effect = lambda *args: next(ids)
    return repository


def _use_case(repository, rate_repository, workbook, **kwargs):
    reader = MagicMock()
    if isinstance(workbook, Exception):
        reader.read.side_effect = workbook
    else:
        reader.read.return_value = workbook
    return ImportWorkbookUseCase(
        repository,
        rate_repository,
        reader,
        logger=MagicMock(),
        today_provider=lambda: TODAY,
        **kwargs,
    )


def _workbook() -> ParsedWorkbook:
    return ParsedWorkbook(
        header_row=["资产大类", "标的", "币种", "1119原始金额", "1219原始金额"],
        data_rows=[
            ["美股", "QQQ", "USD", 1000, 1100],
            ["现金", "余额宝", "", 500, 0],
            ["总计", "", "", 7600, 8310],
        ],
    )


def test_execute_clears_then_rebuilds_and_writes_default_rates() -> None:
    repository = _repository()
    rate_repository = MagicMock()

    result = _use_case(repository, rate_repository, _workbook()).execute(b"xlsx")

    assert result.success is True
    assert result.message == "数据导入成功"
    assert (
        result.snapshot_count,
        result.asset_count,
        result.value_count,
        result.summary_count,
    ) == (2, 2, 3, 2)
    calls = [name for name, _, _ in repository.method_calls]
    assert calls.index("clear_portfolio") < calls.index("upsert_snapshot")
    repository.upsert_snapshot.assert_any_call("1119", date(2024, 11, 19))
    value_calls = repository.upsert_asset_value.call_args_list
    assert value_calls[0].args[2:] == (Decimal("1000"), Decimal("7100.0"))
    summary_calls = repository.upsert_summary.call_args_list
    assert summary_calls[1].args[1] == Decimal("8310")
    assert summary_calls[1].kwargs["change_from_previous"] == Decimal("710")
    assert summary_calls[0].kwargs["change_from_previous"] is None
    rate_repository.upsert_rate.assert_any_call("USD", Decimal("7.1"), TODAY)
    rate_repository.upsert_rate.assert_any_call("HKD", Decimal("0.91"), TODAY)


def test_parse_error_returns_failure_without_clearing() -> None:
    repository = _repository()
    rate_repository = MagicMock()

    result = _use_case(
        repository,
        rate_repository,
        ParseError("not a workbook"),
    ).execute(b"garbage")

    assert result.success is False
    assert result.message == "导入失败: not a workbook"
    repository.clear_portfolio.assert_not_called()
    rate_repository.upsert_rate.assert_not_called()


def test_workbook_without_snapshots_is_a_no_op() -> None:
    repository = _repository()

    result = _use_case(
        repository,
        MagicMock(),
        ParsedWorkbook(header_row=["资产大类", "标的"], data_rows=[]),
    ).execute(b"xlsx")

    assert result.success is True
    assert result.snapshot_count == 0
    repository.clear_portfolio.assert_not_called()


def test_failure_after_clear_is_reported_not_rolled_back() -> None:
    repository = _repository()
    repository.upsert_asset_value.side_effect = RuntimeError("disk full")

    result = _use_case(repository, MagicMock(), _workbook()).execute(b"xlsx")

    assert result.success is False
    assert result.message == "导入失败: disk full"
    repository.clear_portfolio.assert_called_once()
    repository.transaction.assert_not_called()


def test_transactional_mode_rebuilds_inside_transaction() -> None:
    repository = _repository()
    scoped = _repository()
    repository.transaction.return_value.__enter__.return_value = scoped

    result = _use_case(
        repository,
        MagicMock(),
        _workbook(),
        transactional=True,
    ).execute(b"xlsx")

    assert result.success is True
    scoped.clear_portfolio.assert_called_once()
    repository.clear_portfolio.assert_not_called()
    assert scoped.upsert_asset_value.call_count == 3


def test_planning_error_returns_failure_without_clearing(monkeypatch) -> None:
    def _boom(*args, **kwargs):
        raise TypeError("unexpected cell type")

    monkeypatch.setattr(import_workbook, "build_import_plan", _boom)
    repository = _repository()

    result = _use_case(repository, MagicMock(), _workbook()).execute(b"xlsx")

    assert result.success is False
    assert result.message == "导入失败: unexpected cell type"
    repository.clear_portfolio.assert_not_called()


def test_targets_of_reimported_categories_are_kept() -> None:
    repository = _repository()
    repository.list_categories.return_value = [
        Category(7, "美股", suggested_ratio=Decimal("0.6")),
        Category(8, "黄金", suggested_ratio=Decimal("0.4")),
        Category(9, "现金"),
    ]
    category_ids = {"美股": 30, "现金": 40}
    repository.upsert_category.side_effect = lambda name, order: category_ids[name]

    result = _use_case(repository, MagicMock(), _workbook()).execute(b"xlsx")

    assert result.success is True
    repository.set_category_ratio.assert_called_once_with(30, Decimal("0.6"))
