"""End-to-end import and export against SQLite and real workbooks."""

from datetime import date
from decimal import Decimal
from io import BytesIO
from unittest.mock import MagicMock
import zipfile

import pytest
from openpyxl import Workbook, load_workbook
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from src.application.use_cases.export_workbook import ExportWorkbookUseCase
from src.application.use_cases.import_workbook import ImportWorkbookUseCase
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.exchange_rate_repository import (
    SqlAlchemyExchangeRateRepository,
)
from src.infrastructure.portfolio_repository import SqlAlchemyPortfolioRepository
from src.infrastructure.schema import ensure_schema
from src.infrastructure.workbook_reader import OpenpyxlWorkbookReader
from src.infrastructure.workbook_writer import OpenpyxlWorkbookWriter

TODAY = date(2024, 12, 1)


@pytest.fixture()
def stores():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    ensure_schema(engine)
    adapter = SqlAlchemyDatabaseEngineAdapter(engine=engine)
    yield (
        SqlAlchemyPortfolioRepository(adapter),
        SqlAlchemyExchangeRateRepository(adapter),
    )
    engine.dispose()


def _workbook_bytes(rows, rate_rows=None) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    if rate_rows is not None:
        rates = workbook.create_sheet("汇率")
        for row in rate_rows:
            rates.append(row)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def _import(stores, payload, transactional=False):
    repository, rate_repository = stores
    return ImportWorkbookUseCase(
        repository,
        rate_repository,
        OpenpyxlWorkbookReader(logger=MagicMock()),
        logger=MagicMock(),
        today_provider=lambda: TODAY,
        transactional=transactional,
    ).execute(payload)


def _export(stores):
    repository, rate_repository = stores
    return ExportWorkbookUseCase(
        repository,
        rate_repository,
        OpenpyxlWorkbookWriter(),
        logger=MagicMock(),
        today_provider=lambda: TODAY,
    ).execute()


def _state(repository):
    names = {category.id: category.name for category in repository.list_categories()}
    assets = {asset.id: asset for asset in repository.list_assets()}
    labels = {snapshot.id: snapshot.label for snapshot in repository.list_snapshots()}
    return (
        sorted(names.values()),
        sorted((names[a.category_id], a.name, a.currency) for a in assets.values()),
        sorted(labels.values()),
        sorted(
            (
                assets[value.asset_id].name,
                labels[value.snapshot_id],
                value.original_value,
                value.cny_value,
            )
            for value in repository.list_asset_values()
        ),
    )


def test_usd_asset_round_trip(stores) -> None:
    """A USD holding imported at 7.1 exports with the same native amount."""
    payload = _workbook_bytes(
        [
            ["资产大类", "标的", "币种", "1119原始金额"],
            ["美股", "QQQ", "USD", 1000],
        ]
    )

    result = _import(stores, payload)

    assert result.success is True
    repository, rate_repository = stores
    (value,) = repository.list_asset_values()
    assert value.original_value == Decimal("1000")
    assert value.cny_value == Decimal("7100")
    assert rate_repository.latest_rate("USD").rate == Decimal("7.1")
    assert rate_repository.latest_rate("HKD").effective_date == TODAY

    exported = load_workbook(BytesIO(_export(stores).content))
    sheet = exported["投资组合"]
    header = [cell.value for cell in sheet[1]]
    row = [cell.value for cell in sheet[2]]
    assert row[header.index("1119原始金额")] == "1000.00"
    assert row[header.index("1119人民币价值")] == 7100


def test_reimport_is_idempotent(stores) -> None:
    payload = _workbook_bytes(
        [
            ["资产大类", "标的", "币种", "1119原始金额", "1119人民币价值", "1219原始金额"],
            ["美股", "", "", None, None, None],
            ["", "QQQ", "USD", 1000, 7300, 1100],
            ["黄金", "", "", None, None, None],
            ["", "伦敦金", "", 500, None, 520],
            ["", "合计", "", 500, 500, 520],
            ["总计", "", "", None, 7800, 8330],
        ],
        rate_rows=[["货币", "名称", "汇率"], ["USD", "美元", 7.3]],
    )
    repository, _ = stores

    _import(stores, payload)
    first = _state(repository)
    _import(stores, payload, transactional=True)
    second = _state(repository)

    assert first == second
    categories, assets, labels, values = second
    assert categories == ["美股", "黄金"]
    assert ("黄金", "伦敦金", "CNY") in assets
    assert labels == ["1119", "1219"]
    assert ("QQQ", "1119", Decimal("1000"), Decimal("7300")) in values
    assert ("QQQ", "1219", Decimal("1100"), Decimal("8030")) in values
    assert [summary.total_value for summary in repository.list_summaries()] == [
        Decimal("7800"),
        Decimal("8330"),
    ]


def test_export_reimports_to_same_state(stores) -> None:
    payload = _workbook_bytes(
        [
            ["资产大类", "标的", "币种", "1119原始金额", "1119人民币价值", "期末减期初"],
            ["美股", "QQQ", "USD", 1000, 7100, 0],
            ["现金", "余额宝", "CNY", 2500.5, 2500.5, 0],
            ["总计", "", "", "", 9600.5, ""],
        ]
    )
    repository, _ = stores
    _import(stores, payload)
    before = _state(repository)

    result = _import(stores, _export(stores).content)

    assert result.success is True
    assert _state(repository) == before


def test_corrupt_payload_keeps_existing_data(stores) -> None:
    repository, _ = stores
    _import(
        stores,
        _workbook_bytes([["资产大类", "标的", "0901人民币价值"], ["现金", "活期", 10]]),
    )

    result = _import(stores, b"corrupt")

    assert result.success is False
    assert result.message.startswith("导入失败")
    assert [asset.name for asset in repository.list_assets()] == ["活期"]


def _truncate_first_sheet(payload: bytes) -> bytes:
    source = zipfile.ZipFile(BytesIO(payload))
    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w") as target:
        for info in source.infolist():
            content = source.read(info.filename)
            if info.filename == "xl/worksheets/sheet1.xml":
                content = content[: len(content) // 2]
            target.writestr(info, content)
    return buffer.getvalue()


@pytest.mark.parametrize("transactional", [False, True])
def test_truncated_sheet_reports_failure_and_keeps_data(
    stores,
    transactional,
) -> None:
    """A readable archive whose sheet XML is cut short fails cleanly."""
    repository, _ = stores
    _import(
        stores,
        _workbook_bytes([["资产大类", "标的", "0901人民币价值"], ["现金", "活期", 10]]),
    )
    broken = _truncate_first_sheet(
        _workbook_bytes(
            [["资产大类", "标的", "0901人民币价值"]]
            + [["现金", f"账户{index}", index] for index in range(1, 40)]
        )
    )

    result = _import(stores, broken, transactional=transactional)

    assert result.success is False
    assert result.message.startswith("导入失败: ")
    assert [asset.name for asset in repository.list_assets()] == ["活期"]


def test_category_targets_survive_reimport(stores) -> None:
    repository, _ = stores
    payload = _workbook_bytes(
        [
            ["资产大类", "标的", "0901人民币价值"],
            ["现金", "活期", 10],
            ["黄金", "金条", 30],
        ]
    )
    _import(stores, payload)
    ids = {category.name: category.id for category in repository.list_categories()}
    repository.set_category_ratio(ids["黄金"], Decimal("0.75"))

    _import(stores, payload, transactional=True)

    ratios = {
        category.name: category.suggested_ratio
        for category in repository.list_categories()
    }
    assert ratios["黄金"] == Decimal("0.75")
    assert ratios["现金"] is None
