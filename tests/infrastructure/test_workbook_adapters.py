"""Tests for the openpyxl workbook reader and writer."""

from io import BytesIO
import zipfile

import pytest
from openpyxl import Workbook, load_workbook

from src.domain.errors import ParseError
from src.infrastructure.workbook_reader import OpenpyxlWorkbookReader
from src.infrastructure.workbook_writer import GUIDE_LINES, OpenpyxlWorkbookWriter


def _xlsx(*sheets: list[list]) -> bytes:
    workbook = Workbook()
    workbook.remove(workbook.active)
    for index, rows in enumerate(sheets):
        sheet = workbook.create_sheet(f"Sheet{index + 1}")
        for row in rows:
            sheet.append(row)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def test_reader_splits_header_data_and_rates_sheet() -> None:
    payload = _xlsx(
        [["资产大类", "标的", "1119原始金额"], ["美股", "QQQ", 1000]],
        [["货币", "名称", "汇率"], ["USD", "美元", 7.2]],
    )

    workbook = OpenpyxlWorkbookReader().read(payload)

    assert workbook.header_row == ["资产大类", "标的", "1119原始金额"]
    assert workbook.data_rows == [["美股", "QQQ", 1000]]
    assert workbook.rates_sheet_rows[1] == ["USD", "美元", 7.2]


def test_reader_without_rates_sheet() -> None:
    workbook = OpenpyxlWorkbookReader().read(_xlsx([["资产大类", "标的"]]))

    assert workbook.data_rows == []
    assert workbook.rates_sheet_rows is None


@pytest.mark.parametrize("payload", [b"", b"not a workbook", b"PK\x03\x04broken"])
def test_reader_rejects_unreadable_payloads(payload) -> None:
    with pytest.raises(ParseError):
        OpenpyxlWorkbookReader().read(payload)


def test_reader_rejects_truncated_sheet_xml() -> None:
    payload = _xlsx(
        [["资产大类", "标的", "0901人民币价值"]]
        + [["现金", f"活期{n}", n] for n in range(50)]
    )
    source = zipfile.ZipFile(BytesIO(payload))
    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w") as target:
        for info in source.infolist():
            content = source.read(info.filename)
            if info.filename == "xl/worksheets/sheet1.xml":
                content = content[: len(content) // 2]
            target.writestr(info, content)

    with pytest.raises(ParseError):
        OpenpyxlWorkbookReader().read(buffer.getvalue())


def test_writer_produces_three_named_sheets() -> None:
    content = OpenpyxlWorkbookWriter().write(
        [["资产大类", "标的", "币种"], ["美股", "QQQ", "USD"]],
        [["货币", "货币名称", "汇率(兑人民币)", "生效日期"], ["CNY", "人民币", 1.0, ""]],
    )

    workbook = load_workbook(BytesIO(content))
    assert workbook.sheetnames == ["投资组合", "汇率参考", "操作指南"]
    assert workbook["投资组合"]["B2"].value == "QQQ"
    assert workbook["汇率参考"]["A2"].value == "CNY"
    assert workbook["操作指南"].max_row == len(GUIDE_LINES)


def test_writer_output_reads_back() -> None:
    content = OpenpyxlWorkbookWriter().write(
        [["资产大类", "标的", "币种", "1119原始金额"], ["现金", "余额宝", "CNY", "5.00"]],
        [["货币", "货币名称", "汇率(兑人民币)", "生效日期"]],
    )

    workbook = OpenpyxlWorkbookReader().read(content)

    assert workbook.data_rows == [["现金", "余额宝", "CNY", "5.00"]]
    assert workbook.rates_sheet_rows == [["货币", "货币名称", "汇率(兑人民币)", "生效日期"]]
