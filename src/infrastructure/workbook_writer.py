"""Workbook writer backed by openpyxl."""

from io import BytesIO
from typing import Any

from openpyxl import Workbook

from src.application.ports.workbook import WorkbookWriterPort
from src.domain.constants import (
    DATA_SHEET_NAME,
    GUIDE_SHEET_NAME,
    RATES_SHEET_NAME,
)

GUIDE_LINES = (
    ["操作指南"],
    [""],
    ["1. 第一个工作表“投资组合”是数据表，导入时只读取该表和“汇率参考”表。"],
    ["2. 资产大类写在第一列，同一大类下的标的写在第二列，大类名称只需写在第一行。"],
    ["3. 可识别的资产大类：股票/基金、美股、A+H股、日股、黄金、虚拟货币、现金。"],
    ["4. 币种列填写 CNY、USD、HKD、JPY、EUR 或 GBP；留空时按标的名称推断，默认人民币。"],
    ["5. 每个快照占三列：MMDD原始金额、MMDD人民币价值、期末减期初。"],
    ["6. 人民币价值留空或为 0 时，按“汇率参考”表的汇率由原始金额换算。"],
    ["7. 原始金额与人民币价值均为 0 的单元格视为该日期无数据，不会导入。"],
    ["8. “总计”行记录各快照的组合总值，“合计”行会被忽略。"],
    ["9. 导入会清空并重建全部资产、快照和数值数据，请先导出备份。"],
)


class OpenpyxlWorkbookWriter(WorkbookWriterPort):
    """Render sheet grids into an ``.xlsx`` workbook."""

    def write(
        self,
        data_rows: list[list[Any]],
        rate_rows: list[list[Any]],
    ) -> bytes:
        """Return a workbook with the data, rates and guide sheets.

        Args:
            data_rows: Rows of the 投资组合 sheet, header first.
            rate_rows: Rows of the 汇率参考 sheet, header first.

        Returns:
            bytes: Serialized workbook.
        """
        workbook = Workbook()
        data_sheet = workbook.active
        data_sheet.title = DATA_SHEET_NAME
        for row in data_rows:
            data_sheet.append(row)

        rates_sheet = workbook.create_sheet(RATES_SHEET_NAME)
        for row in rate_rows:
            rates_sheet.append(row)

        guide_sheet = workbook.create_sheet(GUIDE_SHEET_NAME)
        for row in GUIDE_LINES:
            guide_sheet.append(row)
        guide_sheet.column_dimensions["A"].width = 90

        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()


__all__ = ["GUIDE_LINES", "OpenpyxlWorkbookWriter"]
