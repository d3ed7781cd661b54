"""Domain constants for the portfolio workbook and valuation."""

from decimal import Decimal

BASE_CURRENCY = "CNY"

# Category labels recognized verbatim in the first column of the data sheet.
CATEGORY_NAMES = (
    "股票/基金",
    "美股",
    "A+H股",
    "日股",
    "黄金",
    "虚拟货币",
    "现金",
)

# Currency codes accepted from the explicit currency column.
IMPORT_CURRENCIES = ("CNY", "USD", "HKD", "JPY", "EUR", "GBP")

# Display currencies offered by the interface.
DISPLAY_CURRENCIES = (
    "CNY",
    "USD",
    "HKD",
    "JPY",
    "EUR",
    "GBP",
    "AUD",
    "CAD",
    "SGD",
    "KRW",
)

CURRENCY_NAMES = {
    "CNY": "人民币",
    "USD": "美元",
    "HKD": "港币",
    "JPY": "日元",
    "EUR": "欧元",
    "GBP": "英镑",
    "AUD": "澳元",
    "CAD": "加元",
    "SGD": "新加坡元",
    "KRW": "韩元",
}

CURRENCY_SYMBOLS = {
    "CNY": "¥",
    "USD": "$",
    "HKD": "HK$",
    "JPY": "¥",
    "EUR": "€",
    "GBP": "£",
    "AUD": "A$",
    "CAD": "C$",
    "SGD": "S$",
    "KRW": "₩",
}

# Rates (to CNY) used while importing when the workbook has no rates sheet.
DEFAULT_IMPORT_RATES = {
    "CNY": Decimal("1"),
    "USD": Decimal("7.1"),
    "HKD": Decimal("0.91"),
    "JPY": Decimal("0.047"),
}

# Rates written to the live table after every import.
POST_IMPORT_RATES = {
    "USD": Decimal("7.1"),
    "HKD": Decimal("0.91"),
}

# Asset-name fragments used to guess a currency; later entries take precedence.
CURRENCY_NAME_HINTS = (
    ("USD", ("USD", "美股")),
    ("HKD", ("HKD", "港股")),
    ("JPY", ("JPY", "日股", "日元")),
)

# Workbook markers.
CURRENCY_HEADERS = ("币种",)
CURRENCY_HEADER_CI = "currency"
ORIGINAL_AMOUNT_SUFFIX = "原始金额"
CNY_VALUE_SUFFIX = "人民币价值"
CHANGE_MARKER = "期末减期初"
TOTAL_MARKER = "总计"
SUBTOTAL_MARKER = "合计"
SKIP_MARKERS = ("对比", "标的里")

DATA_SHEET_NAME = "投资组合"
RATES_SHEET_NAME = "汇率参考"
GUIDE_SHEET_NAME = "操作指南"

IMPORT_SUCCESS_MESSAGE = "数据导入成功"
IMPORT_EMPTY_MESSAGE = "未发现快照列，未导入任何数据"
IMPORT_FAILURE_PREFIX = "导入失败"

# Tolerance used when reconciling derived totals with the total row.
TOTAL_TOLERANCE = Decimal("1")

# Allocation targets, in percent of the portfolio.
TARGET_DEVIATION_TOLERANCE = Decimal("5")
TARGET_SUM_TOLERANCE = Decimal("0.01")
DEFAULT_TARGET_PERCENTS = {
    "美股": Decimal("30"),
    "A+H股": Decimal("25"),
    "日股": Decimal("10"),
    "黄金": Decimal("15"),
    "虚拟货币": Decimal("10"),
    "现金": Decimal("10"),
}


__all__ = [
    "BASE_CURRENCY",
    "CATEGORY_NAMES",
    "IMPORT_CURRENCIES",
    "DISPLAY_CURRENCIES",
    "CURRENCY_NAMES",
    "CURRENCY_SYMBOLS",
    "DEFAULT_IMPORT_RATES",
    "POST_IMPORT_RATES",
    "CURRENCY_NAME_HINTS",
    "CURRENCY_HEADERS",
    "CURRENCY_HEADER_CI",
    "ORIGINAL_AMOUNT_SUFFIX",
    "CNY_VALUE_SUFFIX",
    "CHANGE_MARKER",
    "TOTAL_MARKER",
    "SUBTOTAL_MARKER",
    "SKIP_MARKERS",
    "DATA_SHEET_NAME",
    "RATES_SHEET_NAME",
    "GUIDE_SHEET_NAME",
    "IMPORT_SUCCESS_MESSAGE",
    "IMPORT_EMPTY_MESSAGE",
    "IMPORT_FAILURE_PREFIX",
    "TOTAL_TOLERANCE",
    "TARGET_DEVIATION_TOLERANCE",
    "TARGET_SUM_TOLERANCE",
    "DEFAULT_TARGET_PERCENTS",
]
