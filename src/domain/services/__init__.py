"""Domain services package."""

from .allocation import (
    compare_snapshots,
    target_allocations,
    target_percent,
    target_sum,
)
from .classification import classify_rows, resolve_category
from .currency import (
    build_import_rates,
    compute_snapshot_value,
    current_rate_table,
    display_currency_options,
    latest_rates,
    parse_rates_rows,
    rate_for,
    resolve_currency,
    to_display_currency,
)
from .export_layout import (
    build_data_rows,
    build_rate_rows,
    export_filename,
    format_original_amount,
)
from .forecast import build_forecast
from .header_layout import cell_text, interpret_header
from .import_plan import build_import_plan
from .snapshot_dates import resolve_snapshot_date
from .valuation import (
    allocation_ratios,
    analyze_price_change,
    build_quick_ranges,
    category_totals,
    compute_roi,
    period_changes,
    portfolio_total,
    reconcile_total,
    summary_changes,
)

__all__ = [
    "allocation_ratios",
    "analyze_price_change",
    "build_data_rows",
    "build_forecast",
    "build_import_plan",
    "build_import_rates",
    "build_quick_ranges",
    "build_rate_rows",
    "category_totals",
    "cell_text",
    "classify_rows",
    "compare_snapshots",
    "compute_roi",
    "compute_snapshot_value",
    "current_rate_table",
    "display_currency_options",
    "export_filename",
    "format_original_amount",
    "interpret_header",
    "latest_rates",
    "parse_rates_rows",
    "period_changes",
    "portfolio_total",
    "rate_for",
    "reconcile_total",
    "resolve_category",
    "resolve_currency",
    "resolve_snapshot_date",
    "summary_changes",
    "target_allocations",
    "target_percent",
    "target_sum",
    "to_display_currency",
]
