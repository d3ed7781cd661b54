"""Streamlit portfolio tracker entry point."""

import importlib
from collections.abc import Mapping, Sequence
from datetime import date
from decimal import Decimal

import streamlit as st
import altair as alt

from src.application.use_cases.get_dashboard_overview import (
    GetDashboardOverviewUseCase,
)
from src.application.use_cases.get_forecast import GetForecastUseCase
from src.application.use_cases.get_holdings import GetHoldingsUseCase
from src.application.use_cases.get_history_trend import GetHistoryTrendUseCase
from src.application.use_cases.get_price_change_analysis import (
    GetPriceChangeAnalysisUseCase,
)
from src.application.use_cases.get_snapshot_summary import (
    GetSnapshotSummaryUseCase,
)
from src.application.use_cases.live_exchange_rates import ExchangeRateCache
from src.application.use_cases.manage_allocation_targets import (
    ManageAllocationTargetsUseCase,
)
from src.application.use_cases.manage_assets import ManageAssetsUseCase
from src.application.use_cases.manage_cash_flows import (
    FLOW_TYPES,
    ManageCashFlowsUseCase,
)
from src.domain.constants import (
    BASE_CURRENCY,
    CURRENCY_NAMES,
    CURRENCY_SYMBOLS,
    DEFAULT_TARGET_PERCENTS,
    DISPLAY_CURRENCIES,
    IMPORT_CURRENCIES,
)
from src.domain.errors import PortfolioError
from src.domain.models import (
    AssetChange,
    Category,
    CategoryTotal,
    DashboardOverview,
    Forecast,
    HistoryTrend,
    HoldingGroup,
    PriceChangeAnalysis,
    TargetAllocationReport,
)
from src.domain.services.currency import (
    display_currency_options,
    to_display_currency,
)
from src.infrastructure.container import (
    build_cash_flow_repository,
    build_database_adapter,
    build_exchange_rate_repository,
    build_exchange_rates_use_case,
    build_export_use_case,
    build_import_use_case,
    build_live_rate_service,
    build_portfolio_repository,
    build_settings,
    initialize_database,
)
from src.infrastructure.logging.logger import get_usage_logger

PAGES = [
    "总览",
    "快照摘要",
    "持仓明细",
    "目标配置",
    "历史走势",
    "涨跌分析",
    "走势预测",
    "现金流",
    "数据管理",
]
ALL_CATEGORIES = "全部"
STATUS_LABELS = {"over": "超配", "under": "低配", "on_target": "达标"}
PALETTE = [
    "#f59e0b",
    "#3b82f6",
    "#8b5cf6",
    "#eab308",
    "#10b981",
    "#6b7280",
    "#e76f51",
    "#1b9aaa",
]


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that numpy and pandas import cleanly for Altair charts."""
    try:
        numpy = importlib.import_module("numpy")
        pandas = importlib.import_module("pandas")
    except ImportError as exc:
        return False, f"Altair dependencies are unavailable: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "numpy import is incomplete (missing ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas import is incomplete (missing Timestamp)."
    return True, None


@st.cache_resource(show_spinner=False)
def _get_db_adapter():
    """Database adapter with the schema ensured, once per process."""
    adapter = build_database_adapter()
    initialize_database(adapter)
    return adapter


@st.cache_resource(show_spinner=False)
def _get_rate_cache() -> ExchangeRateCache:
    """Live rate cache shared by every session of the process."""
    return ExchangeRateCache(build_settings().rate_cache_ttl_seconds)


def _fetch_dashboard_overview() -> DashboardOverview:
    repository = build_portfolio_repository(_get_db_adapter())
    return GetDashboardOverviewUseCase(repository).execute()


@st.cache_data(show_spinner=False)
def _load_dashboard_overview() -> DashboardOverview:
    """Cached wrapper around _fetch_dashboard_overview."""
    return _fetch_dashboard_overview()


def _fetch_history_trend() -> HistoryTrend:
    repository = build_portfolio_repository(_get_db_adapter())
    return GetHistoryTrendUseCase(repository).execute()


@st.cache_data(show_spinner=False)
def _load_history_trend() -> HistoryTrend:
    """Cached wrapper around _fetch_history_trend."""
    return _fetch_history_trend()


def _fetch_forecast() -> Forecast:
    repository = build_portfolio_repository(_get_db_adapter())
    return GetForecastUseCase(repository).execute()


def _fetch_display_rates() -> dict[str, Decimal]:
    return build_exchange_rates_use_case(_get_db_adapter()).current_rates()


@st.cache_data(show_spinner=False)
def _load_display_rates() -> dict[str, Decimal]:
    """Cached wrapper around _fetch_display_rates."""
    return _fetch_display_rates()


def _price_change_use_case() -> GetPriceChangeAnalysisUseCase:
    adapter = _get_db_adapter()
    return GetPriceChangeAnalysisUseCase(
        build_portfolio_repository(adapter),
        build_exchange_rate_repository(adapter),
    )


def _cash_flows_use_case() -> ManageCashFlowsUseCase:
    adapter = _get_db_adapter()
    return ManageCashFlowsUseCase(
        build_cash_flow_repository(adapter),
        build_exchange_rate_repository(adapter),
    )


def _allocation_targets_use_case() -> ManageAllocationTargetsUseCase:
    return ManageAllocationTargetsUseCase(
        build_portfolio_repository(_get_db_adapter())
    )


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = CURRENCY_SYMBOLS.get(currency_code, currency_code)
    return f"{symbol}{value:,.2f}"


def _format_delta(value: Decimal) -> str:
    """Format delta values for display."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:,.2f}"


def _format_percent(value: Decimal) -> str:
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def _convert(
    value: Decimal,
    currency_code: str,
    rates: Mapping[str, Decimal],
) -> Decimal:
    return to_display_currency(value, currency_code, dict(rates))


def _prepare_donut_chart_data(
    categories: Sequence[CategoryTotal],
    currency_code: str,
    rates: Mapping[str, Decimal],
    max_categories: int = 6,
) -> list[dict[str, str | float]]:
    """Prepare donut chart data with a Top-N + 其他 grouping.

    Args:
        categories: Category totals at the latest snapshot (CNY).
        currency_code: Display currency.
        rates: Current rate table.
        max_categories: Maximum categories to keep before grouping.

    Returns:
        list[dict]: Altair-ready chart rows.
    """
    sorted_items = sorted(categories, key=lambda item: item.value, reverse=True)
    top_items = [(item.name, item.value) for item in sorted_items[:max_categories]]
    other_amount = sum(
        (item.value for item in sorted_items[max_categories:]),
        start=Decimal("0"),
    )
    if other_amount != 0:
        top_items.append(("其他", other_amount))
    total_amount = sum((item.value for item in sorted_items), start=Decimal("0"))

    data: list[dict[str, str | float]] = []
    for name, amount in top_items:
        share = (amount / total_amount) * Decimal("100") if total_amount else Decimal("0")
        display = _convert(amount, currency_code, rates)
        data.append(
            {
                "category": name,
                "amount": float(display),
                "amount_label": _format_currency(display, currency_code),
                "share_label": f"{share:.1f}%",
            }
        )
    return data


def _render_allocation_chart(
    overview: DashboardOverview,
    currency_code: str,
    rates: Mapping[str, Decimal],
    chart_size: int = 320,
) -> None:
    """Render a donut chart of the latest allocation."""
    if not overview.category_totals:
        st.info("暂无资产配置数据。")
        return
    data = _prepare_donut_chart_data(overview.category_totals, currency_code, rates)
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=PALETTE),
            legend=alt.Legend(orient="bottom", title=None, columns=3),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.35)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N", title="大类"),
            alt.Tooltip("amount_label:N", title="金额"),
            alt.Tooltip("share_label:N", title="占比"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(fontSize=16, fontWeight="bold").encode(text="amount_label:N")
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.subheader("资产配置")
    st.altair_chart(chart, use_container_width=True)


def _trend_chart_rows(
    overview: DashboardOverview,
    currency_code: str,
    rates: Mapping[str, Decimal],
) -> list[dict[str, str | float]]:
    return [
        {
            "label": point.label,
            "date": point.snapshot_date.isoformat() if point.snapshot_date else "",
            "value": float(_convert(point.value, currency_code, rates)),
            "change": float(_convert(point.change, currency_code, rates)),
        }
        for point in overview.trend_data
    ]


def _render_dashboard(currency_code: str, rates: Mapping[str, Decimal]) -> None:
    overview = _load_dashboard_overview()
    if overview.snapshot_count == 0:
        st.warning("暂无快照数据，请先在“数据管理”中导入工作簿。")
        return

    total_col, roi_col, snapshots_col, assets_col = st.columns(4)
    total_col.metric(
        f"总资产（{overview.latest_snapshot_label}）",
        _format_currency(
            _convert(overview.total_value, currency_code, rates),
            currency_code,
        ),
    )
    roi_col.metric("累计收益率", _format_percent(overview.overall_roi))
    snapshots_col.metric("快照数", overview.snapshot_count)
    assets_col.metric("标的数", overview.asset_count)

    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_allocation_chart(overview, currency_code, rates)
    with chart_right:
        st.subheader("总值走势")
        rows = _trend_chart_rows(overview, currency_code, rates)
        chart = alt.Chart(alt.Data(values=rows)).mark_line(point=True).encode(
            x=alt.X("date:T", title=None),
            y=alt.Y("value:Q", title=currency_code),
            tooltip=["label:N", "value:Q", "change:Q"],
        )
        st.altair_chart(chart, use_container_width=True)

    st.dataframe(
        [
            {
                "大类": item.name,
                "金额": _format_currency(
                    _convert(item.value, currency_code, rates),
                    currency_code,
                ),
                "占比": f"{item.ratio * 100:.1f}%",
                "收益率": _format_percent(item.roi),
            }
            for item in overview.category_totals
        ],
        use_container_width=True,
        hide_index=True,
    )


def _select_snapshot(label: str = "快照"):
    """Snapshot picker defaulting to the latest snapshot."""
    snapshots = _snapshots()
    if not snapshots:
        st.warning("暂无快照数据，请先在“数据管理”中导入工作簿。")
        return None
    return st.selectbox(
        label,
        snapshots,
        index=len(snapshots) - 1,
        format_func=lambda snapshot: (
            f"{snapshot.label} ({snapshot.snapshot_date.isoformat()})"
        ),
    )


def _render_snapshot_summary(
    currency_code: str,
    rates: Mapping[str, Decimal],
) -> None:
    snapshot = _select_snapshot()
    if snapshot is None:
        return
    summary = GetSnapshotSummaryUseCase(
        build_portfolio_repository(_get_db_adapter())
    ).execute(snapshot.id)

    total_col, change_col, assets_col = st.columns(3)
    total_col.metric(
        "总资产",
        _format_currency(
            _convert(summary.total_value, currency_code, rates),
            currency_code,
        ),
    )
    previous = summary.previous.label if summary.previous else "无"
    change_col.metric(
        f"较上期（{previous}）",
        _format_delta(_convert(summary.total_change, currency_code, rates)),
        _format_percent(summary.total_change_percent),
    )
    assets_col.metric("标的数", summary.asset_count)
    st.dataframe(
        [
            {
                "大类": item.name,
                "金额": _format_currency(
                    _convert(item.value, currency_code, rates),
                    currency_code,
                ),
                "占比": f"{item.ratio * 100:.1f}%",
                "变动": _format_delta(_convert(item.change, currency_code, rates)),
                "变动率": _format_percent(item.change_percent),
            }
            for item in summary.categories
        ],
        use_container_width=True,
        hide_index=True,
    )


def _holding_rows(
    group: HoldingGroup,
    currency_code: str,
    rates: Mapping[str, Decimal],
) -> list[dict[str, str]]:
    return [
        {
            "标的": item.asset_name,
            "币种": item.currency,
            "原始金额": (
                "" if item.original_value is None else f"{item.original_value:,.2f}"
            ),
            "金额": _format_currency(
                _convert(item.cny_value, currency_code, rates),
                currency_code,
            ),
            "占比": (
                "" if item.current_ratio is None else f"{item.current_ratio:.2f}%"
            ),
        }
        for item in group.holdings
    ]


def _render_holdings(currency_code: str, rates: Mapping[str, Decimal]) -> None:
    snapshot = _select_snapshot()
    if snapshot is None:
        return
    repository = build_portfolio_repository(_get_db_adapter())
    categories = {
        category.name: category.id for category in repository.list_categories()
    }
    filter_col, search_col = st.columns(2)
    category_name = filter_col.selectbox("大类", [ALL_CATEGORIES, *categories])
    search = search_col.text_input("搜索标的")

    groups = GetHoldingsUseCase(repository).execute(
        category_id=categories.get(category_name),
        snapshot_id=snapshot.id,
        search=search,
    )
    if not groups:
        st.info("没有匹配的持仓。")
        return
    for group in groups:
        total = _format_currency(
            _convert(group.total, currency_code, rates),
            currency_code,
        )
        st.subheader(f"{group.category_name} · {total}")
        st.dataframe(
            _holding_rows(group, currency_code, rates),
            use_container_width=True,
            hide_index=True,
        )


def _target_rows(report: TargetAllocationReport) -> list[dict[str, str]]:
    return [
        {
            "大类": item.name,
            "当前占比": f"{item.actual_percent:.2f}%",
            "目标占比": f"{item.target_percent:.2f}%",
            "偏差": _format_percent(item.deviation),
            "状态": STATUS_LABELS[item.status],
        }
        for item in report.allocations
    ]


def _target_form_defaults(categories: Sequence[Category]) -> dict[str, float]:
    """Stored targets in percent, falling back to the suggested defaults."""
    defaults = {}
    for category in categories:
        if category.suggested_ratio is not None:
            percent = category.suggested_ratio * Decimal("100")
        else:
            percent = DEFAULT_TARGET_PERCENTS.get(category.name, Decimal("0"))
        defaults[category.name] = float(percent)
    return defaults


def _render_targets() -> None:
    use_case = _allocation_targets_use_case()
    report = use_case.report()
    if report.snapshot_label:
        st.caption(f"基于快照 {report.snapshot_label}")
    if report.allocations and not report.is_balanced:
        st.warning(f"目标配置总和为{report.target_sum:.2f}%，应为100%。")
    st.dataframe(_target_rows(report), use_container_width=True, hide_index=True)

    categories = build_portfolio_repository(_get_db_adapter()).list_categories()
    if not categories:
        st.info("暂无资产大类，请先导入工作簿。")
        return
    defaults = _target_form_defaults(categories)
    with st.form("allocation_targets"):
        percents = {
            name: st.number_input(
                name,
                min_value=0.0,
                max_value=100.0,
                value=value,
                step=1.0,
            )
            for name, value in defaults.items()
        }
        st.caption(f"合计 {sum(percents.values()):.2f}%")
        if st.form_submit_button("保存目标"):
            try:
                use_case.set_targets(percents)
                st.cache_data.clear()
                st.success("已保存")
            except PortfolioError as exc:
                st.error(str(exc))


def _render_history(currency_code: str, rates: Mapping[str, Decimal]) -> None:
    trend = _load_history_trend()
    if not trend.points:
        st.warning("暂无历史数据。")
        return
    rows = [
        {
            "date": point.snapshot_date.isoformat(),
            "category": name,
            "value": float(_convert(value, currency_code, rates)),
        }
        for point in trend.points
        for name, value in point.category_totals.items()
    ]
    st.subheader("各大类走势")
    chart = alt.Chart(alt.Data(values=rows)).mark_area().encode(
        x=alt.X("date:T", title=None),
        y=alt.Y("value:Q", stack=True, title=currency_code),
        color=alt.Color("category:N", scale=alt.Scale(range=PALETTE)),
        tooltip=["category:N", "value:Q"],
    )
    st.altair_chart(chart, use_container_width=True)

    st.subheader("区间盈亏")
    st.dataframe(
        [
            {
                "区间": f"{item.previous_label} → {item.label}",
                "盈亏": _format_delta(_convert(item.change, currency_code, rates)),
                "涨跌幅": _format_percent(item.change_percent),
            }
            for item in trend.period_profit_loss
        ],
        use_container_width=True,
        hide_index=True,
    )
    st.subheader("大类盈亏（首个快照至今）")
    st.dataframe(
        [
            {
                "大类": item.name,
                "当前": _format_currency(
                    _convert(item.value, currency_code, rates),
                    currency_code,
                ),
                "盈亏": _format_delta(_convert(item.change, currency_code, rates)),
                "涨跌幅": _format_percent(item.change_percent),
            }
            for item in trend.category_profit_loss
        ],
        use_container_width=True,
        hide_index=True,
    )


def _render_price_change(currency_code: str) -> None:
    use_case = _price_change_use_case()
    ranges = use_case.quick_ranges()
    if not ranges:
        st.warning("至少需要两个快照才能分析涨跌。")
        return
    labels = {snapshot.id: snapshot.label for snapshot in _snapshots()}
    range_label = st.selectbox("快捷区间", [item.label for item in ranges])
    selected = next(item for item in ranges if item.label == range_label)
    ids = list(labels)
    start_col, end_col, filter_col = st.columns(3)
    start_id = start_col.selectbox(
        "起始快照",
        ids,
        index=ids.index(selected.start_snapshot_id),
        format_func=labels.get,
    )
    end_id = end_col.selectbox(
        "结束快照",
        ids,
        index=ids.index(selected.end_snapshot_id),
        format_func=labels.get,
    )
    category_filter = filter_col.text_input("大类筛选", placeholder="全部")

    try:
        analysis = use_case.execute(
            start_id,
            end_id,
            currency=currency_code,
            category_filter=category_filter.strip() or None,
        )
    except PortfolioError as exc:
        st.error(str(exc))
        return
    _render_price_change_result(analysis)


def _ranking_rows(items: Sequence[AssetChange]) -> list[dict[str, str]]:
    return [
        {
            "标的": item.asset_name,
            "变动": _format_delta(item.change),
            "涨跌幅": _format_percent(item.change_percent),
        }
        for item in items
    ]


def _render_price_change_result(analysis: PriceChangeAnalysis) -> None:
    summary = analysis.summary
    code = analysis.currency_code
    change_col, up_col, down_col, days_col = st.columns(4)
    change_col.metric(
        "总变动",
        _format_currency(summary.end_total, code),
        f"{_format_delta(summary.total_change)} "
        f"({_format_percent(summary.total_change_percent)})",
    )
    up_col.metric("上涨", analysis.statistics.up_count)
    down_col.metric("下跌", analysis.statistics.down_count)
    days_col.metric("间隔天数", summary.days_diff)

    rows = [
        {
            "标的": item.asset_name,
            "大类": item.category_name,
            "起始": float(item.start_value),
            "结束": float(item.end_value),
            "变动": float(item.change),
            "涨跌幅%": float(item.change_percent),
        }
        for item in analysis.asset_changes
    ]
    chart = alt.Chart(alt.Data(values=rows)).mark_bar().encode(
        x=alt.X("变动:Q"),
        y=alt.Y("标的:N", sort="-x"),
        color=alt.condition(
            "datum['变动'] > 0",
            alt.value("#16a34a"),
            alt.value("#dc2626"),
        ),
    )
    st.altair_chart(chart, use_container_width=True)
    gainers_col, losers_col = st.columns(2)
    with gainers_col:
        st.subheader("涨幅榜")
        st.dataframe(_ranking_rows(analysis.top_gainers), hide_index=True)
    with losers_col:
        st.subheader("跌幅榜")
        st.dataframe(_ranking_rows(analysis.top_losers), hide_index=True)
    st.dataframe(rows, use_container_width=True, hide_index=True)


def _render_forecast(currency_code: str, rates: Mapping[str, Decimal]) -> None:
    forecast = _fetch_forecast()
    if not forecast.categories:
        st.warning("暂无可预测的资产。")
        return
    st.caption("以下预测仅供参考，不构成任何投资建议。")
    current_col, predicted_col = st.columns(2)
    current_col.metric(
        "当前总值",
        _format_currency(
            _convert(forecast.current_total, currency_code, rates),
            currency_code,
        ),
    )
    predicted_col.metric(
        "一个月后预测",
        _format_currency(
            _convert(forecast.predicted_total, currency_code, rates),
            currency_code,
        ),
        _format_percent(forecast.predicted_change_percent),
    )
    rows = [
        {
            "label": point.label,
            "day": point.day,
            "category": name,
            "value": float(_convert(value, currency_code, rates)),
        }
        for point in forecast.points
        for name, value in point.values.items()
    ]
    chart = alt.Chart(alt.Data(values=rows)).mark_line(point=True).encode(
        x=alt.X("day:Q", title="天"),
        y=alt.Y("value:Q", title=currency_code),
        color=alt.Color("category:N", scale=alt.Scale(range=PALETTE)),
        tooltip=["label:N", "category:N", "value:Q"],
    )
    st.altair_chart(chart, use_container_width=True)
    st.dataframe(
        [
            {
                "大类": item.category,
                "预期涨跌": _format_percent(item.predicted_change),
                "趋势": item.trend,
                "置信度": item.confidence,
            }
            for item in forecast.categories
        ],
        use_container_width=True,
        hide_index=True,
    )


def _render_cash_flows() -> None:
    use_case = _cash_flows_use_case()
    summary = use_case.summarize()
    in_col, out_col, net_col = st.columns(3)
    in_col.metric("流入", _format_currency(summary.total_in, BASE_CURRENCY))
    out_col.metric("流出", _format_currency(summary.total_out, BASE_CURRENCY))
    net_col.metric("净流入", _format_currency(summary.difference, BASE_CURRENCY))

    with st.form("add_cash_flow", clear_on_submit=True):
        flow_date = st.date_input("日期", value=date.today())
        flow_type = st.selectbox("类型", FLOW_TYPES)
        amount = st.text_input("金额")
        currency = st.selectbox("币种", IMPORT_CURRENCIES)
        asset_name = st.text_input("关联标的")
        description = st.text_input("备注")
        if st.form_submit_button("添加"):
            try:
                use_case.add(
                    flow_date,
                    flow_type,
                    amount,
                    currency=currency,
                    asset_name=asset_name,
                    description=description,
                )
                st.success("已添加")
            except PortfolioError as exc:
                st.error(str(exc))

    flows = use_case.list_cash_flows()
    st.dataframe(
        [
            {
                "ID": flow.id,
                "日期": flow.flow_date.isoformat(),
                "类型": flow.flow_type,
                "金额": f"{flow.original_amount} {flow.currency}",
                "人民币": float(flow.cny_amount),
                "标的": flow.asset_name or "",
                "备注": flow.description or "",
            }
            for flow in flows
        ],
        use_container_width=True,
        hide_index=True,
    )
    if flows:
        to_delete = st.selectbox("删除记录", [flow.id for flow in flows])
        if st.button("删除"):
            use_case.delete(to_delete)
            st.rerun()


def _render_data_management() -> None:
    adapter = _get_db_adapter()
    st.subheader("导入 / 导出")
    st.caption("导入会清空并重建全部资产、快照和数值数据。")
    upload = st.file_uploader("上传工作簿", type=["xlsx"])
    if upload is not None and st.button("导入"):
        result = build_import_use_case(adapter).execute(upload.getvalue())
        st.cache_data.clear()
        if result.success:
            st.success(result.message)
        else:
            st.error(result.message)

    export = build_export_use_case(adapter).execute()
    st.download_button(
        "导出工作簿",
        data=export.content,
        file_name=export.filename,
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )

    st.subheader("资产")
    assets_use_case = ManageAssetsUseCase(build_portfolio_repository(adapter))
    with st.form("add_asset", clear_on_submit=True):
        category_name = st.text_input("分类")
        asset_name = st.text_input("名称")
        asset_currency = st.selectbox("币种", IMPORT_CURRENCIES)
        if st.form_submit_button("添加资产"):
            try:
                assets_use_case.add(category_name, asset_name, asset_currency)
                st.cache_data.clear()
                st.success("已添加")
            except PortfolioError as exc:
                st.error(str(exc))
    existing_assets = build_portfolio_repository(adapter).list_assets()
    if existing_assets:
        names = {asset.id: asset.name for asset in existing_assets}
        asset_id = st.selectbox(
            "删除资产",
            list(names),
            format_func=lambda value: names[value],
        )
        if st.button("删除资产"):
            assets_use_case.delete(asset_id)
            st.cache_data.clear()
            st.rerun()

    st.subheader("汇率")
    rates_use_case = build_exchange_rates_use_case(
        adapter,
        live_service=build_live_rate_service(cache=_get_rate_cache()),
    )
    st.dataframe(
        [
            {
                "货币": rate.from_currency,
                "名称": CURRENCY_NAMES.get(rate.from_currency, rate.from_currency),
                "汇率(兑人民币)": float(rate.rate),
                "生效日期": rate.effective_date.isoformat(),
            }
            for rate in rates_use_case.list_rates()
        ],
        use_container_width=True,
        hide_index=True,
    )
    with st.form("upsert_rate"):
        code = st.selectbox(
            "货币",
            [code for code in DISPLAY_CURRENCIES if code != BASE_CURRENCY],
        )
        rate = st.text_input("汇率")
        effective = st.date_input("生效日期", value=date.today())
        if st.form_submit_button("保存汇率"):
            try:
                rates_use_case.upsert(code, rate, effective)
                st.cache_data.clear()
                st.success("已保存")
            except PortfolioError as exc:
                st.error(str(exc))
    if st.button("从实时汇率更新"):
        written = rates_use_case.refresh_from_live()
        st.cache_data.clear()
        st.success(", ".join(f"{code} {rate}" for code, rate in written.items()))


def _snapshots():
    return build_portfolio_repository(_get_db_adapter()).list_snapshots()


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="投资组合", layout="wide")
    st.title("投资组合")

    ok, message = _check_altair_dependencies()
    if not ok:
        st.error(message)
        return

    rates = _load_display_rates()
    page = st.sidebar.selectbox("页面", PAGES)
    # Only currencies with a stored or default rate can be displayed.
    currency_code = st.sidebar.selectbox(
        "显示币种",
        display_currency_options(rates),
        format_func=lambda code: f"{code} {CURRENCY_NAMES.get(code, '')}",
    )
    get_usage_logger().info(f"page={page} currency={currency_code}")

    if page == "总览":
        _render_dashboard(currency_code, rates)
    elif page == "快照摘要":
        _render_snapshot_summary(currency_code, rates)
    elif page == "持仓明细":
        _render_holdings(currency_code, rates)
    elif page == "目标配置":
        _render_targets()
    elif page == "历史走势":
        _render_history(currency_code, rates)
    elif page == "涨跌分析":
        _render_price_change(currency_code)
    elif page == "走势预测":
        _render_forecast(currency_code, rates)
    elif page == "现金流":
        _render_cash_flows()
    else:
        _render_data_management()


if __name__ == "__main__":  # pragma: no cover
    main()
