"""Static one-month forecast per category."""

from collections.abc import Mapping
from datetime import date, timedelta
from decimal import Decimal

from src.domain.models import CategoryForecast, Forecast, ForecastPoint

# Expected 30-day change in percent, trend and confidence per category.
FORECAST_TABLE: dict[str, tuple[Decimal, str, str]] = {
    "美股": (Decimal("3.5"), "up", "medium"),
    "A+H股": (Decimal("2.0"), "up", "medium"),
    "日股": (Decimal("5.0"), "up", "high"),
    "黄金": (Decimal("4.0"), "up", "high"),
    "虚拟货币": (Decimal("8.0"), "up", "low"),
    "现金": (Decimal("0.3"), "neutral", "high"),
}
UNKNOWN_FORECAST = (Decimal("0"), "neutral", "low")

FORECAST_DAYS = 30
FORECAST_STEP_DAYS = 5

_HUNDRED = Decimal("100")


def build_forecast(
    current_values: Mapping[str, Decimal],
    *,
    today: date,
) -> Forecast:
    """Project category values linearly over the next 30 days.

    Args:
        current_values: Latest CNY total per category name. Categories with
            no positive value are left out.
        today: First day of the projection.

    Returns:
        Forecast: Per-category projections, chart points and totals.
    """
    categories: list[CategoryForecast] = []
    for name, value in current_values.items():
        if value <= 0:
            continue
        predicted_change, trend, confidence = FORECAST_TABLE.get(
            name, UNKNOWN_FORECAST
        )
        categories.append(
            CategoryForecast(
                category=name,
                current_value=value,
                predicted_change=predicted_change,
                predicted_value=value * (1 + predicted_change / _HUNDRED),
                trend=trend,
                confidence=confidence,
            )
        )

    points: list[ForecastPoint] = []
    if categories:
        for day in range(0, FORECAST_DAYS + 1, FORECAST_STEP_DAYS):
            point_date = today + timedelta(days=day)
            points.append(
                ForecastPoint(
                    day=day,
                    label=point_date.strftime("%m/%d"),
                    values={
                        item.category: item.current_value
                        * (
                            1
                            + item.predicted_change
                            / FORECAST_DAYS
                            * day
                            / _HUNDRED
                        )
                        for item in categories
                    },
                )
            )

    current_total = sum(
        (item.current_value for item in categories), Decimal("0")
    )
    predicted_total = sum(
        (item.predicted_value for item in categories), Decimal("0")
    )
    change = (
        (predicted_total - current_total) / current_total * _HUNDRED
        if current_total
        else Decimal("0")
    )
    return Forecast(
        categories=categories,
        points=points,
        current_total=current_total,
        predicted_total=predicted_total,
        predicted_change_percent=change,
    )


__all__ = ["FORECAST_TABLE", "build_forecast"]
