"""Tests for the static category forecast."""

from datetime import date
from decimal import Decimal

from src.domain.services.forecast import build_forecast


def test_forecast_projects_known_and_unknown_categories() -> None:
    forecast = build_forecast(
        {
            "美股": Decimal("1000"),
            "股票/基金": Decimal("500"),
            "现金": Decimal("0"),
        },
        today=date(2024, 12, 1),
    )

    by_name = {item.category: item for item in forecast.categories}
    assert set(by_name) == {"美股", "股票/基金"}
    assert by_name["美股"].predicted_value == Decimal("1035")
    assert (by_name["美股"].trend, by_name["美股"].confidence) == ("up", "medium")
    assert by_name["股票/基金"].predicted_change == Decimal("0")
    assert by_name["股票/基金"].confidence == "low"
    assert forecast.current_total == Decimal("1500")
    assert forecast.predicted_total == Decimal("1535")


def test_forecast_points_every_five_days() -> None:
    forecast = build_forecast({"黄金": Decimal("100")}, today=date(2024, 12, 1))

    assert [point.day for point in forecast.points] == [0, 5, 10, 15, 20, 25, 30]
    assert forecast.points[0].label == "12/01"
    assert forecast.points[-1].label == "12/31"
    assert forecast.points[0].values["黄金"] == Decimal("100")
    assert abs(forecast.points[-1].values["黄金"] - Decimal("104")) < Decimal("1e-9")


def test_forecast_without_positive_values_is_empty() -> None:
    forecast = build_forecast({"现金": Decimal("-1")}, today=date(2024, 1, 1))

    assert forecast.categories == []
    assert forecast.points == []
    assert forecast.predicted_change_percent == Decimal("0")
