"""Tests for period analytics."""

from datetime import date

import pytest

from macro_tracker.domain.errors import InvalidInputError
from macro_tracker.domain.logs import FoodSource
from macro_tracker.domain.stats import DailyTotals
from macro_tracker.services.analytics import (
    daily_summary,
    group_entries_by_day,
    range_summary,
    weekly_summary,
)
from tests.conftest import build_services, food_payload, log_at


def _row(day: str, calories: float, entries: int = 1) -> DailyTotals:
    return DailyTotals(
        day=date.fromisoformat(day),
        entries=entries,
        calories=calories,
        protein_g=calories / 20,
        net_carbs_g=calories / 10,
        fat_g=calories / 45,
    )


def test_daily_summary_empty_is_all_zero() -> None:
    summary = daily_summary(date(2024, 3, 1), [])

    assert summary.total_entries == 0
    assert summary.total_calories == 0
    assert summary.percentages.protein == 0
    assert summary.percentages.carbs == 0
    assert summary.percentages.fat == 0


def test_daily_summary_sums_and_computes_percentages() -> None:
    rows = [_row("2024-03-01", 400, entries=2), _row("2024-03-01", 600)]

    summary = daily_summary(date(2024, 3, 1), rows)

    assert summary.total_entries == 3
    assert summary.total_calories == 1000
    assert summary.total_protein_g == pytest.approx(50)
    assert summary.percentages.protein == pytest.approx(20)
    assert summary.percentages.carbs == pytest.approx(40)
    assert summary.percentages.fat == pytest.approx(20)


def test_weekly_summary_breaks_down_days_in_order() -> None:
    rows = [
        _row("2024-03-06", 300),
        _row("2024-03-04", 500, entries=2),
        _row("2024-03-11", 999),
    ]

    summary = weekly_summary(date(2024, 3, 4), rows)

    assert summary.week_end == date(2024, 3, 10)
    assert summary.total_entries == 3
    assert summary.total_calories == 800
    assert [day.day.day for day in summary.daily_breakdown] == [4, 6]
    assert summary.daily_breakdown[0].total_entries == 2
    assert summary.daily_breakdown[1].percentages.protein == pytest.approx(20)


def test_range_summary_averages_over_days_with_data() -> None:
    rows = [
        _row("2024-03-01", 1500),
        _row("2024-03-03", 1800, entries=3),
        _row("2024-03-07", 2100, entries=2),
    ]

    summary = range_summary(date(2024, 3, 1), date(2024, 3, 7), rows)

    assert summary.days_count == 3
    assert summary.totals.calories == 5400
    assert summary.totals.entries == 6
    assert summary.averages.calories == pytest.approx(1800)
    assert summary.averages.protein_g == pytest.approx(90)


def test_range_summary_per_day_percentages_are_independent() -> None:
    rows = [
        DailyTotals(date(2024, 3, 1), 1, 400, 100, 0, 0),
        DailyTotals(date(2024, 3, 2), 1, 900, 0, 0, 100),
    ]

    summary = range_summary(date(2024, 3, 1), date(2024, 3, 2), rows)

    assert summary.daily_data[0].percentages.protein == pytest.approx(100)
    assert summary.daily_data[0].percentages.fat == 0
    assert summary.daily_data[1].percentages.fat == pytest.approx(100)
    assert summary.daily_data[1].percentages.protein == 0


def test_range_summary_without_data() -> None:
    summary = range_summary(date(2024, 1, 1), date(2024, 12, 31), [])

    assert summary.days_count == 0
    assert summary.averages.calories == 0
    assert summary.daily_data == []


def test_group_entries_by_day_feeds_summaries() -> None:
    services = build_services()
    food = services.foods.create_food(food_payload("Egg", calories=70))
    for day in ["2024-03-02", "2024-03-01", "2024-03-02"]:
        log_date, log_time = log_at(day)
        services.logs.create_entry(log_date, log_time, FoodSource(food.id))

    rows = group_entries_by_day(services.logs.list_entries())

    assert [(row.day.day, row.entries, row.calories) for row in rows] == [
        (1, 1, 70),
        (2, 2, 140),
    ]


def test_analytics_service_reads_grouped_rows() -> None:
    services = build_services()
    food = services.foods.create_food(food_payload("Egg", calories=70))
    for day in ["2024-03-04", "2024-03-04", "2024-03-08", "2024-03-12"]:
        log_date, log_time = log_at(day)
        services.logs.create_entry(log_date, log_time, FoodSource(food.id))

    daily = services.analytics.get_daily(date(2024, 3, 4))
    weekly = services.analytics.get_weekly(date(2024, 3, 4))
    ranged = services.analytics.get_range(date(2024, 3, 1), date(2024, 3, 31))

    assert daily.total_calories == 140
    assert weekly.total_entries == 3
    assert ranged.days_count == 3
    assert ranged.averages.calories == pytest.approx(280 / 3)


def test_analytics_range_rejects_inverted_dates() -> None:
    services = build_services()

    with pytest.raises(InvalidInputError):
        services.analytics.get_range(date(2024, 3, 2), date(2024, 3, 1))
