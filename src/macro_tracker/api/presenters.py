"""Response shaping for API payloads.

Totals are rounded only here: grams and calories to two decimals, percentages to
one decimal, both rendered as strings. A percentage is the plain string ``"0"``
when the calorie total it is measured against is zero.
"""

from decimal import ROUND_HALF_UP, Decimal

from macro_tracker.domain.foods import FoodDisplay
from macro_tracker.domain.logs import LogEntry
from macro_tracker.domain.macros import MacroPercentages
from macro_tracker.domain.meals import MealDisplay
from macro_tracker.domain.stats import DailySummary, RangeSummary, WeeklySummary


def format_amount(value: float) -> str:
    """Format a gram or calorie amount with two decimals."""
    return _round_half_up(value, "0.01")


def format_percentage(value: float, total_calories: float) -> str:
    """Format a calorie percentage with one decimal."""
    if total_calories <= 0:
        return "0"
    return _round_half_up(value, "0.1")


def _round_half_up(value: float, step: str) -> str:
    # Ties round away from zero on the exact binary value of the float.
    rounded = Decimal(value).quantize(Decimal(step), rounding=ROUND_HALF_UP)
    return format(rounded, "f")


def _percentages(
    percentages: MacroPercentages, total_calories: float
) -> dict[str, str]:
    return {
        "protein_percentage": format_percentage(percentages.protein, total_calories),
        "carbs_percentage": format_percentage(percentages.carbs, total_calories),
        "fat_percentage": format_percentage(percentages.fat, total_calories),
    }


def present_food(display: FoodDisplay) -> dict[str, object]:
    """Food row with net carbs and calorie percentages."""
    food = display.food
    return {
        "id": food.id,
        "name": food.name,
        "serving_size": food.serving_size,
        "serving_unit": food.serving_unit,
        "calories": food.calories,
        "protein_grams": food.protein_g,
        "carbs_grams": food.carbs_g,
        "fiber_grams": food.fiber_g,
        "fat_grams": food.fat_g,
        "is_custom": food.is_custom,
        "net_carbs_grams": display.net_carbs_g,
        **_percentages(display.percentages, food.calories),
    }


def present_meal(display: MealDisplay) -> dict[str, object]:
    """Meal with constituent foods, totals and calorie percentages."""
    detail = display.detail
    totals = detail.totals
    return {
        "id": detail.meal.id,
        "name": detail.meal.name,
        "description": detail.meal.description,
        "foods": [
            {
                "food_id": item.food.id,
                "food_name": item.food.name,
                "servings": item.servings,
                "calories": item.food.calories,
                "protein_grams": item.food.protein_g,
                "carbs_grams": item.food.carbs_g,
                "fiber_grams": item.food.fiber_g,
                "fat_grams": item.food.fat_g,
            }
            for item in detail.constituents
        ],
        "totals": {
            "calories": totals.calories,
            "protein_grams": totals.protein_g,
            "net_carbs_grams": totals.net_carbs_g,
            "fat_grams": totals.fat_g,
        },
        **_percentages(display.percentages, totals.calories),
    }


def present_log_entry(entry: LogEntry) -> dict[str, object]:
    """Log entry with its nutrient snapshot."""
    snapshot = entry.snapshot
    return {
        "id": entry.id,
        "log_date": entry.log_date.isoformat(),
        "log_time": entry.log_time.isoformat(),
        "food_id": entry.food_id,
        "meal_id": entry.meal_id,
        "food_name": entry.food_name,
        "meal_name": entry.meal_name,
        "servings": entry.servings,
        "calories": snapshot.calories,
        "protein_grams": snapshot.protein_g,
        "carbs_grams": snapshot.carbs_g,
        "net_carbs_grams": snapshot.net_carbs_g,
        "fiber_grams": snapshot.fiber_g,
        "fat_grams": snapshot.fat_g,
        "notes": entry.notes,
    }


def present_daily_summary(summary: DailySummary) -> dict[str, object]:
    """Daily totals; an empty day reports numeric zeros."""
    payload: dict[str, object] = {
        "date": summary.day.isoformat(),
        "total_entries": summary.total_entries,
    }
    if summary.total_entries == 0:
        payload.update(
            {
                "total_calories": 0,
                "total_protein": 0,
                "total_net_carbs": 0,
                "total_fat": 0,
            }
        )
    else:
        payload.update(
            {
                "total_calories": format_amount(summary.total_calories),
                "total_protein": format_amount(summary.total_protein_g),
                "total_net_carbs": format_amount(summary.total_net_carbs_g),
                "total_fat": format_amount(summary.total_fat_g),
            }
        )
    payload.update(_percentages(summary.percentages, summary.total_calories))
    return payload


def _present_day(day: DailySummary) -> dict[str, object]:
    return {
        "date": day.day.isoformat(),
        "calories": format_amount(day.total_calories),
        "protein": format_amount(day.total_protein_g),
        "net_carbs": format_amount(day.total_net_carbs_g),
        "fat": format_amount(day.total_fat_g),
        "entries": day.total_entries,
        **_percentages(day.percentages, day.total_calories),
    }


def present_weekly_summary(summary: WeeklySummary) -> dict[str, object]:
    """Weekly totals with the per-day breakdown."""
    return {
        "week_start": summary.week_start.isoformat(),
        "week_end": summary.week_end.isoformat(),
        "total_entries": summary.total_entries,
        "total_calories": format_amount(summary.total_calories),
        "total_protein": format_amount(summary.total_protein_g),
        "total_net_carbs": format_amount(summary.total_net_carbs_g),
        "total_fat": format_amount(summary.total_fat_g),
        **_percentages(summary.percentages, summary.total_calories),
        "daily_breakdown": [_present_day(day) for day in summary.daily_breakdown],
    }


def present_range_summary(summary: RangeSummary) -> dict[str, object]:
    """Range totals, per-day averages and per-day data."""
    totals = summary.totals
    averages = summary.averages
    return {
        "start_date": summary.start_date.isoformat(),
        "end_date": summary.end_date.isoformat(),
        "days_count": summary.days_count,
        "totals": {
            "calories": format_amount(totals.calories),
            "protein": format_amount(totals.protein_g),
            "net_carbs": format_amount(totals.net_carbs_g),
            "fat": format_amount(totals.fat_g),
            "entries": totals.entries,
        },
        "averages": {
            "calories": format_amount(averages.calories),
            "protein": format_amount(averages.protein_g),
            "net_carbs": format_amount(averages.net_carbs_g),
            "fat": format_amount(averages.fat_g),
        },
        "daily_data": [_present_day(day) for day in summary.daily_data],
    }
