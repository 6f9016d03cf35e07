"""REST endpoints for foods, meals, log entries and analytics."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request, status

from macro_tracker.api.presenters import (
    present_daily_summary,
    present_food,
    present_log_entry,
    present_meal,
    present_range_summary,
    present_weekly_summary,
)
from macro_tracker.api.schemas import (  # noqa: TC001
    CreateLogPayload,
    FoodPayload,
    MealFoodPayload,
    MealPayload,
    UpdateLogPayload,
)
from macro_tracker.domain.errors import InvalidInputError
from macro_tracker.domain.meals import MealConstituent
from macro_tracker.services.foods import compute_food_display
from macro_tracker.services.logs import log_source_from_ids
from macro_tracker.services.meals import compute_meal_display

if TYPE_CHECKING:
    from macro_tracker.containers import AppContainer

foods_router = APIRouter(prefix="/api/foods", tags=["foods"])
meals_router = APIRouter(prefix="/api/meals", tags=["meals"])
logs_router = APIRouter(prefix="/api/logs", tags=["logs"])
analytics_router = APIRouter(prefix="/api/analytics", tags=["analytics"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@foods_router.get("")
def list_foods(
    request: Request, search: str | None = None
) -> list[dict[str, object]]:
    """Return foods with net carbs and macro percentages."""
    foods = _container(request).food_service.list_foods(search)
    return [present_food(compute_food_display(food)) for food in foods]


@foods_router.get("/{food_id}")
def get_food(food_id: int, request: Request) -> dict[str, object]:
    """Return a single food."""
    food = _container(request).food_service.get_food(food_id)
    return present_food(compute_food_display(food))


@foods_router.post("", status_code=status.HTTP_201_CREATED)
def create_food(payload: FoodPayload, request: Request) -> dict[str, object]:
    """Create a custom food."""
    food = _container(request).food_service.create_food(payload.to_changes())
    return present_food(compute_food_display(food))


@foods_router.put("/{food_id}")
def update_food(
    food_id: int, payload: FoodPayload, request: Request
) -> dict[str, object]:
    """Update fields of a food."""
    food = _container(request).food_service.update_food(
        food_id, payload.to_changes()
    )
    return present_food(compute_food_display(food))


@foods_router.delete("/{food_id}")
def delete_food(food_id: int, request: Request) -> dict[str, str]:
    """Delete a food."""
    _container(request).food_service.delete_food(food_id)
    return {"message": "Food deleted successfully"}


def _constituents(foods: list[MealFoodPayload] | None) -> list[MealConstituent]:
    return [
        MealConstituent(
            food_id=food.food_id,
            servings=food.servings if food.servings is not None else 1.0,
        )
        for food in foods or []
    ]


@meals_router.get("")
def list_meals(request: Request) -> list[dict[str, object]]:
    """Return meals with totals."""
    meals = _container(request).meal_service.list_meals()
    return [present_meal(compute_meal_display(meal)) for meal in meals]


@meals_router.get("/{meal_id}")
def get_meal(meal_id: int, request: Request) -> dict[str, object]:
    """Return a single meal with totals."""
    detail = _container(request).meal_service.get_meal_detail(meal_id)
    return present_meal(compute_meal_display(detail))


@meals_router.post("", status_code=status.HTTP_201_CREATED)
def create_meal(payload: MealPayload, request: Request) -> dict[str, object]:
    """Create a meal from foods."""
    detail = _container(request).meal_service.create_meal(
        payload.name,
        payload.description,
        _constituents(payload.foods) if payload.foods else None,
    )
    return present_meal(compute_meal_display(detail))


@meals_router.put("/{meal_id}")
def update_meal(
    meal_id: int, payload: MealPayload, request: Request
) -> dict[str, object]:
    """Replace a meal's foods."""
    detail = _container(request).meal_service.update_meal(
        meal_id,
        payload.name,
        payload.description,
        _constituents(payload.foods),
    )
    return present_meal(compute_meal_display(detail))


@meals_router.delete("/{meal_id}")
def delete_meal(meal_id: int, request: Request) -> dict[str, str]:
    """Delete a meal."""
    _container(request).meal_service.delete_meal(meal_id)
    return {"message": "Meal deleted successfully"}


@logs_router.get("")
def list_logs(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[dict[str, object]]:
    """Return log entries for a date, a date range, or all dates."""
    entries = _container(request).log_service.list_entries(
        day=day, start=start_date, end=end_date
    )
    return [present_log_entry(entry) for entry in entries]


@logs_router.get("/{entry_id}")
def get_log(entry_id: int, request: Request) -> dict[str, object]:
    """Return a single log entry."""
    return present_log_entry(_container(request).log_service.get_entry(entry_id))


@logs_router.post("", status_code=status.HTTP_201_CREATED)
def create_log(payload: CreateLogPayload, request: Request) -> dict[str, object]:
    """Log a food or a meal, snapshotting its nutrients."""
    if payload.log_date is None or payload.log_time is None:
        raise InvalidInputError("Missing required fields")
    source = log_source_from_ids(payload.food_id, payload.meal_id)
    entry = _container(request).log_service.create_entry(
        log_date=payload.log_date,
        log_time=payload.log_time,
        source=source,
        servings=payload.servings if payload.servings is not None else 1.0,
        notes=payload.notes,
    )
    return present_log_entry(entry)


@logs_router.put("/{entry_id}")
def update_log(
    entry_id: int, payload: UpdateLogPayload, request: Request
) -> dict[str, object]:
    """Update a log entry and recompute its nutrients."""
    entry = _container(request).log_service.update_entry(
        entry_id,
        log_date=payload.log_date,
        log_time=payload.log_time,
        servings=payload.servings,
        notes=payload.notes,
    )
    return present_log_entry(entry)


@logs_router.delete("/{entry_id}")
def delete_log(entry_id: int, request: Request) -> dict[str, str]:
    """Delete a log entry."""
    _container(request).log_service.delete_entry(entry_id)
    return {"message": "Log entry deleted successfully"}


@analytics_router.get("/daily/{day}")
def daily_summary(day: date, request: Request) -> dict[str, object]:
    """Return totals and macro percentages for one day."""
    summary = _container(request).analytics_service.get_daily(day)
    return present_daily_summary(summary)


@analytics_router.get("/weekly/{start_date}")
def weekly_summary(start_date: date, request: Request) -> dict[str, object]:
    """Return totals for seven days starting at start_date."""
    summary = _container(request).analytics_service.get_weekly(start_date)
    return present_weekly_summary(summary)


@analytics_router.get("/range/{start_date}/{end_date}")
def range_summary(
    start_date: date, end_date: date, request: Request
) -> dict[str, object]:
    """Return totals, averages and per-day data for a date range."""
    summary = _container(request).analytics_service.get_range(start_date, end_date)
    return present_range_summary(summary)
