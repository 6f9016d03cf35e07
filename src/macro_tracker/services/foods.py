"""Services for the food database."""

import math
from dataclasses import dataclass
from typing import Protocol

from macro_tracker.domain.errors import InvalidInputError, NotFoundError
from macro_tracker.domain.foods import Food, FoodDisplay
from macro_tracker.domain.macros import macro_percentages
from macro_tracker.domain.nutrition import NutrientProfile

_REQUIRED_NUTRIENTS = ("calories", "protein_g", "carbs_g", "fat_g")
_NUTRIENT_FIELDS = ("calories", "protein_g", "carbs_g", "fiber_g", "fat_g")
_TEXT_FIELDS = ("serving_size", "serving_unit")


class FoodRepository(Protocol):
    """Persistence interface for foods."""

    def list_foods(self, search: str | None) -> list[Food]:
        """Return foods, custom first then by name, optionally filtered."""

    def get_food(self, food_id: int) -> Food | None:
        """Return a food by id, if present."""

    def create_food(self, payload: dict[str, object]) -> Food:
        """Insert a food and return it."""

    def update_food(self, food_id: int, payload: dict[str, object]) -> Food | None:
        """Update a food and return it, or None when it does not exist."""

    def delete_food(self, food_id: int) -> bool:
        """Delete a food, returning whether a row was removed."""


@dataclass
class FoodService:
    """Application service for food lookups, scaling and CRUD."""

    repository: FoodRepository

    def list_foods(self, search: str | None = None) -> list[Food]:
        """List foods, filtering by name when a search term is given."""
        term = search.strip() if search else None
        return self.repository.list_foods(term or None)

    def get_food(self, food_id: int) -> Food:
        """Return a food or raise NotFoundError."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError("Food not found")
        return food

    def scale(self, food_id: int, servings: float = 1.0) -> NutrientProfile:
        """Resolve a food and scale its nutrients by servings."""
        return scale_food(self.get_food(food_id), servings)

    def create_food(self, payload: dict[str, object]) -> Food:
        """Create a custom food."""
        missing = [
            key for key in ("name", *_REQUIRED_NUTRIENTS) if payload.get(key) is None
        ]
        if missing or not str(payload.get("name") or "").strip():
            raise InvalidInputError("Missing required fields")
        values = _clean_payload(payload)
        values.setdefault("fiber_g", 0.0)
        values["is_custom"] = True
        return self.repository.create_food(values)

    def update_food(self, food_id: int, changes: dict[str, object]) -> Food:
        """Apply a partial update to an existing food."""
        current = self.get_food(food_id)
        values = _clean_payload(changes)
        if "name" in changes and not values.get("name"):
            raise InvalidInputError("Food name cannot be empty")
        merged = {
            "name": current.name,
            "calories": current.calories,
            "protein_g": current.protein_g,
            "carbs_g": current.carbs_g,
            "fiber_g": current.fiber_g,
            "fat_g": current.fat_g,
            "serving_size": current.serving_size,
            "serving_unit": current.serving_unit,
            **values,
        }
        updated = self.repository.update_food(food_id, merged)
        if updated is None:
            raise NotFoundError("Food not found")
        return updated

    def delete_food(self, food_id: int) -> None:
        """Delete a food; logs keep their snapshots, meals drop the food."""
        if not self.repository.delete_food(food_id):
            raise NotFoundError("Food not found")


def scale_food(food: Food, servings: float = 1.0) -> NutrientProfile:
    """Scale a food's reference-serving nutrients linearly."""
    ensure_positive_servings(servings)
    return food.profile.scale(servings)


def compute_food_display(food: Food) -> FoodDisplay:
    """Attach net carbs and calorie percentages to a food."""
    net_carbs_g = food.profile.net_carbs_g
    return FoodDisplay(
        food=food,
        net_carbs_g=net_carbs_g,
        percentages=macro_percentages(
            food.protein_g, net_carbs_g, food.fat_g, food.calories
        ),
    )


def ensure_positive_servings(servings: float) -> None:
    """Raise InvalidInputError unless servings is greater than zero."""
    if not math.isfinite(servings) or servings <= 0:
        raise InvalidInputError("Servings must be greater than zero")


def _clean_payload(payload: dict[str, object]) -> dict[str, object]:
    values: dict[str, object] = {}
    if payload.get("name") is not None:
        values["name"] = str(payload["name"]).strip()
    for key in _NUTRIENT_FIELDS:
        if payload.get(key) is None:
            continue
        amount = float(payload[key])
        if not math.isfinite(amount):
            raise InvalidInputError(f"{key} must be a finite number")
        if amount < 0:
            raise InvalidInputError(f"{key} must not be negative")
        values[key] = amount
    for key in _TEXT_FIELDS:
        if key in payload:
            values[key] = payload[key]
    return values
