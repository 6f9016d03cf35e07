"""Pydantic models for API request bodies."""

from datetime import date, time

from pydantic import BaseModel


class FoodPayload(BaseModel):
    """Create or update payload for a food."""

    name: str | None = None
    calories: float | None = None
    protein_grams: float | None = None
    carbs_grams: float | None = None
    fiber_grams: float | None = None
    fat_grams: float | None = None
    serving_size: str | None = None
    serving_unit: str | None = None

    def to_changes(self) -> dict[str, object]:
        """Return only the fields the client sent, keyed by domain names."""
        renamed = {
            "protein_grams": "protein_g",
            "carbs_grams": "carbs_g",
            "fiber_grams": "fiber_g",
            "fat_grams": "fat_g",
        }
        return {
            renamed.get(key, key): value
            for key, value in self.model_dump(exclude_unset=True).items()
        }


class MealFoodPayload(BaseModel):
    """Constituent of a meal request."""

    food_id: int
    servings: float | None = None


class MealPayload(BaseModel):
    """Create or update payload for a meal."""

    name: str | None = None
    description: str | None = None
    foods: list[MealFoodPayload] | None = None


class CreateLogPayload(BaseModel):
    """Payload for logging a food or a meal."""

    log_date: date | None = None
    log_time: time | None = None
    food_id: int | None = None
    meal_id: int | None = None
    servings: float | None = None
    notes: str | None = None


class UpdateLogPayload(BaseModel):
    """Payload for updating a log entry."""

    log_date: date | None = None
    log_time: time | None = None
    servings: float | None = None
    notes: str | None = None
