"""Meal composition and aggregation service."""

from dataclasses import dataclass
from typing import Protocol

from macro_tracker.domain.errors import InvalidInputError, NotFoundError
from macro_tracker.domain.macros import macro_percentages
from macro_tracker.domain.meals import (
    MealConstituent,
    MealDetail,
    MealDisplay,
    MealRecord,
    ResolvedConstituent,
)
from macro_tracker.domain.nutrition import NutrientProfile
from macro_tracker.services.foods import (
    FoodService,
    ensure_positive_servings,
    scale_food,
)


class MealRepository(Protocol):
    """Persistence interface for meals and their constituents."""

    def list_meals(self) -> list[MealRecord]:
        """Return meals, newest first."""

    def get_meal(self, meal_id: int) -> MealRecord | None:
        """Return a meal with its constituents, if present."""

    def create_meal(
        self,
        name: str,
        description: str | None,
        constituents: list[MealConstituent],
    ) -> MealRecord:
        """Insert a meal and its constituents in one transaction."""

    def replace_constituents(
        self,
        meal_id: int,
        name: str,
        description: str | None,
        constituents: list[MealConstituent],
    ) -> MealRecord | None:
        """Update the meal row and swap its constituent set in one transaction."""

    def delete_meal(self, meal_id: int) -> bool:
        """Delete a meal, returning whether a row was removed."""


@dataclass
class MealService:
    """Service that resolves meals into nutrient totals and manages them."""

    food_service: FoodService
    repository: MealRepository

    def list_meals(self) -> list[MealDetail]:
        """Return every meal with resolved constituents and totals."""
        return [self._resolve(meal) for meal in self.repository.list_meals()]

    def get_meal(self, meal_id: int) -> MealRecord:
        """Return the stored meal or raise NotFoundError."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError("Meal not found")
        return meal

    def get_meal_detail(self, meal_id: int) -> MealDetail:
        """Return a meal with resolved constituents and totals."""
        return self._resolve(self.get_meal(meal_id))

    def aggregate(self, meal_id: int) -> NutrientProfile:
        """Sum the scaled nutrients of every constituent of a meal."""
        return self.get_meal_detail(meal_id).totals

    def create_meal(
        self,
        name: str | None,
        description: str | None,
        constituents: list[MealConstituent] | None,
    ) -> MealDetail:
        """Create a meal from at least one constituent."""
        if not name or not name.strip() or not constituents:
            raise InvalidInputError("Missing required fields")
        self._validate_constituents(constituents)
        meal = self.repository.create_meal(name.strip(), description, constituents)
        return self._resolve(meal)

    def update_meal(
        self,
        meal_id: int,
        name: str | None,
        description: str | None,
        constituents: list[MealConstituent] | None,
    ) -> MealDetail:
        """Replace a meal's constituent set, keeping omitted name/description."""
        current = self.get_meal(meal_id)
        replacement = constituents or []
        self._validate_constituents(replacement)
        resolved_name = name.strip() if name and name.strip() else current.name
        meal = self.repository.replace_constituents(
            meal_id,
            resolved_name,
            description if description is not None else current.description,
            replacement,
        )
        if meal is None:
            raise NotFoundError("Meal not found")
        return self._resolve(meal)

    def delete_meal(self, meal_id: int) -> None:
        """Delete a meal; log entries keep their snapshots."""
        if not self.repository.delete_meal(meal_id):
            raise NotFoundError("Meal not found")

    def _validate_constituents(self, constituents: list[MealConstituent]) -> None:
        seen: set[int] = set()
        for constituent in constituents:
            ensure_positive_servings(constituent.servings)
            if constituent.food_id in seen:
                raise InvalidInputError("A food can only appear once in a meal")
            seen.add(constituent.food_id)
            self.food_service.get_food(constituent.food_id)

    def _resolve(self, meal: MealRecord) -> MealDetail:
        resolved: list[ResolvedConstituent] = []
        totals = NutrientProfile.zero()
        for constituent in meal.constituents:
            food = self.food_service.get_food(constituent.food_id)
            totals = totals + scale_food(food, constituent.servings)
            resolved.append(
                ResolvedConstituent(food=food, servings=constituent.servings)
            )
        return MealDetail(meal=meal, constituents=resolved, totals=totals)


def compute_meal_display(detail: MealDetail) -> MealDisplay:
    """Attach calorie percentages to a meal's totals."""
    totals = detail.totals
    return MealDisplay(
        detail=detail,
        percentages=macro_percentages(
            totals.protein_g, totals.net_carbs_g, totals.fat_g, totals.calories
        ),
    )
