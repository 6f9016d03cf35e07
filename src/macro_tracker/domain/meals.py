"""Domain models for meals composed of foods."""

from dataclasses import dataclass

from macro_tracker.domain.foods import Food
from macro_tracker.domain.macros import MacroPercentages
from macro_tracker.domain.nutrition import NutrientProfile


@dataclass(frozen=True)
class MealConstituent:
    """A food reference and its serving count inside a meal."""

    food_id: int
    servings: float = 1.0


@dataclass(frozen=True)
class MealRecord:
    """Meal row with its constituent references."""

    id: int
    name: str
    description: str | None
    constituents: list[MealConstituent]


@dataclass(frozen=True)
class ResolvedConstituent:
    """Constituent with its food loaded."""

    food: Food
    servings: float


@dataclass(frozen=True)
class MealDetail:
    """Meal with resolved constituents and summed nutrients."""

    meal: MealRecord
    constituents: list[ResolvedConstituent]
    totals: NutrientProfile


@dataclass(frozen=True)
class MealDisplay:
    """Meal detail with calorie percentages."""

    detail: MealDetail
    percentages: MacroPercentages
