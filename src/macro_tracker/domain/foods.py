"""Domain models for the food database."""

from dataclasses import dataclass

from macro_tracker.domain.macros import MacroPercentages
from macro_tracker.domain.nutrition import NutrientProfile


@dataclass(frozen=True)
class Food:
    """A cataloged food with nutrients for one reference serving."""

    id: int
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fiber_g: float
    fat_g: float
    serving_size: str | None = None
    serving_unit: str | None = None
    is_custom: bool = False

    @property
    def profile(self) -> NutrientProfile:
        return NutrientProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fiber_g=self.fiber_g,
            fat_g=self.fat_g,
        )


@dataclass(frozen=True)
class FoodDisplay:
    """Food with derived net carbs and calorie percentages."""

    food: Food
    net_carbs_g: float
    percentages: MacroPercentages
