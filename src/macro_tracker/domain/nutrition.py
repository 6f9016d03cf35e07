"""Nutrient value objects."""

from dataclasses import dataclass

from macro_tracker.domain.macros import net_carbs


@dataclass(frozen=True)
class NutrientProfile:
    """Calories and macro grams for some quantity of food."""

    calories: float
    protein_g: float
    carbs_g: float
    fiber_g: float
    fat_g: float

    @classmethod
    def zero(cls) -> "NutrientProfile":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0)

    @property
    def net_carbs_g(self) -> float:
        return net_carbs(self.carbs_g, self.fiber_g)

    def scale(self, factor: float) -> "NutrientProfile":
        """Multiply every nutrient by a serving factor."""
        return NutrientProfile(
            calories=self.calories * factor,
            protein_g=self.protein_g * factor,
            carbs_g=self.carbs_g * factor,
            fiber_g=self.fiber_g * factor,
            fat_g=self.fat_g * factor,
        )

    def __add__(self, other: "NutrientProfile") -> "NutrientProfile":
        return NutrientProfile(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fiber_g=self.fiber_g + other.fiber_g,
            fat_g=self.fat_g + other.fat_g,
        )


@dataclass(frozen=True)
class NutrientSnapshot:
    """Nutrients frozen onto a log entry when it is written."""

    calories: float
    protein_g: float
    carbs_g: float
    net_carbs_g: float
    fiber_g: float
    fat_g: float

    @classmethod
    def from_profile(cls, profile: NutrientProfile) -> "NutrientSnapshot":
        return cls(
            calories=profile.calories,
            protein_g=profile.protein_g,
            carbs_g=profile.carbs_g,
            net_carbs_g=profile.net_carbs_g,
            fiber_g=profile.fiber_g,
            fat_g=profile.fat_g,
        )
