"""Macro math shared by foods, meals, log entries and period summaries."""

from dataclasses import dataclass

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9


@dataclass(frozen=True)
class MacroPercentages:
    """Share of total calories contributed by each macronutrient.

    The three values are computed independently against recorded calories and
    are not normalized, so they need not sum to 100.
    """

    protein: float
    carbs: float
    fat: float


def net_carbs(carbs_g: float, fiber_g: float) -> float:
    """Return carbohydrate grams minus fiber grams.

    The result is not clamped and may be negative when fiber exceeds carbs.
    """
    return carbs_g - fiber_g


def macro_percentage(
    macro_grams: float, kcal_per_gram: float, total_calories: float
) -> float:
    """Return the percentage of calories a macro contributes, 0 without calories."""
    if total_calories <= 0:
        return 0.0
    return macro_grams * kcal_per_gram / total_calories * 100


def macro_percentages(
    protein_g: float, net_carbs_g: float, fat_g: float, total_calories: float
) -> MacroPercentages:
    """Compute protein, net carb and fat percentages of total calories."""
    return MacroPercentages(
        protein=macro_percentage(protein_g, PROTEIN_KCAL_PER_G, total_calories),
        carbs=macro_percentage(net_carbs_g, CARBS_KCAL_PER_G, total_calories),
        fat=macro_percentage(fat_g, FAT_KCAL_PER_G, total_calories),
    )
