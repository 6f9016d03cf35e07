"""Domain models for consumption log entries."""

from dataclasses import dataclass
from datetime import date, time

from macro_tracker.domain.nutrition import NutrientSnapshot


@dataclass(frozen=True)
class FoodSource:
    """Log entry source pointing at a single food."""

    food_id: int


@dataclass(frozen=True)
class MealSource:
    """Log entry source pointing at a meal."""

    meal_id: int


LogSource = FoodSource | MealSource


@dataclass(frozen=True)
class LogEntry:
    """A consumption event with its nutrient snapshot.

    ``source`` is None once the referenced food or meal has been deleted; the
    snapshot is kept as written.
    """

    id: int
    log_date: date
    log_time: time
    source: LogSource | None
    servings: float
    snapshot: NutrientSnapshot
    notes: str | None = None
    food_name: str | None = None
    meal_name: str | None = None

    @property
    def food_id(self) -> int | None:
        return self.source.food_id if isinstance(self.source, FoodSource) else None

    @property
    def meal_id(self) -> int | None:
        return self.source.meal_id if isinstance(self.source, MealSource) else None


@dataclass(frozen=True)
class NewLogEntry:
    """Values for inserting or rewriting a log entry."""

    log_date: date
    log_time: time
    source: LogSource
    servings: float
    snapshot: NutrientSnapshot
    notes: str | None = None
