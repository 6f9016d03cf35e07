"""Log entry service computing nutrient snapshots."""

from dataclasses import dataclass
from datetime import date, time
from typing import Protocol

from macro_tracker.domain.errors import InvalidInputError, NotFoundError
from macro_tracker.domain.logs import (
    FoodSource,
    LogEntry,
    LogSource,
    MealSource,
    NewLogEntry,
)
from macro_tracker.domain.nutrition import NutrientSnapshot
from macro_tracker.services.foods import FoodService, ensure_positive_servings
from macro_tracker.services.meals import MealService


class LogEntryRepository(Protocol):
    """Persistence interface for log entries."""

    def list_entries(self, start: date | None, end: date | None) -> list[LogEntry]:
        """Return entries in the inclusive range, newest first."""

    def get_entry(self, entry_id: int) -> LogEntry | None:
        """Return a log entry by id, if present."""

    def insert_entry(self, entry: NewLogEntry) -> LogEntry:
        """Insert a log entry and return it."""

    def update_entry(self, entry_id: int, entry: NewLogEntry) -> LogEntry | None:
        """Overwrite a log entry and return it."""

    def delete_entry(self, entry_id: int) -> bool:
        """Delete a log entry, returning whether a row was removed."""


def log_source_from_ids(food_id: int | None, meal_id: int | None) -> LogSource:
    """Build a log source from optional ids; exactly one must be set."""
    if food_id is not None and meal_id is not None:
        raise InvalidInputError("A log entry references either a food or a meal")
    if food_id is not None:
        return FoodSource(food_id)
    if meal_id is not None:
        return MealSource(meal_id)
    raise InvalidInputError("Missing required fields")


@dataclass
class LogService:
    """Service that snapshots nutrients onto log entries."""

    food_service: FoodService
    meal_service: MealService
    repository: LogEntryRepository

    def compute_snapshot(
        self, source: LogSource, servings: float = 1.0
    ) -> NutrientSnapshot:
        """Resolve current nutrients for a source and scale by servings.

        Meals are scaled twice: once per constituent inside the meal total and
        once here for the logged serving count.
        """
        ensure_positive_servings(servings)
        if isinstance(source, FoodSource):
            profile = self.food_service.get_food(source.food_id).profile
        elif isinstance(source, MealSource):
            profile = self.meal_service.aggregate(source.meal_id)
        else:
            raise InvalidInputError("Unknown log source")
        return NutrientSnapshot.from_profile(profile.scale(servings))

    def list_entries(
        self,
        day: date | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[LogEntry]:
        """List entries for a day, an inclusive range, or everything."""
        if day is not None:
            return self.repository.list_entries(day, day)
        if start is not None and end is not None:
            return self.repository.list_entries(start, end)
        return self.repository.list_entries(None, None)

    def get_entry(self, entry_id: int) -> LogEntry:
        """Return a log entry or raise NotFoundError."""
        entry = self.repository.get_entry(entry_id)
        if entry is None:
            raise NotFoundError("Log entry not found")
        return entry

    def create_entry(  # noqa: PLR0913
        self,
        log_date: date,
        log_time: time,
        source: LogSource,
        servings: float = 1.0,
        notes: str | None = None,
    ) -> LogEntry:
        """Snapshot the source's nutrients and persist a new entry."""
        snapshot = self.compute_snapshot(source, servings)
        return self.repository.insert_entry(
            NewLogEntry(
                log_date=log_date,
                log_time=log_time,
                source=source,
                servings=servings,
                snapshot=snapshot,
                notes=notes,
            )
        )

    def update_entry(  # noqa: PLR0913
        self,
        entry_id: int,
        log_date: date | None = None,
        log_time: time | None = None,
        servings: float | None = None,
        notes: str | None = None,
    ) -> LogEntry:
        """Rewrite an entry, regenerating its snapshot from current data."""
        current = self.get_entry(entry_id)
        if current.source is None:
            raise NotFoundError("The food or meal for this log entry was deleted")
        new_servings = servings if servings is not None else current.servings
        snapshot = self.compute_snapshot(current.source, new_servings)
        updated = self.repository.update_entry(
            entry_id,
            NewLogEntry(
                log_date=log_date if log_date is not None else current.log_date,
                log_time=log_time if log_time is not None else current.log_time,
                source=current.source,
                servings=new_servings,
                snapshot=snapshot,
                notes=notes if notes is not None else current.notes,
            ),
        )
        if updated is None:
            raise NotFoundError("Log entry not found")
        return updated

    def delete_entry(self, entry_id: int) -> None:
        """Delete a log entry."""
        if not self.repository.delete_entry(entry_id):
            raise NotFoundError("Log entry not found")
