"""Supabase repository for food log entries."""

from dataclasses import dataclass
from datetime import date, time

from supabase import Client

from macro_tracker.adapters.supabase_errors import translate_api_errors
from macro_tracker.domain.errors import UnexpectedError
from macro_tracker.domain.logs import (
    FoodSource,
    LogEntry,
    LogSource,
    MealSource,
    NewLogEntry,
)
from macro_tracker.domain.nutrition import NutrientSnapshot
from macro_tracker.services.logs import LogEntryRepository

_LOG_COLUMNS = "*, foods(name), meals(name)"


@dataclass
class SupabaseLogEntryRepository(LogEntryRepository):
    """Supabase implementation for log entries."""

    client: Client

    def list_entries(self, start: date | None, end: date | None) -> list[LogEntry]:
        """Return entries in the inclusive range, newest first."""
        query = self.client.table("food_log").select(_LOG_COLUMNS)
        if start is not None:
            query = query.gte("log_date", start.isoformat())
        if end is not None:
            query = query.lte("log_date", end.isoformat())
        with translate_api_errors("fetch logs"):
            response = (
                query.order("log_date", desc=True)
                .order("log_time", desc=True)
                .execute()
            )
        return [_parse_entry(row) for row in response.data or []]

    def get_entry(self, entry_id: int) -> LogEntry | None:
        """Return a log entry by id."""
        with translate_api_errors("fetch log"):
            response = (
                self.client.table("food_log")
                .select(_LOG_COLUMNS)
                .eq("id", entry_id)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def insert_entry(self, entry: NewLogEntry) -> LogEntry:
        """Insert a log entry row."""
        with translate_api_errors("create log"):
            response = self.client.table("food_log").insert(_to_row(entry)).execute()
        if not response.data:
            raise UnexpectedError("Failed to create log")
        return _parse_entry(response.data[0])

    def update_entry(self, entry_id: int, entry: NewLogEntry) -> LogEntry | None:
        """Overwrite a log entry row with a recomputed snapshot."""
        with translate_api_errors("update log"):
            response = (
                self.client.table("food_log")
                .update(_to_row(entry))
                .eq("id", entry_id)
                .execute()
            )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def delete_entry(self, entry_id: int) -> bool:
        """Delete a log entry row."""
        with translate_api_errors("delete log"):
            response = (
                self.client.table("food_log").delete().eq("id", entry_id).execute()
            )
        return bool(response.data)


def _to_row(entry: NewLogEntry) -> dict[str, object]:
    snapshot = entry.snapshot
    food_id = entry.source.food_id if isinstance(entry.source, FoodSource) else None
    meal_id = entry.source.meal_id if isinstance(entry.source, MealSource) else None
    return {
        "log_date": entry.log_date.isoformat(),
        "log_time": entry.log_time.isoformat(),
        "food_id": food_id,
        "meal_id": meal_id,
        "servings": entry.servings,
        "calories": snapshot.calories,
        "protein_grams": snapshot.protein_g,
        "carbs_grams": snapshot.carbs_g,
        "net_carbs_grams": snapshot.net_carbs_g,
        "fiber_grams": snapshot.fiber_g,
        "fat_grams": snapshot.fat_g,
        "notes": entry.notes,
    }


def _parse_source(row: dict[str, object]) -> LogSource | None:
    if row.get("food_id") is not None:
        return FoodSource(int(row["food_id"]))
    if row.get("meal_id") is not None:
        return MealSource(int(row["meal_id"]))
    return None


def _joined_name(row: dict[str, object], table: str) -> str | None:
    joined = row.get(table)
    if isinstance(joined, dict):
        name = joined.get("name")
        return str(name) if name is not None else None
    return None


def _parse_entry(row: dict[str, object]) -> LogEntry:
    """Parse a food_log row into a domain model."""
    return LogEntry(
        id=int(row["id"]),
        log_date=date.fromisoformat(str(row["log_date"])),
        log_time=time.fromisoformat(str(row["log_time"])),
        source=_parse_source(row),
        servings=float(row.get("servings") or 1.0),
        snapshot=NutrientSnapshot(
            calories=float(row.get("calories") or 0.0),
            protein_g=float(row.get("protein_grams") or 0.0),
            carbs_g=float(row.get("carbs_grams") or 0.0),
            net_carbs_g=float(row.get("net_carbs_grams") or 0.0),
            fiber_g=float(row.get("fiber_grams") or 0.0),
            fat_g=float(row.get("fat_grams") or 0.0),
        ),
        notes=row.get("notes"),
        food_name=_joined_name(row, "foods"),
        meal_name=_joined_name(row, "meals"),
    )
