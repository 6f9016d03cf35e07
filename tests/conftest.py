"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, time

import pytest

from macro_tracker.config import Settings
from macro_tracker.containers import AppContainer
from macro_tracker.domain.errors import ConflictError, UnexpectedError
from macro_tracker.domain.foods import Food
from macro_tracker.domain.logs import (
    FoodSource,
    LogEntry,
    MealSource,
    NewLogEntry,
)
from macro_tracker.domain.meals import MealConstituent, MealRecord
from macro_tracker.domain.stats import DailyTotals
from macro_tracker.services.analytics import AnalyticsService, StatsRepository
from macro_tracker.services.foods import FoodRepository, FoodService
from macro_tracker.services.logs import LogEntryRepository, LogService
from macro_tracker.services.meals import MealRepository, MealService


@dataclass
class InMemoryDatabase:
    """Tables shared by the in-memory repositories."""

    foods: dict[int, Food] = field(default_factory=dict)
    meals: dict[int, MealRecord] = field(default_factory=dict)
    entries: dict[int, LogEntry] = field(default_factory=dict)
    next_id: int = 1

    def allocate_id(self) -> int:
        value = self.next_id
        self.next_id += 1
        return value


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository applying the schema's delete rules."""

    db: InMemoryDatabase

    def list_foods(self, search: str | None) -> list[Food]:
        foods = [
            food
            for food in self.db.foods.values()
            if not search or search.lower() in food.name.lower()
        ]
        return sorted(foods, key=lambda food: (not food.is_custom, food.name))

    def get_food(self, food_id: int) -> Food | None:
        return self.db.foods.get(food_id)

    def create_food(self, payload: dict[str, object]) -> Food:
        self._ensure_unique(str(payload["name"]), None)
        food = Food(id=self.db.allocate_id(), **payload)
        self.db.foods[food.id] = food
        return food

    def update_food(self, food_id: int, payload: dict[str, object]) -> Food | None:
        current = self.db.foods.get(food_id)
        if current is None:
            return None
        self._ensure_unique(str(payload.get("name", current.name)), food_id)
        updated = replace(current, **payload)
        self.db.foods[food_id] = updated
        return updated

    def delete_food(self, food_id: int) -> bool:
        if self.db.foods.pop(food_id, None) is None:
            return False
        for meal_id, meal in list(self.db.meals.items()):
            self.db.meals[meal_id] = replace(
                meal,
                constituents=[
                    item for item in meal.constituents if item.food_id != food_id
                ],
            )
        for entry_id, entry in list(self.db.entries.items()):
            if entry.source == FoodSource(food_id):
                self.db.entries[entry_id] = replace(entry, source=None)
        return True

    def _ensure_unique(self, name: str, food_id: int | None) -> None:
        for food in self.db.foods.values():
            if food.name == name and food.id != food_id:
                raise ConflictError("A food with this name already exists")


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository with all-or-nothing constituent writes."""

    db: InMemoryDatabase
    fail_next_write: bool = False

    def list_meals(self) -> list[MealRecord]:
        return sorted(self.db.meals.values(), key=lambda meal: meal.id, reverse=True)

    def get_meal(self, meal_id: int) -> MealRecord | None:
        return self.db.meals.get(meal_id)

    def create_meal(
        self,
        name: str,
        description: str | None,
        constituents: list[MealConstituent],
    ) -> MealRecord:
        self._check_write(constituents)
        meal = MealRecord(
            id=self.db.allocate_id(),
            name=name,
            description=description,
            constituents=list(constituents),
        )
        self.db.meals[meal.id] = meal
        return meal

    def replace_constituents(
        self,
        meal_id: int,
        name: str,
        description: str | None,
        constituents: list[MealConstituent],
    ) -> MealRecord | None:
        current = self.db.meals.get(meal_id)
        if current is None:
            return None
        self._check_write(constituents)
        updated = MealRecord(
            id=meal_id,
            name=name,
            description=description,
            constituents=list(constituents),
        )
        self.db.meals[meal_id] = updated
        return updated

    def delete_meal(self, meal_id: int) -> bool:
        if self.db.meals.pop(meal_id, None) is None:
            return False
        for entry_id, entry in list(self.db.entries.items()):
            if entry.source == MealSource(meal_id):
                self.db.entries[entry_id] = replace(entry, source=None)
        return True

    def _check_write(self, constituents: list[MealConstituent]) -> None:
        if self.fail_next_write:
            self.fail_next_write = False
            raise UnexpectedError("Failed to update meal")
        for constituent in constituents:
            if constituent.food_id not in self.db.foods:
                raise UnexpectedError("Failed to update meal")


@dataclass
class InMemoryLogEntryRepository(LogEntryRepository):
    """In-memory log entry repository."""

    db: InMemoryDatabase

    def list_entries(self, start: date | None, end: date | None) -> list[LogEntry]:
        entries = [
            entry
            for entry in self.db.entries.values()
            if (start is None or entry.log_date >= start)
            and (end is None or entry.log_date <= end)
        ]
        return sorted(
            entries, key=lambda entry: (entry.log_date, entry.log_time), reverse=True
        )

    def get_entry(self, entry_id: int) -> LogEntry | None:
        return self.db.entries.get(entry_id)

    def insert_entry(self, entry: NewLogEntry) -> LogEntry:
        stored = self._to_entry(self.db.allocate_id(), entry)
        self.db.entries[stored.id] = stored
        return stored

    def update_entry(self, entry_id: int, entry: NewLogEntry) -> LogEntry | None:
        if entry_id not in self.db.entries:
            return None
        stored = self._to_entry(entry_id, entry)
        self.db.entries[entry_id] = stored
        return stored

    def delete_entry(self, entry_id: int) -> bool:
        return self.db.entries.pop(entry_id, None) is not None

    def _to_entry(self, entry_id: int, entry: NewLogEntry) -> LogEntry:
        food_name = None
        meal_name = None
        if isinstance(entry.source, FoodSource):
            food = self.db.foods.get(entry.source.food_id)
            food_name = food.name if food else None
        if isinstance(entry.source, MealSource):
            meal = self.db.meals.get(entry.source.meal_id)
            meal_name = meal.name if meal else None
        return LogEntry(
            id=entry_id,
            log_date=entry.log_date,
            log_time=entry.log_time,
            source=entry.source,
            servings=entry.servings,
            snapshot=entry.snapshot,
            notes=entry.notes,
            food_name=food_name,
            meal_name=meal_name,
        )


@dataclass
class InMemoryStatsRepository(StatsRepository):
    """In-memory equivalent of the grouped SUM query."""

    db: InMemoryDatabase

    def sum_log_entries(self, start: date, end: date) -> list[DailyTotals]:
        rows: dict[date, DailyTotals] = {}
        for entry in self.db.entries.values():
            if not start <= entry.log_date <= end:
                continue
            row = rows.get(
                entry.log_date,
                DailyTotals(entry.log_date, 0, 0.0, 0.0, 0.0, 0.0),
            )
            rows[entry.log_date] = DailyTotals(
                day=row.day,
                entries=row.entries + 1,
                calories=row.calories + entry.snapshot.calories,
                protein_g=row.protein_g + entry.snapshot.protein_g,
                net_carbs_g=row.net_carbs_g + entry.snapshot.net_carbs_g,
                fat_g=row.fat_g + entry.snapshot.fat_g,
            )
        return [rows[day] for day in sorted(rows)]


@dataclass
class Services:
    """Services wired against one in-memory database."""

    db: InMemoryDatabase
    foods: FoodService
    meals: MealService
    logs: LogService
    analytics: AnalyticsService


def build_services(db: InMemoryDatabase | None = None) -> Services:
    database = db or InMemoryDatabase()
    food_service = FoodService(InMemoryFoodRepository(database))
    meal_service = MealService(
        food_service=food_service, repository=InMemoryMealRepository(database)
    )
    log_service = LogService(
        food_service=food_service,
        meal_service=meal_service,
        repository=InMemoryLogEntryRepository(database),
    )
    analytics_service = AnalyticsService(InMemoryStatsRepository(database))
    return Services(
        db=database,
        foods=food_service,
        meals=meal_service,
        logs=log_service,
        analytics=analytics_service,
    )


def food_payload(name: str, **overrides: float) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": name,
        "calories": 100.0,
        "protein_g": 10.0,
        "carbs_g": 10.0,
        "fiber_g": 0.0,
        "fat_g": 2.0,
    }
    payload.update(overrides)
    return payload


def log_at(day: str, clock: str = "12:00") -> tuple[date, time]:
    return date.fromisoformat(day), time.fromisoformat(clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def services() -> Services:
    return build_services()


@pytest.fixture
def container(settings: Settings, services: Services) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        food_service=services.foods,
        meal_service=services.meals,
        log_service=services.logs,
        analytics_service=services.analytics,
        close_resources=close_resources,
    )
