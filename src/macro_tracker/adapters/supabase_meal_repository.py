"""Supabase repository for meals."""

from dataclasses import dataclass

from supabase import Client

from macro_tracker.adapters.supabase_errors import translate_api_errors
from macro_tracker.domain.errors import UnexpectedError
from macro_tracker.domain.meals import MealConstituent, MealRecord
from macro_tracker.services.meals import MealRepository

_MEAL_COLUMNS = "id, name, description, meal_foods(food_id, servings)"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals.

    Multi-row writes go through Postgres functions so that the meal row and its
    constituents are written in a single transaction.
    """

    client: Client

    def list_meals(self) -> list[MealRecord]:
        """Return meals, newest first."""
        with translate_api_errors("fetch meals"):
            response = (
                self.client.table("meals")
                .select(_MEAL_COLUMNS)
                .order("created_at", desc=True)
                .execute()
            )
        return [_parse_meal(row) for row in response.data or []]

    def get_meal(self, meal_id: int) -> MealRecord | None:
        """Return a meal with constituents by id."""
        with translate_api_errors("fetch meal"):
            response = (
                self.client.table("meals")
                .select(_MEAL_COLUMNS)
                .eq("id", meal_id)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def create_meal(
        self,
        name: str,
        description: str | None,
        constituents: list[MealConstituent],
    ) -> MealRecord:
        """Insert the meal and its constituents atomically."""
        with translate_api_errors("create meal"):
            response = self.client.rpc(
                "create_meal_with_foods",
                {
                    "p_name": name,
                    "p_description": description,
                    "p_foods": _constituent_payload(constituents),
                },
            ).execute()
        if response.data is None:
            raise UnexpectedError("Failed to create meal")
        meal = self.get_meal(int(response.data))
        if meal is None:
            raise UnexpectedError("Failed to create meal")
        return meal

    def replace_constituents(
        self,
        meal_id: int,
        name: str,
        description: str | None,
        constituents: list[MealConstituent],
    ) -> MealRecord | None:
        """Update the meal row and replace its constituents atomically."""
        with translate_api_errors("update meal"):
            response = self.client.rpc(
                "replace_meal_foods",
                {
                    "p_meal_id": meal_id,
                    "p_name": name,
                    "p_description": description,
                    "p_foods": _constituent_payload(constituents),
                },
            ).execute()
        if not response.data:
            return None
        return self.get_meal(meal_id)

    def delete_meal(self, meal_id: int) -> bool:
        """Delete a meal; constituents cascade and log references are nulled."""
        with translate_api_errors("delete meal"):
            response = self.client.table("meals").delete().eq("id", meal_id).execute()
        return bool(response.data)


def _constituent_payload(
    constituents: list[MealConstituent],
) -> list[dict[str, object]]:
    return [
        {"food_id": constituent.food_id, "servings": constituent.servings}
        for constituent in constituents
    ]


def _parse_meal(row: dict[str, object]) -> MealRecord:
    constituents = [
        MealConstituent(
            food_id=int(item["food_id"]),
            servings=float(item.get("servings") or 1.0),
        )
        for item in row.get("meal_foods") or []
    ]
    return MealRecord(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        description=row.get("description"),
        constituents=constituents,
    )
