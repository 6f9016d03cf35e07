"""Supabase repository for the food database."""

from dataclasses import dataclass

from supabase import Client

from macro_tracker.adapters.supabase_errors import translate_api_errors
from macro_tracker.domain.errors import UnexpectedError
from macro_tracker.domain.foods import Food
from macro_tracker.services.foods import FoodRepository

_DUPLICATE_NAME = "A food with this name already exists"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for foods."""

    client: Client

    def list_foods(self, search: str | None) -> list[Food]:
        """Return foods, custom first then alphabetical."""
        query = self.client.table("foods").select("*")
        if search:
            query = query.ilike("name", f"%{search}%")
        with translate_api_errors("fetch foods"):
            response = (
                query.order("is_custom", desc=True)
                .order("name", desc=False)
                .execute()
            )
        return [_parse_food(row) for row in response.data or []]

    def get_food(self, food_id: int) -> Food | None:
        """Return a food by id, if present."""
        with translate_api_errors("fetch food"):
            response = (
                self.client.table("foods")
                .select("*")
                .eq("id", food_id)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def create_food(self, payload: dict[str, object]) -> Food:
        """Insert a food and return it."""
        with translate_api_errors("create food", _DUPLICATE_NAME):
            response = self.client.table("foods").insert(_to_row(payload)).execute()
        if not response.data:
            raise UnexpectedError("Failed to create food")
        return _parse_food(response.data[0])

    def update_food(self, food_id: int, payload: dict[str, object]) -> Food | None:
        """Update a food and return it."""
        with translate_api_errors("update food", _DUPLICATE_NAME):
            response = (
                self.client.table("foods")
                .update(_to_row(payload))
                .eq("id", food_id)
                .execute()
            )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def delete_food(self, food_id: int) -> bool:
        """Delete a food; the schema nulls log references and drops constituents."""
        with translate_api_errors("delete food"):
            response = self.client.table("foods").delete().eq("id", food_id).execute()
        return bool(response.data)


def _to_row(payload: dict[str, object]) -> dict[str, object]:
    columns = {
        "name": "name",
        "calories": "calories",
        "protein_g": "protein_grams",
        "carbs_g": "carbs_grams",
        "fiber_g": "fiber_grams",
        "fat_g": "fat_grams",
        "serving_size": "serving_size",
        "serving_unit": "serving_unit",
        "is_custom": "is_custom",
    }
    return {column: payload[key] for key, column in columns.items() if key in payload}


def _parse_food(row: dict[str, object]) -> Food:
    """Parse a foods row into a domain model."""
    return Food(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_grams") or 0.0),
        carbs_g=float(row.get("carbs_grams") or 0.0),
        fiber_g=float(row.get("fiber_grams") or 0.0),
        fat_g=float(row.get("fat_grams") or 0.0),
        serving_size=row.get("serving_size"),
        serving_unit=row.get("serving_unit"),
        is_custom=bool(row.get("is_custom", False)),
    )
