"""Supabase repository for food entries."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_support import (
    optional_float,
    parse_datetime,
    parse_uuid,
    store_errors,
)
from fitness_tracker.domain.errors import StoreError
from fitness_tracker.domain.nutrition import Food, FoodEntry
from fitness_tracker.services.nutrition import FoodEntryRepository

ENTRY_COLUMNS = (
    "id, user_id, food_id, serving_count, meal_type, consumed_at, "
    "food:foods(id, name, brand, serving_size_g, calories, protein_g, carbs_g, fat_g)"
)


@dataclass
class SupabaseFoodEntryRepository(FoodEntryRepository):
    """Supabase implementation for food entry persistence."""

    client: Client

    def create_entry(self, user_id: UUID, payload: dict[str, object]) -> FoodEntry:
        """Insert a food entry row and return it."""
        with store_errors("add food entry"):
            response = (
                self.client.table("food_entries")
                .insert({**payload, "user_id": str(user_id)})
                .execute()
            )
        if not response.data:
            raise StoreError("Failed to add food entry")
        return _parse_entry(response.data[0])

    def list_entries(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[FoodEntry]:
        """Return the user's entries newest first."""
        with store_errors("fetch food entries"):
            query = (
                self.client.table("food_entries")
                .select(ENTRY_COLUMNS)
                .eq("user_id", str(user_id))
            )
            if start is not None:
                query = query.gte("consumed_at", start.isoformat())
            if end is not None:
                query = query.lte("consumed_at", end.isoformat())
            response = (
                query.order("consumed_at", desc=True).order("id", desc=False).execute()
            )
        return [_parse_entry(row) for row in response.data or []]

    def get_entry(self, entry_id: UUID) -> FoodEntry | None:
        """Return an entry with its food, if present."""
        with store_errors("fetch food entry"):
            response = (
                self.client.table("food_entries")
                .select(ENTRY_COLUMNS)
                .eq("id", str(entry_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def update_entry(self, entry_id: UUID, payload: dict[str, object]) -> FoodEntry:
        """Apply a partial update and return the updated row."""
        with store_errors("update food entry"):
            response = (
                self.client.table("food_entries")
                .update(payload)
                .eq("id", str(entry_id))
                .execute()
            )
        if not response.data:
            raise StoreError("Failed to update food entry")
        return _parse_entry(response.data[0])

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry row."""
        with store_errors("delete food entry"):
            self.client.table("food_entries").delete().eq(
                "id", str(entry_id)
            ).execute()


def _parse_entry(row: dict[str, Any]) -> FoodEntry:
    consumed_at = parse_datetime(row.get("consumed_at"))
    if consumed_at is None:
        raise StoreError("Failed to read food entry")
    food_row = row.get("food")
    return FoodEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food_id=parse_uuid(row.get("food_id")),
        serving_count=float(row.get("serving_count") or 1.0),
        meal_type=row.get("meal_type"),
        consumed_at=consumed_at,
        food=_parse_food(food_row) if isinstance(food_row, dict) else None,
    )


def _parse_food(row: dict[str, Any]) -> Food:
    return Food(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        brand=row.get("brand"),
        serving_size_g=optional_float(row.get("serving_size_g")),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fat_g=float(row.get("fat_g") or 0.0),
    )
