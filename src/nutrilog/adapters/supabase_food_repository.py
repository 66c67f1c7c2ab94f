"""Supabase-backed food repository."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from supabase import Client

from nutrilog.adapters.supabase_queries import (
    execute,
    first_row,
    flag_columns,
    has_rows,
    insert_flag,
    macro_columns,
    parse_datetime,
    parse_macros,
)
from nutrilog.domain.errors import NotFoundError, StorageError
from nutrilog.domain.nutrition import Food, FoodInput
from nutrilog.services.foods import FoodRepository

_FOOD_COLUMNS = (
    "id, user_id, name, kcal, fat, carbs, protein, hidden_at, starred_at, created_at"
)


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for foods."""

    client: Client

    def list_foods(self, user_id: UUID) -> list[Food]:
        """Return a user's foods, most recently updated first."""
        response = execute(
            self.client.table("foods")
            .select(_FOOD_COLUMNS)
            .eq("user_id", str(user_id))
            .order("updated_at", desc=True)
        )
        return [_parse_food(row) for row in response.data or []]

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""
        response = execute(
            self.client.table("foods")
            .select(_FOOD_COLUMNS)
            .eq("id", str(food_id))
            .limit(1)
        )
        row = first_row(response)
        return _parse_food(row) if row else None

    def create_food(self, user_id: UUID, food: FoodInput, now: datetime) -> Food:
        """Create a food row and return it."""
        response = execute(
            self.client.table("foods").insert(
                {
                    "user_id": str(user_id),
                    "name": food.name,
                    **macro_columns(food.macros),
                    "hidden_at": insert_flag(food.hidden, now),
                    "starred_at": insert_flag(food.starred, now),
                    "created_at": now.isoformat(),
                    "updated_at": now.isoformat(),
                }
            )
        )
        row = first_row(response)
        if row is None:
            raise StorageError("Failed to create food")
        return _parse_food(row)

    def update_food(self, food_id: UUID, food: FoodInput, now: datetime) -> Food:
        """Replace a food's fields and return the stored row."""
        flags = {"hidden_at": food.hidden, "starred_at": food.starred}
        execute(
            self.client.table("foods")
            .update(
                {
                    "name": food.name,
                    **macro_columns(food.macros),
                    **flag_columns(flags, now),
                    "updated_at": now.isoformat(),
                }
            )
            .eq("id", str(food_id))
        )
        updated = self.get_food(food_id)
        if updated is None:
            raise NotFoundError("Food", food_id)
        return updated

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food row."""
        execute(self.client.table("foods").delete().eq("id", str(food_id)))

    def is_food_referenced(self, food_id: UUID) -> bool:
        """Return true when an ingredient or consumption uses the food."""
        return has_rows(self.client, "ingredients", "food_id", str(food_id)) or (
            has_rows(self.client, "consumptions", "food_id", str(food_id))
        )


def _parse_food(row: dict[str, Any]) -> Food:
    """Parse a food row into a domain model."""
    created_at = parse_datetime(row.get("created_at"))
    if created_at is None:
        raise StorageError(f"Food {row.get('id')} has no created_at")
    return Food(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name", "")),
        macros=parse_macros(row),
        hidden_at=parse_datetime(row.get("hidden_at")),
        starred_at=parse_datetime(row.get("starred_at")),
        created_at=created_at,
    )
