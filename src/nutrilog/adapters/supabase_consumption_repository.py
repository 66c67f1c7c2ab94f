"""Supabase-backed consumption repository."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from supabase import Client

from nutrilog.adapters.supabase_queries import (
    execute,
    first_row,
    parse_date,
    parse_macros,
)
from nutrilog.adapters.supabase_recipe_repository import embedded_recipe_macros
from nutrilog.domain.errors import NotFoundError, StorageError
from nutrilog.domain.nutrition import (
    ConsumableKind,
    ConsumableRef,
    Consumption,
    ConsumptionFilter,
    ConsumptionInput,
)
from nutrilog.services.aggregation import (
    food_consumption_macros,
    recipe_consumption_macros,
)
from nutrilog.services.consumptions import ConsumptionRepository

_CONSUMPTION_SELECT = (
    "id, user_id, food_id, recipe_id, quantity, consumed_at, "
    "foods(name, kcal, fat, carbs, protein), "
    "recipes(name, quantity, ingredients(quantity, foods(kcal, fat, carbs, protein)))"
)


@dataclass
class SupabaseConsumptionRepository(ConsumptionRepository):
    """Supabase implementation for consumptions."""

    client: Client

    def list_consumptions(
        self, user_id: UUID, consumption_filter: ConsumptionFilter
    ) -> list[Consumption]:
        """Return a user's consumptions, most recently updated first."""
        query = (
            self.client.table("consumptions")
            .select(_CONSUMPTION_SELECT)
            .eq("user_id", str(user_id))
        )
        if consumption_filter.consumed_at is not None:
            query = query.eq("consumed_at", consumption_filter.consumed_at.isoformat())
        if consumption_filter.consumable is not None:
            ref = consumption_filter.consumable
            column = "food_id" if ref.kind is ConsumableKind.FOOD else "recipe_id"
            query = query.eq(column, str(ref.id))
        response = execute(query.order("updated_at", desc=True))
        return [_parse_consumption(row) for row in response.data or []]

    def get_consumption(self, consumption_id: UUID) -> Consumption | None:
        """Return a consumption by id, if present."""
        response = execute(
            self.client.table("consumptions")
            .select(_CONSUMPTION_SELECT)
            .eq("id", str(consumption_id))
            .limit(1)
        )
        row = first_row(response)
        return _parse_consumption(row) if row else None

    def create_consumption(
        self, user_id: UUID, consumption: ConsumptionInput, now: datetime
    ) -> Consumption:
        """Create a consumption row and return it with derived macros."""
        response = execute(
            self.client.table("consumptions").insert(
                {
                    "user_id": str(user_id),
                    **_consumption_columns(consumption),
                    "created_at": now.isoformat(),
                    "updated_at": now.isoformat(),
                }
            )
        )
        row = first_row(response)
        if row is None:
            raise StorageError("Failed to create consumption")
        return self._require_consumption(UUID(row["id"]))

    def update_consumption(
        self, consumption_id: UUID, consumption: ConsumptionInput, now: datetime
    ) -> Consumption:
        """Replace a consumption's fields and return it."""
        execute(
            self.client.table("consumptions")
            .update(
                {**_consumption_columns(consumption), "updated_at": now.isoformat()}
            )
            .eq("id", str(consumption_id))
        )
        return self._require_consumption(consumption_id)

    def delete_consumption(self, consumption_id: UUID) -> None:
        """Delete a consumption row."""
        execute(
            self.client.table("consumptions").delete().eq("id", str(consumption_id))
        )

    def _require_consumption(self, consumption_id: UUID) -> Consumption:
        consumption = self.get_consumption(consumption_id)
        if consumption is None:
            raise NotFoundError("Consumption", consumption_id)
        return consumption


def _consumption_columns(consumption: ConsumptionInput) -> dict[str, object]:
    ref = consumption.consumable
    return {
        "food_id": str(ref.food_id) if ref.food_id else None,
        "recipe_id": str(ref.recipe_id) if ref.recipe_id else None,
        "quantity": consumption.quantity,
        "consumed_at": consumption.consumed_at.isoformat(),
    }


def _parse_consumption(row: dict[str, Any]) -> Consumption:
    """Parse a consumption row, deriving macros from the food or recipe."""
    consumable = ConsumableRef.from_columns(
        UUID(row["food_id"]) if row.get("food_id") else None,
        UUID(row["recipe_id"]) if row.get("recipe_id") else None,
    )
    quantity = float(row.get("quantity", 0.0))
    if consumable.kind is ConsumableKind.FOOD:
        food = row.get("foods") or {}
        name = str(food.get("name", ""))
        macros = food_consumption_macros(parse_macros(food), quantity)
    else:
        recipe = row.get("recipes") or {}
        name = str(recipe.get("name", ""))
        macros = recipe_consumption_macros(
            embedded_recipe_macros(recipe),
            float(recipe.get("quantity") or 0.0),
            quantity,
        )
    return Consumption(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        consumable=consumable,
        consumable_name=name,
        quantity=quantity,
        consumed_at=parse_date(row["consumed_at"]),
        macros=macros,
    )
