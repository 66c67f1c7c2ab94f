"""Supabase-backed recipe and ingredient repository."""

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
    parse_datetime,
    parse_macros,
)
from nutrilog.domain.errors import NotFoundError, StorageError
from nutrilog.domain.nutrition import Ingredient, MacroProfile, Recipe, RecipeInput
from nutrilog.services.aggregation import ingredient_macros, recipe_macros
from nutrilog.services.recipes import RecipeRepository

# Embedded ingredient foods let the recipe totals be summed per row.
RECIPE_SELECT = (
    "id, user_id, name, quantity, hidden_at, starred_at, created_at, "
    "ingredients(quantity, foods(kcal, fat, carbs, protein))"
)
_INGREDIENT_SELECT = (
    "id, user_id, recipe_id, food_id, quantity, "
    "foods(name, kcal, fat, carbs, protein)"
)


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for recipes and ingredients."""

    client: Client

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return a user's recipes, most recently updated first."""
        response = execute(
            self.client.table("recipes")
            .select(RECIPE_SELECT)
            .eq("user_id", str(user_id))
            .order("updated_at", desc=True)
        )
        return [_parse_recipe(row) for row in response.data or []]

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = execute(
            self.client.table("recipes")
            .select(RECIPE_SELECT)
            .eq("id", str(recipe_id))
            .limit(1)
        )
        row = first_row(response)
        return _parse_recipe(row) if row else None

    def create_recipe(
        self, user_id: UUID, recipe: RecipeInput, now: datetime
    ) -> Recipe:
        """Create a recipe row and return it."""
        response = execute(
            self.client.table("recipes").insert(
                {
                    "user_id": str(user_id),
                    "name": recipe.name,
                    "quantity": recipe.quantity,
                    "hidden_at": insert_flag(recipe.hidden, now),
                    "starred_at": insert_flag(recipe.starred, now),
                    "created_at": now.isoformat(),
                    "updated_at": now.isoformat(),
                }
            )
        )
        row = first_row(response)
        if row is None:
            raise StorageError("Failed to create recipe")
        return _parse_recipe(row)

    def update_recipe(
        self, recipe_id: UUID, recipe: RecipeInput, now: datetime
    ) -> Recipe:
        """Replace a recipe's fields and return the stored row."""
        flags = {"hidden_at": recipe.hidden, "starred_at": recipe.starred}
        execute(
            self.client.table("recipes")
            .update(
                {
                    "name": recipe.name,
                    "quantity": recipe.quantity,
                    **flag_columns(flags, now),
                    "updated_at": now.isoformat(),
                }
            )
            .eq("id", str(recipe_id))
        )
        updated = self.get_recipe(recipe_id)
        if updated is None:
            raise NotFoundError("Recipe", recipe_id)
        return updated

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a recipe row; the database cascades to its ingredients."""
        execute(self.client.table("recipes").delete().eq("id", str(recipe_id)))

    def is_recipe_referenced(self, recipe_id: UUID) -> bool:
        """Return true when a consumption uses the recipe."""
        return has_rows(self.client, "consumptions", "recipe_id", str(recipe_id))

    def list_ingredients(self, recipe_id: UUID) -> list[Ingredient]:
        """Return a recipe's ingredients in insertion order."""
        response = execute(
            self.client.table("ingredients")
            .select(_INGREDIENT_SELECT)
            .eq("recipe_id", str(recipe_id))
            .order("created_at", desc=False)
        )
        return [_parse_ingredient(row) for row in response.data or []]

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""
        response = execute(
            self.client.table("ingredients")
            .select(_INGREDIENT_SELECT)
            .eq("id", str(ingredient_id))
            .limit(1)
        )
        row = first_row(response)
        return _parse_ingredient(row) if row else None

    def create_ingredient(  # noqa: PLR0913
        self,
        user_id: UUID,
        recipe_id: UUID,
        food_id: UUID,
        quantity: float,
        now: datetime,
    ) -> Ingredient:
        """Create an ingredient row and return it with its food."""
        response = execute(
            self.client.table("ingredients").insert(
                {
                    "user_id": str(user_id),
                    "recipe_id": str(recipe_id),
                    "food_id": str(food_id),
                    "quantity": quantity,
                    "created_at": now.isoformat(),
                    "updated_at": now.isoformat(),
                }
            )
        )
        row = first_row(response)
        if row is None:
            raise StorageError("Failed to create ingredient")
        return self._require_ingredient(UUID(row["id"]))

    def update_ingredient(
        self, ingredient_id: UUID, food_id: UUID, quantity: float, now: datetime
    ) -> Ingredient:
        """Replace an ingredient's food and quantity."""
        execute(
            self.client.table("ingredients")
            .update(
                {
                    "food_id": str(food_id),
                    "quantity": quantity,
                    "updated_at": now.isoformat(),
                }
            )
            .eq("id", str(ingredient_id))
        )
        return self._require_ingredient(ingredient_id)

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        """Delete an ingredient row."""
        execute(
            self.client.table("ingredients").delete().eq("id", str(ingredient_id))
        )

    def _require_ingredient(self, ingredient_id: UUID) -> Ingredient:
        ingredient = self.get_ingredient(ingredient_id)
        if ingredient is None:
            raise NotFoundError("Ingredient", ingredient_id)
        return ingredient


def embedded_recipe_macros(row: dict[str, Any]) -> MacroProfile:
    """Sum the embedded ``ingredients(quantity, foods(...))`` of a recipe row."""
    return recipe_macros(
        (parse_macros(ingredient.get("foods")), float(ingredient["quantity"]))
        for ingredient in row.get("ingredients") or []
    )


def _parse_recipe(row: dict[str, Any]) -> Recipe:
    """Parse a recipe row into a domain model."""
    created_at = parse_datetime(row.get("created_at"))
    if created_at is None:
        raise StorageError(f"Recipe {row.get('id')} has no created_at")
    return Recipe(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name", "")),
        quantity=float(row.get("quantity", 0.0)),
        macros=embedded_recipe_macros(row),
        hidden_at=parse_datetime(row.get("hidden_at")),
        starred_at=parse_datetime(row.get("starred_at")),
        created_at=created_at,
    )


def _parse_ingredient(row: dict[str, Any]) -> Ingredient:
    food = row.get("foods") or {}
    quantity = float(row.get("quantity", 0.0))
    return Ingredient(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        recipe_id=UUID(row["recipe_id"]),
        food_id=UUID(row["food_id"]),
        food_name=str(food.get("name", "")),
        quantity=quantity,
        macros=ingredient_macros(parse_macros(food), quantity),
    )
