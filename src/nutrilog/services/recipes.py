"""Services for recipes and their ingredients."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from nutrilog.domain.errors import ReferenceConflictError
from nutrilog.domain.nutrition import Ingredient, Recipe, RecipeInput
from nutrilog.services.access import require_owned
from nutrilog.services.clock import utc_now
from nutrilog.services.foods import FoodRepository

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes and ingredients.

    Recipe and ingredient reads carry macros computed from the current food rows.
    """

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return a user's recipes with summed ingredient macros."""

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id, if present."""

    def create_recipe(
        self, user_id: UUID, recipe: RecipeInput, now: datetime
    ) -> Recipe:
        """Create a recipe and return it."""

    def update_recipe(
        self, recipe_id: UUID, recipe: RecipeInput, now: datetime
    ) -> Recipe:
        """Replace a recipe's mutable fields and return it."""

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a recipe together with its ingredients."""

    def is_recipe_referenced(self, recipe_id: UUID) -> bool:
        """Return true when a consumption uses the recipe."""

    def list_ingredients(self, recipe_id: UUID) -> list[Ingredient]:
        """Return a recipe's ingredients."""

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""

    def create_ingredient(  # noqa: PLR0913
        self,
        user_id: UUID,
        recipe_id: UUID,
        food_id: UUID,
        quantity: float,
        now: datetime,
    ) -> Ingredient:
        """Create an ingredient and return it."""

    def update_ingredient(
        self, ingredient_id: UUID, food_id: UUID, quantity: float, now: datetime
    ) -> Ingredient:
        """Replace an ingredient's food and quantity."""

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        """Delete an ingredient."""


@dataclass
class RecipeService:
    """Application service for recipes and ingredients."""

    repository: RecipeRepository
    food_repository: FoodRepository
    clock: Callable[[], datetime] = utc_now

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return all recipes owned by the user."""
        return self.repository.list_recipes(user_id)

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> Recipe:
        """Return a recipe the user owns."""
        return require_owned(
            "Recipe", recipe_id, self.repository.get_recipe(recipe_id), user_id
        )

    def create_recipe(self, user_id: UUID, recipe: RecipeInput) -> Recipe:
        """Create a recipe for the user."""
        return self.repository.create_recipe(user_id, recipe, self.clock())

    def update_recipe(
        self, user_id: UUID, recipe_id: UUID, recipe: RecipeInput
    ) -> Recipe:
        """Replace a recipe's fields after checking ownership."""
        self.get_recipe(user_id, recipe_id)
        return self.repository.update_recipe(recipe_id, recipe, self.clock())

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        """Delete a recipe and its ingredients unless it has been consumed."""
        self.get_recipe(user_id, recipe_id)
        if self.repository.is_recipe_referenced(recipe_id):
            raise ReferenceConflictError(
                f"Recipe {recipe_id} is still used by consumptions"
            )
        self.repository.delete_recipe(recipe_id)
        _logger.info("Deleted recipe %s", recipe_id)

    def list_ingredients(self, user_id: UUID, recipe_id: UUID) -> list[Ingredient]:
        """Return the ingredients of a recipe the user owns."""
        self.get_recipe(user_id, recipe_id)
        return self.repository.list_ingredients(recipe_id)

    def get_ingredient(self, user_id: UUID, ingredient_id: UUID) -> Ingredient:
        """Return an ingredient the user owns."""
        return require_owned(
            "Ingredient",
            ingredient_id,
            self.repository.get_ingredient(ingredient_id),
            user_id,
        )

    def add_ingredient(
        self, user_id: UUID, recipe_id: UUID, food_id: UUID, quantity: float
    ) -> Ingredient:
        """Add a food to a recipe; both must belong to the user."""
        self.get_recipe(user_id, recipe_id)
        self._require_food(user_id, food_id)
        return self.repository.create_ingredient(
            user_id, recipe_id, food_id, quantity, self.clock()
        )

    def update_ingredient(
        self, user_id: UUID, ingredient_id: UUID, food_id: UUID, quantity: float
    ) -> Ingredient:
        """Replace an ingredient's food and quantity."""
        self.get_ingredient(user_id, ingredient_id)
        self._require_food(user_id, food_id)
        return self.repository.update_ingredient(
            ingredient_id, food_id, quantity, self.clock()
        )

    def delete_ingredient(self, user_id: UUID, ingredient_id: UUID) -> Ingredient:
        """Delete an ingredient and return what was removed."""
        ingredient = self.get_ingredient(user_id, ingredient_id)
        self.repository.delete_ingredient(ingredient_id)
        return ingredient

    def _require_food(self, user_id: UUID, food_id: UUID) -> None:
        require_owned("Food", food_id, self.food_repository.get_food(food_id), user_id)
