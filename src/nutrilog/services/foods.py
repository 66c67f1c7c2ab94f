"""Services for managing a user's foods."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from nutrilog.domain.errors import ReferenceConflictError
from nutrilog.domain.nutrition import FlagUpdate, Food, FoodInput
from nutrilog.services.access import require_owned
from nutrilog.services.clock import utc_now

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for foods."""

    def list_foods(self, user_id: UUID) -> list[Food]:
        """Return a user's foods, most recently updated first."""

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""

    def create_food(self, user_id: UUID, food: FoodInput, now: datetime) -> Food:
        """Create a food and return it."""

    def update_food(self, food_id: UUID, food: FoodInput, now: datetime) -> Food:
        """Replace a food's mutable fields and return it."""

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food."""

    def is_food_referenced(self, food_id: UUID) -> bool:
        """Return true when an ingredient or consumption uses the food."""


def apply_flag(
    current: datetime | None, update: FlagUpdate, now: datetime
) -> datetime | None:
    """Return the new value of a first-set-wins timestamp."""
    if update is FlagUpdate.SET:
        return current or now
    if update is FlagUpdate.CLEAR:
        return None
    return current


@dataclass
class FoodService:
    """Application service for food CRUD."""

    repository: FoodRepository
    clock: Callable[[], datetime] = utc_now

    def list_foods(self, user_id: UUID) -> list[Food]:
        """Return all foods owned by the user."""
        return self.repository.list_foods(user_id)

    def get_food(self, user_id: UUID, food_id: UUID) -> Food:
        """Return a food the user owns."""
        food = self.repository.get_food(food_id)
        return require_owned("Food", food_id, food, user_id)

    def create_food(self, user_id: UUID, food: FoodInput) -> Food:
        """Create a food for the user."""
        return self.repository.create_food(user_id, food, self.clock())

    def update_food(self, user_id: UUID, food_id: UUID, food: FoodInput) -> Food:
        """Replace a food's fields after checking ownership."""
        self.get_food(user_id, food_id)
        return self.repository.update_food(food_id, food, self.clock())

    def delete_food(self, user_id: UUID, food_id: UUID) -> None:
        """Delete a food unless a recipe or consumption still uses it."""
        self.get_food(user_id, food_id)
        if self.repository.is_food_referenced(food_id):
            raise ReferenceConflictError(
                f"Food {food_id} is used by an ingredient or consumption"
            )
        self.repository.delete_food(food_id)
        _logger.info("Deleted food %s", food_id)
