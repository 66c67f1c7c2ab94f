"""Services for logging consumptions."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from nutrilog.domain.nutrition import (
    ConsumableKind,
    ConsumableRef,
    Consumption,
    ConsumptionFilter,
    ConsumptionInput,
)
from nutrilog.services.access import require_owned
from nutrilog.services.clock import utc_now
from nutrilog.services.foods import FoodRepository
from nutrilog.services.recipes import RecipeRepository


class ConsumptionRepository(Protocol):
    """Persistence interface for consumptions.

    Reads derive macros from the referenced food, or from the recipe's
    ingredients divided by the recipe yield.
    """

    def list_consumptions(
        self, user_id: UUID, consumption_filter: ConsumptionFilter
    ) -> list[Consumption]:
        """Return a user's consumptions matching the filter."""

    def get_consumption(self, consumption_id: UUID) -> Consumption | None:
        """Return a consumption by id, if present."""

    def create_consumption(
        self, user_id: UUID, consumption: ConsumptionInput, now: datetime
    ) -> Consumption:
        """Create a consumption and return it."""

    def update_consumption(
        self, consumption_id: UUID, consumption: ConsumptionInput, now: datetime
    ) -> Consumption:
        """Replace a consumption's fields and return it."""

    def delete_consumption(self, consumption_id: UUID) -> None:
        """Delete a consumption."""


@dataclass
class ConsumptionService:
    """Application service for consumption events."""

    repository: ConsumptionRepository
    food_repository: FoodRepository
    recipe_repository: RecipeRepository
    clock: Callable[[], datetime] = utc_now

    def list_consumptions(
        self,
        user_id: UUID,
        consumption_filter: ConsumptionFilter | None = None,
    ) -> list[Consumption]:
        """Return the user's consumptions, optionally filtered."""
        return self.repository.list_consumptions(
            user_id, consumption_filter or ConsumptionFilter.none()
        )

    def get_consumption(self, user_id: UUID, consumption_id: UUID) -> Consumption:
        """Return a consumption the user owns."""
        return require_owned(
            "Consumption",
            consumption_id,
            self.repository.get_consumption(consumption_id),
            user_id,
        )

    def create_consumption(
        self, user_id: UUID, consumption: ConsumptionInput
    ) -> Consumption:
        """Log a consumption of a food or recipe the user owns."""
        self._require_consumable(user_id, consumption.consumable)
        return self.repository.create_consumption(user_id, consumption, self.clock())

    def update_consumption(
        self, user_id: UUID, consumption_id: UUID, consumption: ConsumptionInput
    ) -> Consumption:
        """Replace a consumption after checking ownership of it and its target."""
        self.get_consumption(user_id, consumption_id)
        self._require_consumable(user_id, consumption.consumable)
        return self.repository.update_consumption(
            consumption_id, consumption, self.clock()
        )

    def delete_consumption(self, user_id: UUID, consumption_id: UUID) -> Consumption:
        """Delete a consumption and return what was removed."""
        consumption = self.get_consumption(user_id, consumption_id)
        self.repository.delete_consumption(consumption_id)
        return consumption

    def _require_consumable(self, user_id: UUID, ref: ConsumableRef) -> None:
        if ref.kind is ConsumableKind.FOOD:
            row = self.food_repository.get_food(ref.id)
            require_owned("Food", ref.id, row, user_id)
        else:
            row = self.recipe_repository.get_recipe(ref.id)
            require_owned("Recipe", ref.id, row, user_id)
