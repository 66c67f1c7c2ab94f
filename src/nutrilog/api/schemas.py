"""Request models for the JSON API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from nutrilog.domain.nutrition import (
    ConsumableKind,
    ConsumableRef,
    ConsumptionInput,
    FlagUpdate,
    FoodInput,
    MacroProfile,
    RecipeInput,
)


class LoginRequest(BaseModel):
    """Username and password submitted at login."""

    username: str
    password: str


class FoodPayload(BaseModel):
    """Full set of a food's mutable fields; macros are per unit."""

    name: str = Field(min_length=1)
    kcal: float = Field(ge=0)
    fat: float = Field(ge=0)
    carbs: float = Field(ge=0)
    protein: float = Field(ge=0)
    hidden: bool = False
    starred: bool = False

    def to_input(self) -> FoodInput:
        return FoodInput(
            name=self.name,
            macros=MacroProfile(
                kcal=self.kcal, fat=self.fat, carbs=self.carbs, protein=self.protein
            ),
            hidden=FlagUpdate.from_bool(self.hidden),
            starred=FlagUpdate.from_bool(self.starred),
        )


class RecipePayload(BaseModel):
    """Full set of a recipe's mutable fields."""

    name: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    hidden: bool = False
    starred: bool = False

    def to_input(self) -> RecipeInput:
        return RecipeInput(
            name=self.name,
            quantity=self.quantity,
            hidden=FlagUpdate.from_bool(self.hidden),
            starred=FlagUpdate.from_bool(self.starred),
        )


class IngredientPayload(BaseModel):
    """A food and quantity to add to a recipe."""

    recipe_id: UUID
    food_id: UUID
    quantity: float = Field(gt=0)


class IngredientUpdatePayload(BaseModel):
    """Replacement food and quantity for an ingredient."""

    food_id: UUID
    quantity: float = Field(gt=0)


class ConsumptionPayload(BaseModel):
    """A consumption of a food or a recipe."""

    consumable_type: str
    consumable_id: UUID
    quantity: float = Field(gt=0)
    consumed_at: date

    def to_input(self) -> ConsumptionInput:
        return ConsumptionInput(
            consumable=ConsumableRef(
                kind=ConsumableKind.parse(self.consumable_type),
                id=self.consumable_id,
            ),
            quantity=self.quantity,
            consumed_at=self.consumed_at,
        )


class WeightPayload(BaseModel):
    """A body weight measurement."""

    weight: float = Field(gt=0)
    measured_at: date
