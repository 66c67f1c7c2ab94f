"""Nutrition domain models."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from nutrilog.domain.errors import InvalidReferenceError


@dataclass(frozen=True)
class MacroProfile:
    """Calories and macronutrients."""

    kcal: float
    fat: float
    carbs: float
    protein: float


ZERO_MACROS = MacroProfile(kcal=0.0, fat=0.0, carbs=0.0, protein=0.0)


class FlagUpdate(Enum):
    """Requested change to a first-set-wins timestamp such as ``hidden_at``."""

    LEAVE = "leave"
    SET = "set"
    CLEAR = "clear"

    @classmethod
    def from_bool(cls, value: bool | None) -> "FlagUpdate":
        """Map a form checkbox value to an update; ``None`` leaves the flag."""
        if value is None:
            return cls.LEAVE
        return cls.SET if value else cls.CLEAR


class ConsumableKind(Enum):
    """The two kinds of things a user can consume."""

    FOOD = "food"
    RECIPE = "recipe"

    @classmethod
    def parse(cls, raw: str) -> "ConsumableKind":
        """Parse a consumable type string."""
        try:
            return cls(raw)
        except ValueError as exc:
            raise InvalidReferenceError(f"Unknown consumable type: {raw!r}") from exc


@dataclass(frozen=True)
class ConsumableRef:
    """Reference to exactly one food or recipe."""

    kind: ConsumableKind
    id: UUID

    @classmethod
    def food(cls, food_id: UUID) -> "ConsumableRef":
        return cls(kind=ConsumableKind.FOOD, id=food_id)

    @classmethod
    def recipe(cls, recipe_id: UUID) -> "ConsumableRef":
        return cls(kind=ConsumableKind.RECIPE, id=recipe_id)

    @classmethod
    def from_columns(
        cls, food_id: UUID | None, recipe_id: UUID | None
    ) -> "ConsumableRef":
        """Build a reference from the two nullable storage columns."""
        if food_id is not None and recipe_id is not None:
            raise InvalidReferenceError("Both food and recipe are set")
        if food_id is not None:
            return cls.food(food_id)
        if recipe_id is not None:
            return cls.recipe(recipe_id)
        raise InvalidReferenceError("Neither food nor recipe is set")

    @property
    def food_id(self) -> UUID | None:
        return self.id if self.kind is ConsumableKind.FOOD else None

    @property
    def recipe_id(self) -> UUID | None:
        return self.id if self.kind is ConsumableKind.RECIPE else None


@dataclass(frozen=True)
class FoodInput:
    """Mutable fields of a food; macros are per one unit of quantity."""

    name: str
    macros: MacroProfile
    hidden: FlagUpdate = FlagUpdate.LEAVE
    starred: FlagUpdate = FlagUpdate.LEAVE


@dataclass(frozen=True)
class Food:
    """A food owned by a user."""

    id: UUID
    user_id: UUID
    name: str
    macros: MacroProfile
    hidden_at: datetime | None
    starred_at: datetime | None
    created_at: datetime


@dataclass(frozen=True)
class RecipeInput:
    """Mutable fields of a recipe."""

    name: str
    quantity: float
    hidden: FlagUpdate = FlagUpdate.LEAVE
    starred: FlagUpdate = FlagUpdate.LEAVE


@dataclass(frozen=True)
class Recipe:
    """A recipe with macros summed over its ingredients."""

    id: UUID
    user_id: UUID
    name: str
    quantity: float
    macros: MacroProfile
    hidden_at: datetime | None
    starred_at: datetime | None
    created_at: datetime


@dataclass(frozen=True)
class Ingredient:
    """A weighted food inside a recipe, with its macro contribution."""

    id: UUID
    user_id: UUID
    recipe_id: UUID
    food_id: UUID
    food_name: str
    quantity: float
    macros: MacroProfile


@dataclass(frozen=True)
class ConsumptionInput:
    """Mutable fields of a consumption."""

    consumable: ConsumableRef
    quantity: float
    consumed_at: date


@dataclass(frozen=True)
class Consumption:
    """A consumption event with macros derived at read time."""

    id: UUID
    user_id: UUID
    consumable: ConsumableRef
    consumable_name: str
    quantity: float
    consumed_at: date
    macros: MacroProfile


@dataclass(frozen=True)
class ConsumptionFilter:
    """Restricts a consumption listing to a date, a food or a recipe."""

    consumed_at: date | None = None
    consumable: ConsumableRef | None = None

    def __post_init__(self) -> None:
        if self.consumed_at is not None and self.consumable is not None:
            raise ValueError("A consumption filter takes a date or a consumable")

    @classmethod
    def none(cls) -> "ConsumptionFilter":
        return cls()

    @classmethod
    def on(cls, day: date) -> "ConsumptionFilter":
        return cls(consumed_at=day)

    @classmethod
    def for_food(cls, food_id: UUID) -> "ConsumptionFilter":
        return cls(consumable=ConsumableRef.food(food_id))

    @classmethod
    def for_recipe(cls, recipe_id: UUID) -> "ConsumptionFilter":
        return cls(consumable=ConsumableRef.recipe(recipe_id))
