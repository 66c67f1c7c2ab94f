"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest
from argon2 import PasswordHasher

from nutrilog.config import Settings
from nutrilog.containers import AppContainer
from nutrilog.domain.consumables import ConsumableSummary
from nutrilog.domain.errors import NotFoundError, StorageError
from nutrilog.domain.models import UserRecord
from nutrilog.domain.nutrition import (
    ConsumableKind,
    ConsumableRef,
    Consumption,
    ConsumptionFilter,
    ConsumptionInput,
    Food,
    FoodInput,
    Ingredient,
    Recipe,
    RecipeInput,
)
from nutrilog.domain.sessions import SessionRecord
from nutrilog.domain.weights import WeightRecord
from nutrilog.services.aggregation import (
    food_consumption_macros,
    ingredient_macros,
    recipe_consumption_macros,
    recipe_macros,
)
from nutrilog.services.consumables import ConsumableRepository, ConsumableService
from nutrilog.services.consumptions import ConsumptionRepository, ConsumptionService
from nutrilog.services.credentials import CredentialService
from nutrilog.services.export import ExportRepository, ExportService
from nutrilog.services.foods import FoodRepository, FoodService, apply_flag
from nutrilog.services.recipes import RecipeRepository, RecipeService
from nutrilog.services.sessions import SessionRepository, SessionService
from nutrilog.services.stats import StatsService
from nutrilog.services.users import UserRepository, UserService
from nutrilog.services.weights import WeightRepository, WeightService

START = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)


@dataclass
class FakeClock:
    """Settable clock for services that take ``clock``."""

    now: datetime = START

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def fast_credentials() -> CredentialService:
    """Argon2 with minimal cost parameters so tests stay fast."""
    return CredentialService(PasswordHasher(time_cost=1, memory_cost=8, parallelism=1))


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)

    def get_by_username(self, username: str) -> UserRecord | None:
        return self.users.get(username)

    def create_user(self, username: str, password_hash: str) -> UserRecord:
        if username in self.users:
            raise StorageError(f"Username {username} is taken")
        user = UserRecord(id=uuid4(), username=username, password_hash=password_hash)
        self.users[username] = user
        return user

    def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        for username, user in self.users.items():
            if user.id == user_id:
                self.users[username] = replace(user, password_hash=password_hash)
                return
        raise NotFoundError(f"User {user_id} not found")


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[str, SessionRecord] = field(default_factory=dict)

    def create_session(self, session: SessionRecord) -> None:
        self.sessions[session.token_hash] = session

    def get_session(self, token_hash: str) -> SessionRecord | None:
        return self.sessions.get(token_hash)

    def delete_session(self, token_hash: str) -> None:
        self.sessions.pop(token_hash, None)

    def delete_sessions_created_before(self, cutoff: datetime) -> int:
        expired = [
            token_hash
            for token_hash, session in self.sessions.items()
            if session.created_at < cutoff
        ]
        for token_hash in expired:
            del self.sessions[token_hash]
        return len(expired)


@dataclass
class IngredientRow:
    id: UUID
    user_id: UUID
    recipe_id: UUID
    food_id: UUID
    quantity: float


@dataclass
class ConsumptionRow:
    id: UUID
    user_id: UUID
    consumable: ConsumableRef
    quantity: float
    consumed_at: date


@dataclass
class InMemoryNutritionRepository(
    FoodRepository, RecipeRepository, ConsumptionRepository, ConsumableRepository
):
    """In-memory foods, recipes, ingredients and consumptions.

    Macros are derived on every read, like the Supabase adapters do.
    """

    foods: dict[UUID, Food] = field(default_factory=dict)
    recipes: dict[UUID, Recipe] = field(default_factory=dict)
    ingredients: dict[UUID, IngredientRow] = field(default_factory=dict)
    consumptions: dict[UUID, ConsumptionRow] = field(default_factory=dict)
    updated_at: dict[UUID, datetime] = field(default_factory=dict)

    def list_foods(self, user_id: UUID) -> list[Food]:
        foods = [food for food in self.foods.values() if food.user_id == user_id]
        return sorted(foods, key=lambda food: self.updated_at[food.id], reverse=True)

    def get_food(self, food_id: UUID) -> Food | None:
        return self.foods.get(food_id)

    def create_food(self, user_id: UUID, food: FoodInput, now: datetime) -> Food:
        created = Food(
            id=uuid4(),
            user_id=user_id,
            name=food.name,
            macros=food.macros,
            hidden_at=apply_flag(None, food.hidden, now),
            starred_at=apply_flag(None, food.starred, now),
            created_at=now,
        )
        self.foods[created.id] = created
        self.updated_at[created.id] = now
        return created

    def update_food(self, food_id: UUID, food: FoodInput, now: datetime) -> Food:
        current = self.foods[food_id]
        updated = replace(
            current,
            name=food.name,
            macros=food.macros,
            hidden_at=apply_flag(current.hidden_at, food.hidden, now),
            starred_at=apply_flag(current.starred_at, food.starred, now),
        )
        self.foods[food_id] = updated
        self.updated_at[food_id] = now
        return updated

    def delete_food(self, food_id: UUID) -> None:
        self.foods.pop(food_id, None)

    def is_food_referenced(self, food_id: UUID) -> bool:
        return any(row.food_id == food_id for row in self.ingredients.values()) or any(
            row.consumable == ConsumableRef.food(food_id)
            for row in self.consumptions.values()
        )

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        recipes = [
            self._build_recipe(recipe)
            for recipe in self.recipes.values()
            if recipe.user_id == user_id
        ]
        return sorted(
            recipes, key=lambda recipe: self.updated_at[recipe.id], reverse=True
        )

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        recipe = self.recipes.get(recipe_id)
        return self._build_recipe(recipe) if recipe else None

    def create_recipe(
        self, user_id: UUID, recipe: RecipeInput, now: datetime
    ) -> Recipe:
        created = Recipe(
            id=uuid4(),
            user_id=user_id,
            name=recipe.name,
            quantity=recipe.quantity,
            macros=recipe_macros([]),
            hidden_at=apply_flag(None, recipe.hidden, now),
            starred_at=apply_flag(None, recipe.starred, now),
            created_at=now,
        )
        self.recipes[created.id] = created
        self.updated_at[created.id] = now
        return self._build_recipe(created)

    def update_recipe(
        self, recipe_id: UUID, recipe: RecipeInput, now: datetime
    ) -> Recipe:
        current = self.recipes[recipe_id]
        self.recipes[recipe_id] = replace(
            current,
            name=recipe.name,
            quantity=recipe.quantity,
            hidden_at=apply_flag(current.hidden_at, recipe.hidden, now),
            starred_at=apply_flag(current.starred_at, recipe.starred, now),
        )
        self.updated_at[recipe_id] = now
        return self._build_recipe(self.recipes[recipe_id])

    def delete_recipe(self, recipe_id: UUID) -> None:
        self.recipes.pop(recipe_id, None)
        self.ingredients = {
            key: row
            for key, row in self.ingredients.items()
            if row.recipe_id != recipe_id
        }

    def is_recipe_referenced(self, recipe_id: UUID) -> bool:
        return any(
            row.consumable == ConsumableRef.recipe(recipe_id)
            for row in self.consumptions.values()
        )

    def list_ingredients(self, recipe_id: UUID) -> list[Ingredient]:
        return [
            self._build_ingredient(row)
            for row in self.ingredients.values()
            if row.recipe_id == recipe_id
        ]

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        row = self.ingredients.get(ingredient_id)
        return self._build_ingredient(row) if row else None

    def create_ingredient(  # noqa: PLR0913
        self,
        user_id: UUID,
        recipe_id: UUID,
        food_id: UUID,
        quantity: float,
        now: datetime,
    ) -> Ingredient:
        row = IngredientRow(
            id=uuid4(),
            user_id=user_id,
            recipe_id=recipe_id,
            food_id=food_id,
            quantity=quantity,
        )
        self.ingredients[row.id] = row
        self.updated_at[row.id] = now
        return self._build_ingredient(row)

    def update_ingredient(
        self, ingredient_id: UUID, food_id: UUID, quantity: float, now: datetime
    ) -> Ingredient:
        row = self.ingredients[ingredient_id]
        row.food_id = food_id
        row.quantity = quantity
        self.updated_at[ingredient_id] = now
        return self._build_ingredient(row)

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        self.ingredients.pop(ingredient_id, None)

    def list_consumptions(
        self, user_id: UUID, consumption_filter: ConsumptionFilter
    ) -> list[Consumption]:
        rows = [
            row
            for row in self.consumptions.values()
            if row.user_id == user_id
            and (
                consumption_filter.consumed_at is None
                or row.consumed_at == consumption_filter.consumed_at
            )
            and (
                consumption_filter.consumable is None
                or row.consumable == consumption_filter.consumable
            )
        ]
        rows.sort(key=lambda row: self.updated_at[row.id], reverse=True)
        return [self._build_consumption(row) for row in rows]

    def get_consumption(self, consumption_id: UUID) -> Consumption | None:
        row = self.consumptions.get(consumption_id)
        return self._build_consumption(row) if row else None

    def create_consumption(
        self, user_id: UUID, consumption: ConsumptionInput, now: datetime
    ) -> Consumption:
        row = ConsumptionRow(
            id=uuid4(),
            user_id=user_id,
            consumable=consumption.consumable,
            quantity=consumption.quantity,
            consumed_at=consumption.consumed_at,
        )
        self.consumptions[row.id] = row
        self.updated_at[row.id] = now
        return self._build_consumption(row)

    def update_consumption(
        self, consumption_id: UUID, consumption: ConsumptionInput, now: datetime
    ) -> Consumption:
        row = self.consumptions[consumption_id]
        row.consumable = consumption.consumable
        row.quantity = consumption.quantity
        row.consumed_at = consumption.consumed_at
        self.updated_at[consumption_id] = now
        return self._build_consumption(row)

    def delete_consumption(self, consumption_id: UUID) -> None:
        self.consumptions.pop(consumption_id, None)

    def list_consumables(self, user_id: UUID, since: date) -> list[ConsumableSummary]:
        candidates: list[tuple[ConsumableKind, Food | Recipe]] = [
            (ConsumableKind.FOOD, food) for food in self.foods.values()
        ]
        candidates.extend(
            (ConsumableKind.RECIPE, recipe) for recipe in self.recipes.values()
        )
        summaries = []
        for kind, item in candidates:
            if item.user_id != user_id or item.hidden_at is not None:
                continue
            ref = ConsumableRef(kind=kind, id=item.id)
            consumed = [
                row.consumed_at
                for row in self.consumptions.values()
                if row.consumable == ref and row.consumed_at > since
            ]
            summaries.append(
                ConsumableSummary(
                    kind=kind,
                    id=item.id,
                    name=item.name,
                    is_starred=item.starred_at is not None,
                    created_at=item.created_at,
                    last_consumed_at=max(consumed, default=None),
                    consumed_count=len(consumed),
                )
            )
        return summaries

    def _build_recipe(self, recipe: Recipe) -> Recipe:
        parts = [
            (self.foods[row.food_id].macros, row.quantity)
            for row in self.ingredients.values()
            if row.recipe_id == recipe.id
        ]
        return replace(recipe, macros=recipe_macros(parts))

    def _build_ingredient(self, row: IngredientRow) -> Ingredient:
        food = self.foods[row.food_id]
        return Ingredient(
            id=row.id,
            user_id=row.user_id,
            recipe_id=row.recipe_id,
            food_id=row.food_id,
            food_name=food.name,
            quantity=row.quantity,
            macros=ingredient_macros(food.macros, row.quantity),
        )

    def _build_consumption(self, row: ConsumptionRow) -> Consumption:
        if row.consumable.kind is ConsumableKind.FOOD:
            food = self.foods[row.consumable.id]
            name = food.name
            macros = food_consumption_macros(food.macros, row.quantity)
        else:
            recipe = self._build_recipe(self.recipes[row.consumable.id])
            name = recipe.name
            macros = recipe_consumption_macros(
                recipe.macros, recipe.quantity, row.quantity
            )
        return Consumption(
            id=row.id,
            user_id=row.user_id,
            consumable=row.consumable,
            consumable_name=name,
            quantity=row.quantity,
            consumed_at=row.consumed_at,
            macros=macros,
        )


@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weight repository for tests."""

    weights: dict[UUID, WeightRecord] = field(default_factory=dict)

    def list_weights(self, user_id: UUID) -> list[WeightRecord]:
        weights = [w for w in self.weights.values() if w.user_id == user_id]
        return sorted(weights, key=lambda w: w.measured_at, reverse=True)

    def get_weight(self, weight_id: UUID) -> WeightRecord | None:
        return self.weights.get(weight_id)

    def get_weight_by_date(self, user_id: UUID, day: date) -> WeightRecord | None:
        for weight in self.weights.values():
            if weight.user_id == user_id and weight.measured_at == day:
                return weight
        return None

    def create_weight(
        self, user_id: UUID, weight: float, measured_at: date, now: datetime
    ) -> WeightRecord:
        record = WeightRecord(
            id=uuid4(), user_id=user_id, weight=weight, measured_at=measured_at
        )
        self.weights[record.id] = record
        return record

    def update_weight(
        self, weight_id: UUID, weight: float, measured_at: date, now: datetime
    ) -> WeightRecord:
        if weight_id not in self.weights:
            raise NotFoundError("Weight", weight_id)
        record = replace(
            self.weights[weight_id], weight=weight, measured_at=measured_at
        )
        self.weights[weight_id] = record
        return record

    def delete_weight(self, weight_id: UUID) -> None:
        self.weights.pop(weight_id, None)


@dataclass
class InMemoryExportRepository(ExportRepository):
    """Export repository serving preloaded rows."""

    rows: dict[str, list[dict[str, object]]] = field(default_factory=dict)

    def fetch_user_rows(self, user_id: UUID) -> dict[str, list[dict[str, object]]]:
        return {
            section: [row for row in rows if row.get("user_id") == str(user_id)]
            for section, rows in self.rows.items()
        }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        session_purge_interval_seconds=0,
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def nutrition_repository() -> InMemoryNutritionRepository:
    return InMemoryNutritionRepository()


@pytest.fixture
def weight_repository() -> InMemoryWeightRepository:
    return InMemoryWeightRepository()


@pytest.fixture
def export_repository() -> InMemoryExportRepository:
    return InMemoryExportRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: FakeClock,
    user_repository: InMemoryUserRepository,
    session_repository: InMemorySessionRepository,
    nutrition_repository: InMemoryNutritionRepository,
    weight_repository: InMemoryWeightRepository,
    export_repository: InMemoryExportRepository,
) -> AppContainer:
    food_service = FoodService(nutrition_repository, clock=clock)
    recipe_service = RecipeService(
        nutrition_repository, nutrition_repository, clock=clock
    )
    consumption_service = ConsumptionService(
        repository=nutrition_repository,
        food_repository=nutrition_repository,
        recipe_repository=nutrition_repository,
        clock=clock,
    )
    consumable_service = ConsumableService(nutrition_repository, clock=clock)
    weight_service = WeightService(weight_repository, clock=clock)
    return AppContainer(
        settings=settings,
        user_service=UserService(user_repository, fast_credentials()),
        session_service=SessionService(
            session_repository, session_days=settings.session_days, clock=clock
        ),
        food_service=food_service,
        recipe_service=recipe_service,
        consumption_service=consumption_service,
        consumable_service=consumable_service,
        weight_service=weight_service,
        stats_service=StatsService(
            weight_service=weight_service,
            consumption_service=consumption_service,
            consumable_service=consumable_service,
        ),
        export_service=ExportService(export_repository, clock=clock),
    )
