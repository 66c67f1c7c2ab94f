"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrilog.adapters.supabase_consumable_repository import (
    SupabaseConsumableRepository,
)
from nutrilog.adapters.supabase_consumption_repository import (
    SupabaseConsumptionRepository,
)
from nutrilog.adapters.supabase_export_repository import SupabaseExportRepository
from nutrilog.adapters.supabase_food_repository import SupabaseFoodRepository
from nutrilog.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from nutrilog.adapters.supabase_session_repository import SupabaseSessionRepository
from nutrilog.adapters.supabase_user_repository import SupabaseUserRepository
from nutrilog.adapters.supabase_weight_repository import SupabaseWeightRepository
from nutrilog.config import Settings
from nutrilog.services.consumables import ConsumableService
from nutrilog.services.consumptions import ConsumptionService
from nutrilog.services.credentials import CredentialService
from nutrilog.services.export import ExportService
from nutrilog.services.foods import FoodService
from nutrilog.services.recipes import RecipeService
from nutrilog.services.sessions import SessionService
from nutrilog.services.stats import StatsService
from nutrilog.services.users import UserService
from nutrilog.services.weights import WeightService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    session_service: SessionService
    food_service: FoodService
    recipe_service: RecipeService
    consumption_service: ConsumptionService
    consumable_service: ConsumableService
    weight_service: WeightService
    stats_service: StatsService
    export_service: ExportService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    user_service = UserService(
        SupabaseUserRepository(supabase_client), CredentialService()
    )
    session_service = SessionService(
        SupabaseSessionRepository(supabase_client),
        session_days=resolved_settings.session_days,
    )
    food_service = FoodService(food_repository)
    recipe_service = RecipeService(recipe_repository, food_repository)
    consumption_service = ConsumptionService(
        repository=SupabaseConsumptionRepository(supabase_client),
        food_repository=food_repository,
        recipe_repository=recipe_repository,
    )
    consumable_service = ConsumableService(
        SupabaseConsumableRepository(supabase_client)
    )
    weight_service = WeightService(SupabaseWeightRepository(supabase_client))
    stats_service = StatsService(
        weight_service=weight_service,
        consumption_service=consumption_service,
        consumable_service=consumable_service,
    )
    export_service = ExportService(SupabaseExportRepository(supabase_client))

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        session_service=session_service,
        food_service=food_service,
        recipe_service=recipe_service,
        consumption_service=consumption_service,
        consumable_service=consumable_service,
        weight_service=weight_service,
        stats_service=stats_service,
        export_service=export_service,
    )
