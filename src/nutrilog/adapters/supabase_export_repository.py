"""Supabase read model for account exports."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrilog.adapters.supabase_queries import execute
from nutrilog.services.export import ExportRepository

_EXPORT_COLUMNS = {
    "weights": "id, weight, measured_at, created_at, updated_at",
    "foods": (
        "id, name, kcal, fat, carbs, protein, hidden_at, starred_at, "
        "created_at, updated_at"
    ),
    "recipes": "id, name, quantity, hidden_at, starred_at, created_at, updated_at",
    "ingredients": "id, recipe_id, food_id, quantity, created_at, updated_at",
    "consumptions": (
        "id, food_id, recipe_id, quantity, consumed_at, created_at, updated_at"
    ),
}


@dataclass
class SupabaseExportRepository(ExportRepository):
    """Reads every table a user owns, as stored."""

    client: Client

    def fetch_user_rows(self, user_id: UUID) -> dict[str, list[dict[str, object]]]:
        """Return the user's rows keyed by table name."""
        rows: dict[str, list[dict[str, object]]] = {}
        for table, columns in _EXPORT_COLUMNS.items():
            response = execute(
                self.client.table(table).select(columns).eq("user_id", str(user_id))
            )
            rows[table] = list(response.data or [])
        return rows
