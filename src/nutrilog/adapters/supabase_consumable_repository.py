"""Supabase read model for the consumable pick list."""

from dataclasses import dataclass
from datetime import date
from typing import Any
from uuid import UUID

from supabase import Client

from nutrilog.adapters.supabase_queries import execute, parse_date, parse_datetime
from nutrilog.domain.consumables import ConsumableSummary
from nutrilog.domain.errors import StorageError
from nutrilog.domain.nutrition import ConsumableKind
from nutrilog.services.consumables import ConsumableRepository

_TABLES = {
    ConsumableKind.FOOD: "foods",
    ConsumableKind.RECIPE: "recipes",
}


@dataclass
class SupabaseConsumableRepository(ConsumableRepository):
    """Lists visible foods and recipes with their recent consumptions."""

    client: Client

    def list_consumables(self, user_id: UUID, since: date) -> list[ConsumableSummary]:
        """Return non-hidden foods and recipes with usage after ``since``."""
        summaries: list[ConsumableSummary] = []
        for kind, table in _TABLES.items():
            response = execute(
                self.client.table(table)
                .select("id, name, starred_at, created_at, consumptions(consumed_at)")
                .eq("user_id", str(user_id))
                .is_("hidden_at", "null")
                .gt("consumptions.consumed_at", since.isoformat())
            )
            summaries.extend(_parse_summary(kind, row) for row in response.data or [])
        return summaries


def _parse_summary(kind: ConsumableKind, row: dict[str, Any]) -> ConsumableSummary:
    consumed = [
        parse_date(entry["consumed_at"]) for entry in row.get("consumptions") or []
    ]
    created_at = parse_datetime(row.get("created_at"))
    if created_at is None:
        raise StorageError(f"{kind.value} {row.get('id')} has no created_at")
    return ConsumableSummary(
        kind=kind,
        id=UUID(row["id"]),
        name=str(row.get("name", "")),
        is_starred=row.get("starred_at") is not None,
        created_at=created_at,
        last_consumed_at=max(consumed, default=None),
        consumed_count=len(consumed),
    )
