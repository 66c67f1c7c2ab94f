"""Supabase-backed weight repository."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any
from uuid import UUID

from supabase import Client

from nutrilog.adapters.supabase_queries import execute, first_row, parse_date
from nutrilog.domain.errors import NotFoundError, StorageError
from nutrilog.domain.weights import WeightRecord
from nutrilog.services.weights import WeightRepository

_WEIGHT_COLUMNS = "id, user_id, weight, measured_at"


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for weight records."""

    client: Client

    def list_weights(self, user_id: UUID) -> list[WeightRecord]:
        """Return a user's weights, newest measurement first."""
        response = execute(
            self.client.table("weights")
            .select(_WEIGHT_COLUMNS)
            .eq("user_id", str(user_id))
            .order("measured_at", desc=True)
        )
        return [_parse_weight(row) for row in response.data or []]

    def get_weight(self, weight_id: UUID) -> WeightRecord | None:
        """Return a weight record by id, if present."""
        response = execute(
            self.client.table("weights")
            .select(_WEIGHT_COLUMNS)
            .eq("id", str(weight_id))
            .limit(1)
        )
        row = first_row(response)
        return _parse_weight(row) if row else None

    def get_weight_by_date(self, user_id: UUID, day: date) -> WeightRecord | None:
        """Return the user's weight for a day, if recorded."""
        response = execute(
            self.client.table("weights")
            .select(_WEIGHT_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("measured_at", day.isoformat())
            .order("created_at", desc=False)
            .limit(1)
        )
        row = first_row(response)
        return _parse_weight(row) if row else None

    def create_weight(
        self, user_id: UUID, weight: float, measured_at: date, now: datetime
    ) -> WeightRecord:
        """Create a weight row and return it."""
        response = execute(
            self.client.table("weights").insert(
                {
                    "user_id": str(user_id),
                    "weight": weight,
                    "measured_at": measured_at.isoformat(),
                    "created_at": now.isoformat(),
                    "updated_at": now.isoformat(),
                }
            )
        )
        row = first_row(response)
        if row is None:
            raise StorageError("Failed to create weight")
        return _parse_weight(row)

    def update_weight(
        self, weight_id: UUID, weight: float, measured_at: date, now: datetime
    ) -> WeightRecord:
        """Replace a weight row's fields and return it."""
        response = execute(
            self.client.table("weights")
            .update(
                {
                    "weight": weight,
                    "measured_at": measured_at.isoformat(),
                    "updated_at": now.isoformat(),
                }
            )
            .eq("id", str(weight_id))
        )
        row = first_row(response)
        if row is None:
            raise NotFoundError("Weight", weight_id)
        return _parse_weight(row)

    def delete_weight(self, weight_id: UUID) -> None:
        """Delete a weight row."""
        execute(self.client.table("weights").delete().eq("id", str(weight_id)))


def _parse_weight(row: dict[str, Any]) -> WeightRecord:
    return WeightRecord(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        weight=float(row.get("weight", 0.0)),
        measured_at=parse_date(row["measured_at"]),
    )
