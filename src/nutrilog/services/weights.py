"""Services for body weight records."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from nutrilog.domain.weights import WeightRecord
from nutrilog.services.access import require_owned
from nutrilog.services.clock import utc_now


class WeightRepository(Protocol):
    """Persistence interface for weight records."""

    def list_weights(self, user_id: UUID) -> list[WeightRecord]:
        """Return a user's weights, newest measurement first."""

    def get_weight(self, weight_id: UUID) -> WeightRecord | None:
        """Return a weight record by id, if present."""

    def get_weight_by_date(self, user_id: UUID, day: date) -> WeightRecord | None:
        """Return the user's weight for a day, if recorded."""

    def create_weight(
        self, user_id: UUID, weight: float, measured_at: date, now: datetime
    ) -> WeightRecord:
        """Create a weight record and return it."""

    def update_weight(
        self, weight_id: UUID, weight: float, measured_at: date, now: datetime
    ) -> WeightRecord:
        """Replace a weight record's fields and return it."""

    def delete_weight(self, weight_id: UUID) -> None:
        """Delete a weight record."""


@dataclass
class WeightService:
    """Application service for weight tracking."""

    repository: WeightRepository
    clock: Callable[[], datetime] = utc_now

    def list_weights(self, user_id: UUID) -> list[WeightRecord]:
        """Return all weights recorded by the user."""
        return self.repository.list_weights(user_id)

    def get_weight(self, user_id: UUID, weight_id: UUID) -> WeightRecord:
        """Return a weight record the user owns."""
        return require_owned(
            "Weight", weight_id, self.repository.get_weight(weight_id), user_id
        )

    def get_weight_by_date(self, user_id: UUID, day: date) -> WeightRecord | None:
        """Return the user's weight for a day, if any."""
        return self.repository.get_weight_by_date(user_id, day)

    def record_weight(
        self, user_id: UUID, weight: float, measured_at: date
    ) -> WeightRecord:
        """Record a new weight measurement."""
        return self.repository.create_weight(user_id, weight, measured_at, self.clock())

    def update_weight(
        self, user_id: UUID, weight_id: UUID, weight: float, measured_at: date
    ) -> WeightRecord:
        """Replace a weight record after checking ownership."""
        self.get_weight(user_id, weight_id)
        return self.repository.update_weight(
            weight_id, weight, measured_at, self.clock()
        )

    def delete_weight(self, user_id: UUID, weight_id: UUID) -> None:
        """Delete a weight record after checking ownership."""
        self.get_weight(user_id, weight_id)
        self.repository.delete_weight(weight_id)
