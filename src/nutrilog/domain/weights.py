"""Domain models for body weight tracking."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class WeightRecord:
    """A body weight measurement for one day."""

    id: UUID
    user_id: UUID
    weight: float
    measured_at: date
