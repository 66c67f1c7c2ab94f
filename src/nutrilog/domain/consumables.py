"""Domain models for the consumable pick list."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from nutrilog.domain.nutrition import ConsumableKind


@dataclass(frozen=True)
class ConsumableSummary:
    """A visible food or recipe with its recent usage."""

    kind: ConsumableKind
    id: UUID
    name: str
    is_starred: bool
    created_at: datetime
    last_consumed_at: date | None
    consumed_count: int
