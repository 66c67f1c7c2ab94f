"""Ranking of foods and recipes for quick re-selection."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from nutrilog.domain.consumables import ConsumableSummary
from nutrilog.services.clock import utc_now

STARRED_POINTS = 100
RECENCY_POINTS = 100
POINTS_PER_CONSUMPTION = 10
NEW_ITEM_POINTS = 1000
NEW_ITEM_AGE = timedelta(minutes=5)
RECENT_WINDOW_DAYS = 7


class ConsumableRepository(Protocol):
    """Read interface for the pick list."""

    def list_consumables(self, user_id: UUID, since: date) -> list[ConsumableSummary]:
        """Return visible foods and recipes with usage after ``since``."""


def score_consumable(item: ConsumableSummary, now: datetime) -> int:
    """Return the ranking score of a consumable; higher sorts first."""
    points = 0
    if item.is_starred:
        points += STARRED_POINTS
    if item.last_consumed_at is not None:
        days_ago = max((now.date() - item.last_consumed_at).days, 0)
        points += RECENCY_POINTS - days_ago
    points += POINTS_PER_CONSUMPTION * item.consumed_count
    if now - item.created_at < NEW_ITEM_AGE:
        points += NEW_ITEM_POINTS
    return points


def rank_consumables(
    items: Iterable[ConsumableSummary], now: datetime
) -> list[ConsumableSummary]:
    """Order consumables by score, then name, then kind and id."""
    return sorted(
        items,
        key=lambda item: (
            -score_consumable(item, now),
            item.name,
            item.kind.value,
            str(item.id),
        ),
    )


@dataclass
class ConsumableService:
    """Builds the ranked pick list for a user."""

    repository: ConsumableRepository
    clock: Callable[[], datetime] = utc_now
    window_days: int = RECENT_WINDOW_DAYS

    def list_ranked(self, user_id: UUID) -> list[ConsumableSummary]:
        """Return the user's visible foods and recipes in pick-list order."""
        now = self.clock()
        since = now.date() - timedelta(days=self.window_days)
        return rank_consumables(self.repository.list_consumables(user_id, since), now)
