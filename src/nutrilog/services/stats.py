"""Daily summaries built from weights and consumptions."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from nutrilog.domain.nutrition import ConsumptionFilter
from nutrilog.domain.stats import DaySummary, HistoryRow
from nutrilog.services.aggregation import total
from nutrilog.services.consumables import ConsumableService
from nutrilog.services.consumptions import ConsumptionService
from nutrilog.services.weights import WeightService


@dataclass
class StatsService:
    """Service for per-day views of a user's log."""

    weight_service: WeightService
    consumption_service: ConsumptionService
    consumable_service: ConsumableService

    def get_day(self, user_id: UUID, day: date) -> DaySummary:
        """Return the weight, consumptions and totals for a day."""
        consumptions = self.consumption_service.list_consumptions(
            user_id, ConsumptionFilter.on(day)
        )
        return DaySummary(
            day=day,
            weight=self.weight_service.get_weight_by_date(user_id, day),
            consumptions=consumptions,
            totals=total(consumption.macros for consumption in consumptions),
            consumables=self.consumable_service.list_ranked(user_id),
        )

    def get_today(self, user_id: UUID) -> DaySummary:
        """Return the summary for the current UTC day."""
        return self.get_day(user_id, self.consumable_service.clock().date())

    def get_history(self, user_id: UUID) -> list[HistoryRow]:
        """Return one row per day with a weight or consumptions, newest first."""
        rows: dict[date, HistoryRow] = {}
        for weight in self.weight_service.list_weights(user_id):
            rows.setdefault(
                weight.measured_at,
                HistoryRow(
                    day=weight.measured_at, weight=weight, kcal=None, protein=None
                ),
            )
        for consumption in self.consumption_service.list_consumptions(user_id):
            day = consumption.consumed_at
            row = rows.get(day) or HistoryRow(
                day=day, weight=None, kcal=None, protein=None
            )
            rows[day] = HistoryRow(
                day=day,
                weight=row.weight,
                kcal=(row.kcal or 0.0) + consumption.macros.kcal,
                protein=(row.protein or 0.0) + consumption.macros.protein,
            )
        return sorted(rows.values(), key=lambda row: row.day, reverse=True)
