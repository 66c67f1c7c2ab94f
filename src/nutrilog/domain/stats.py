"""Domain models for daily summaries."""

from dataclasses import dataclass
from datetime import date

from nutrilog.domain.consumables import ConsumableSummary
from nutrilog.domain.nutrition import Consumption, MacroProfile
from nutrilog.domain.weights import WeightRecord


@dataclass(frozen=True)
class DaySummary:
    """Everything logged on one day plus the ranked pick list."""

    day: date
    weight: WeightRecord | None
    consumptions: list[Consumption]
    totals: MacroProfile
    consumables: list[ConsumableSummary]


@dataclass(frozen=True)
class HistoryRow:
    """Per-day weight and intake totals."""

    day: date
    weight: WeightRecord | None
    kcal: float | None
    protein: float | None
