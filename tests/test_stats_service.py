"""Tests for daily summaries and history."""

from datetime import date
from uuid import uuid4

import pytest

from nutrilog.domain.nutrition import (
    ConsumableRef,
    ConsumptionInput,
    FoodInput,
    MacroProfile,
)

EGG = FoodInput(name="Egg", macros=MacroProfile(kcal=70, fat=5, carbs=0.5, protein=6))


def test_day_summary_totals_consumptions(container) -> None:
    user_id = uuid4()
    egg = container.food_service.create_food(user_id, EGG)
    day = date(2024, 3, 9)
    container.weight_service.record_weight(user_id, 81.5, day)
    for quantity in (1, 2):
        container.consumption_service.create_consumption(
            user_id, ConsumptionInput(ConsumableRef.food(egg.id), quantity, day)
        )

    summary = container.stats_service.get_day(user_id, day)

    assert summary.weight is not None
    assert summary.weight.weight == 81.5
    assert len(summary.consumptions) == 2
    assert summary.totals.kcal == pytest.approx(210)
    assert summary.totals.protein == pytest.approx(18)
    assert [item.name for item in summary.consumables] == ["Egg"]


def test_empty_day_has_zero_totals(container) -> None:
    summary = container.stats_service.get_day(uuid4(), date(2024, 1, 1))

    assert summary.weight is None
    assert summary.consumptions == []
    assert summary.totals.kcal == 0


def test_today_uses_clock(container, clock) -> None:
    summary = container.stats_service.get_today(uuid4())

    assert summary.day == clock().date()


def test_history_merges_weights_and_intake(container) -> None:
    user_id = uuid4()
    egg = container.food_service.create_food(user_id, EGG)
    container.weight_service.record_weight(user_id, 80.0, date(2024, 3, 1))
    container.weight_service.record_weight(user_id, 79.5, date(2024, 3, 3))
    container.consumption_service.create_consumption(
        user_id, ConsumptionInput(ConsumableRef.food(egg.id), 2, date(2024, 3, 3))
    )
    container.consumption_service.create_consumption(
        user_id, ConsumptionInput(ConsumableRef.food(egg.id), 1, date(2024, 3, 2))
    )

    history = container.stats_service.get_history(user_id)

    assert [row.day for row in history] == [
        date(2024, 3, 3),
        date(2024, 3, 2),
        date(2024, 3, 1),
    ]
    assert history[0].weight is not None
    assert history[0].kcal == pytest.approx(140)
    assert history[1].weight is None
    assert history[1].protein == pytest.approx(6)
    assert history[2].kcal is None
