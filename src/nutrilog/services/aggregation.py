"""Macro aggregation for recipes and consumptions.

Totals are recomputed from the referenced rows on every read, so editing a
food or an ingredient changes every recipe and consumption that uses it,
including past consumptions.
"""

from collections.abc import Iterable

from nutrilog.domain.nutrition import ZERO_MACROS, MacroProfile


def scale(macros: MacroProfile, factor: float) -> MacroProfile:
    """Multiply every macro by a quantity factor."""
    return MacroProfile(
        kcal=macros.kcal * factor,
        fat=macros.fat * factor,
        carbs=macros.carbs * factor,
        protein=macros.protein * factor,
    )


def add(left: MacroProfile, right: MacroProfile) -> MacroProfile:
    """Sum two macro profiles."""
    return MacroProfile(
        kcal=left.kcal + right.kcal,
        fat=left.fat + right.fat,
        carbs=left.carbs + right.carbs,
        protein=left.protein + right.protein,
    )


def total(items: Iterable[MacroProfile]) -> MacroProfile:
    """Sum macro profiles; an empty input totals to zero."""
    result = ZERO_MACROS
    for item in items:
        result = add(result, item)
    return result


def ingredient_macros(food_macros: MacroProfile, quantity: float) -> MacroProfile:
    """Macros contributed by one ingredient of a recipe."""
    return scale(food_macros, quantity)


def recipe_macros(parts: Iterable[tuple[MacroProfile, float]]) -> MacroProfile:
    """Sum ``food.macro * ingredient.quantity`` over (food macros, quantity) pairs."""
    return total(ingredient_macros(macros, quantity) for macros, quantity in parts)


def per_unit(recipe_total: MacroProfile, recipe_quantity: float) -> MacroProfile:
    """Macros of one unit of a recipe's yield.

    A recipe without a positive yield has no meaningful unit and counts as zero.
    """
    if recipe_quantity <= 0:
        return ZERO_MACROS
    return MacroProfile(
        kcal=recipe_total.kcal / recipe_quantity,
        fat=recipe_total.fat / recipe_quantity,
        carbs=recipe_total.carbs / recipe_quantity,
        protein=recipe_total.protein / recipe_quantity,
    )


def food_consumption_macros(food_macros: MacroProfile, quantity: float) -> MacroProfile:
    """Macros of a consumption that references a food."""
    return scale(food_macros, quantity)


def recipe_consumption_macros(
    recipe_total: MacroProfile, recipe_quantity: float, quantity: float
) -> MacroProfile:
    """Macros of a consumption that references a recipe."""
    return scale(per_unit(recipe_total, recipe_quantity), quantity)
