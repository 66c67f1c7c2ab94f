"""Food, recipe, ingredient, consumption and consumable endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status

from nutrilog.api.auth import current_user_id, get_container
from nutrilog.api.schemas import (  # noqa: TC001
    ConsumptionPayload,
    FoodPayload,
    IngredientPayload,
    IngredientUpdatePayload,
    RecipePayload,
)

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer

router = APIRouter(tags=["nutrition"])


@router.get("/foods")
def list_foods(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the user's foods, most recently edited first."""
    container: AppContainer = get_container(request)
    return {"foods": container.food_service.list_foods(user_id)}


@router.post("/foods", status_code=status.HTTP_201_CREATED)
def create_food(
    payload: FoodPayload, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Create a food."""
    container: AppContainer = get_container(request)
    return {"food": container.food_service.create_food(user_id, payload.to_input())}


@router.get("/foods/{food_id}")
def get_food(
    food_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return one food."""
    container: AppContainer = get_container(request)
    return {"food": container.food_service.get_food(user_id, food_id)}


@router.put("/foods/{food_id}")
def update_food(
    food_id: UUID,
    payload: FoodPayload,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Replace a food's fields."""
    container: AppContainer = get_container(request)
    food = container.food_service.update_food(user_id, food_id, payload.to_input())
    return {"food": food}


@router.delete("/foods/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_food(
    food_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> Response:
    """Delete a food nothing references any more."""
    container: AppContainer = get_container(request)
    container.food_service.delete_food(user_id, food_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/recipes")
def list_recipes(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the user's recipes with total macros."""
    container: AppContainer = get_container(request)
    return {"recipes": container.recipe_service.list_recipes(user_id)}


@router.post("/recipes", status_code=status.HTTP_201_CREATED)
def create_recipe(
    payload: RecipePayload, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Create a recipe."""
    container: AppContainer = get_container(request)
    recipe = container.recipe_service.create_recipe(user_id, payload.to_input())
    return {"recipe": recipe}


@router.get("/recipes/{recipe_id}")
def get_recipe(
    recipe_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return one recipe."""
    container: AppContainer = get_container(request)
    return {"recipe": container.recipe_service.get_recipe(user_id, recipe_id)}


@router.put("/recipes/{recipe_id}")
def update_recipe(
    recipe_id: UUID,
    payload: RecipePayload,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Replace a recipe's fields."""
    container: AppContainer = get_container(request)
    recipe = container.recipe_service.update_recipe(
        user_id, recipe_id, payload.to_input()
    )
    return {"recipe": recipe}


@router.delete("/recipes/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> Response:
    """Delete a recipe and its ingredients unless a consumption uses it."""
    container: AppContainer = get_container(request)
    container.recipe_service.delete_recipe(user_id, recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/recipes/{recipe_id}/ingredients")
def list_ingredients(
    recipe_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return a recipe's ingredients."""
    container: AppContainer = get_container(request)
    return {
        "ingredients": container.recipe_service.list_ingredients(user_id, recipe_id)
    }


@router.post("/ingredients", status_code=status.HTTP_201_CREATED)
def create_ingredient(
    payload: IngredientPayload,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Add a food to a recipe."""
    container: AppContainer = get_container(request)
    ingredient = container.recipe_service.add_ingredient(
        user_id, payload.recipe_id, payload.food_id, payload.quantity
    )
    return {"ingredient": ingredient}


@router.get("/ingredients/{ingredient_id}")
def get_ingredient(
    ingredient_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return one ingredient."""
    container: AppContainer = get_container(request)
    return {
        "ingredient": container.recipe_service.get_ingredient(user_id, ingredient_id)
    }


@router.put("/ingredients/{ingredient_id}")
def update_ingredient(
    ingredient_id: UUID,
    payload: IngredientUpdatePayload,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Replace an ingredient's food and quantity."""
    container: AppContainer = get_container(request)
    ingredient = container.recipe_service.update_ingredient(
        user_id, ingredient_id, payload.food_id, payload.quantity
    )
    return {"ingredient": ingredient}


@router.delete("/ingredients/{ingredient_id}")
def delete_ingredient(
    ingredient_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Remove an ingredient; the response names the recipe it belonged to."""
    container: AppContainer = get_container(request)
    ingredient = container.recipe_service.delete_ingredient(user_id, ingredient_id)
    return {"recipe_id": ingredient.recipe_id}


@router.get("/consumptions")
def list_consumptions(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the user's consumptions, most recently edited first."""
    container: AppContainer = get_container(request)
    return {"consumptions": container.consumption_service.list_consumptions(user_id)}


@router.post("/consumptions", status_code=status.HTTP_201_CREATED)
def create_consumption(
    payload: ConsumptionPayload,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Log a consumption of a food or recipe."""
    container: AppContainer = get_container(request)
    consumption = container.consumption_service.create_consumption(
        user_id, payload.to_input()
    )
    return {"consumption": consumption}


@router.get("/consumptions/{consumption_id}")
def get_consumption(
    consumption_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return one consumption."""
    container: AppContainer = get_container(request)
    return {
        "consumption": container.consumption_service.get_consumption(
            user_id, consumption_id
        )
    }


@router.put("/consumptions/{consumption_id}")
def update_consumption(
    consumption_id: UUID,
    payload: ConsumptionPayload,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Replace a consumption."""
    container: AppContainer = get_container(request)
    consumption = container.consumption_service.update_consumption(
        user_id, consumption_id, payload.to_input()
    )
    return {"consumption": consumption}


@router.delete("/consumptions/{consumption_id}")
def delete_consumption(
    consumption_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Delete a consumption; the response names the day it was logged on."""
    container: AppContainer = get_container(request)
    consumption = container.consumption_service.delete_consumption(
        user_id, consumption_id
    )
    return {"consumed_at": consumption.consumed_at}


@router.get("/consumables")
def list_consumables(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return visible foods and recipes in suggestion order."""
    container: AppContainer = get_container(request)
    return {"consumables": container.consumable_service.list_ranked(user_id)}
