from __future__ import annotations

from collections.abc import Sequence

from posm.application.dto.responses import (
    IngredientResponse,
    MethodStepResponse,
    RecipeResponse,
)
from posm.domain.recipe.entities import Ingredient, MethodStep, Recipe, sort_steps


def to_ingredient_response(ingredient: Ingredient) -> IngredientResponse:
    return IngredientResponse(
        id=int(ingredient.ingredient_id),
        recipeId=int(ingredient.recipe_id),
        name=ingredient.name,
        amount=ingredient.amount,
        unit=ingredient.unit,
    )


def to_step_response(step: MethodStep) -> MethodStepResponse:
    return MethodStepResponse(
        id=int(step.step_id),
        recipeId=int(step.recipe_id),
        order=step.order,
        instruction=step.instruction,
    )


def to_recipe_response(
    recipe: Recipe,
    ingredients: Sequence[Ingredient] | None = None,
    steps: Sequence[MethodStep] | None = None,
) -> RecipeResponse:
    return RecipeResponse(
        id=int(recipe.recipe_id),
        name=recipe.name,
        ingredients=(
            [to_ingredient_response(ingredient) for ingredient in ingredients]
            if ingredients is not None
            else None
        ),
        steps=[to_step_response(step) for step in sort_steps(list(steps))]
        if steps is not None
        else None,
    )
