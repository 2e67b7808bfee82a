from __future__ import annotations

import logging
from typing import Literal

from posm.application.dto.requests import CreateRecipeRequest, UpdateRecipeRequest
from posm.application.dto.responses import RecipeResponse
from posm.application.mappers.recipe_mapper import to_recipe_response
from posm.application.metrics.mutations import record_mutation
from posm.application.ports.repositories import (
    IngredientRepository,
    MethodStepRepository,
    RecipeRepository,
)
from posm.domain.common.ids import RecipeId
from posm.domain.common.pagination import Page

logger = logging.getLogger(__name__)

RecipeInclude = Literal["ingredients", "steps", "all"]


class RecipeNotFoundError(Exception):
    def __init__(self, recipe_id: RecipeId) -> None:
        super().__init__(f"recipe not found for recipe_id={recipe_id}")
        self.details = {"recipeId": int(recipe_id)}


class ListRecipes:
    def __init__(self, repository: RecipeRepository) -> None:
        self._repository = repository

    def execute(self, page: Page) -> list[RecipeResponse]:
        return [to_recipe_response(recipe) for recipe in self._repository.list_all(page)]


class GetRecipe:
    def __init__(
        self,
        repository: RecipeRepository,
        ingredient_repository: IngredientRepository,
        step_repository: MethodStepRepository,
    ) -> None:
        self._repository = repository
        self._ingredient_repository = ingredient_repository
        self._step_repository = step_repository

    def execute(self, recipe_id: RecipeId, include: RecipeInclude | None = None) -> RecipeResponse:
        recipe = self._repository.get(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)

        ingredients = None
        steps = None
        if include in ("ingredients", "all"):
            ingredients = self._ingredient_repository.list_all(recipe_id=recipe_id)
        if include in ("steps", "all"):
            steps = self._step_repository.list_all(recipe_id=recipe_id)
        return to_recipe_response(recipe, ingredients=ingredients, steps=steps)


class CreateRecipe:
    def __init__(self, repository: RecipeRepository) -> None:
        self._repository = repository

    def execute(self, request: CreateRecipeRequest) -> RecipeResponse:
        recipe = self._repository.create(name=request.name)
        record_mutation("recipe", "create")
        logger.info("recipe_created", extra={"entity": "recipe", "entity_id": recipe.recipe_id})
        return to_recipe_response(recipe)


class UpdateRecipe:
    def __init__(self, repository: RecipeRepository) -> None:
        self._repository = repository

    def execute(self, recipe_id: RecipeId, request: UpdateRecipeRequest) -> RecipeResponse:
        recipe = self._repository.update(recipe_id, request.changes())
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        record_mutation("recipe", "update")
        return to_recipe_response(recipe)


class DeleteRecipe:
    """Deletes the recipe, its ingredients and its steps; menu items referencing it are detached."""

    def __init__(self, repository: RecipeRepository) -> None:
        self._repository = repository

    def execute(self, recipe_id: RecipeId) -> None:
        if not self._repository.delete(recipe_id):
            raise RecipeNotFoundError(recipe_id)
        record_mutation("recipe", "delete")
        logger.info("recipe_deleted", extra={"entity": "recipe", "entity_id": recipe_id})
