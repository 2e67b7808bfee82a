from __future__ import annotations

from posm.application.dto.requests import CreateIngredientRequest, UpdateIngredientRequest
from posm.application.dto.responses import IngredientResponse
from posm.application.mappers.recipe_mapper import to_ingredient_response
from posm.application.metrics.mutations import record_mutation
from posm.application.ports.repositories import (
    IngredientRepository,
    MissingParentError,
    RecipeRepository,
)
from posm.application.use_cases.recipes import RecipeNotFoundError
from posm.domain.common.ids import IngredientId, RecipeId
from posm.domain.common.pagination import Page


class IngredientNotFoundError(Exception):
    def __init__(self, ingredient_id: IngredientId) -> None:
        super().__init__(f"ingredient not found for ingredient_id={ingredient_id}")
        self.details = {"ingredientId": int(ingredient_id)}


class ListIngredients:
    def __init__(
        self,
        recipe_repository: RecipeRepository,
        repository: IngredientRepository,
    ) -> None:
        self._recipe_repository = recipe_repository
        self._repository = repository

    def execute(self, page: Page, recipe_id: RecipeId | None = None) -> list[IngredientResponse]:
        if recipe_id is not None and not self._recipe_repository.exists(recipe_id):
            raise RecipeNotFoundError(recipe_id)
        ingredients = self._repository.list_all(page=page, recipe_id=recipe_id)
        return [to_ingredient_response(ingredient) for ingredient in ingredients]


class GetIngredient:
    def __init__(self, repository: IngredientRepository) -> None:
        self._repository = repository

    def execute(self, ingredient_id: IngredientId) -> IngredientResponse:
        ingredient = self._repository.get(ingredient_id)
        if ingredient is None:
            raise IngredientNotFoundError(ingredient_id)
        return to_ingredient_response(ingredient)


class CreateIngredient:
    def __init__(self, repository: IngredientRepository) -> None:
        self._repository = repository

    def execute(self, request: CreateIngredientRequest) -> IngredientResponse:
        recipe_id = RecipeId(request.recipe_id)
        try:
            ingredient = self._repository.create(
                recipe_id=recipe_id,
                name=request.name,
                amount=request.amount,
                unit=request.unit,
            )
        except MissingParentError as exc:
            raise RecipeNotFoundError(recipe_id) from exc
        record_mutation("ingredient", "create")
        return to_ingredient_response(ingredient)


class UpdateIngredient:
    def __init__(self, repository: IngredientRepository) -> None:
        self._repository = repository

    def execute(
        self, ingredient_id: IngredientId, request: UpdateIngredientRequest
    ) -> IngredientResponse:
        ingredient = self._repository.update(ingredient_id, request.changes())
        if ingredient is None:
            raise IngredientNotFoundError(ingredient_id)
        record_mutation("ingredient", "update")
        return to_ingredient_response(ingredient)


class DeleteIngredient:
    def __init__(self, repository: IngredientRepository) -> None:
        self._repository = repository

    def execute(self, ingredient_id: IngredientId) -> None:
        if not self._repository.delete(ingredient_id):
            raise IngredientNotFoundError(ingredient_id)
        record_mutation("ingredient", "delete")
