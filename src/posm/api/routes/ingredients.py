from __future__ import annotations

from fastapi import APIRouter, Response, status

from posm.api.routes.params import RecipeFilter, RowId
from posm.application.dto.requests import CreateIngredientRequest, UpdateIngredientRequest
from posm.application.dto.responses import IngredientResponse
from posm.application.use_cases.ingredients import (
    CreateIngredient,
    DeleteIngredient,
    GetIngredient,
    ListIngredients,
    UpdateIngredient,
)
from posm.domain.common.ids import IngredientId, RecipeId
from posm.domain.common.pagination import Page
from posm.infrastructure.db.repositories.ingredient_repo import SqlAlchemyIngredientRepository
from posm.infrastructure.db.repositories.recipe_repo import SqlAlchemyRecipeRepository

router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])


def _ingredient_repository() -> SqlAlchemyIngredientRepository:
    return SqlAlchemyIngredientRepository()


@router.get("", response_model=list[IngredientResponse])
def list_ingredients(
    recipe_id: RecipeFilter = None,
    limit: int | None = None,
    offset: int | None = None,
) -> list[IngredientResponse]:
    use_case = ListIngredients(SqlAlchemyRecipeRepository(), _ingredient_repository())
    return use_case.execute(
        Page.clamp(limit, offset),
        RecipeId(recipe_id) if recipe_id is not None else None,
    )


@router.get("/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient(ingredient_id: RowId) -> IngredientResponse:
    return GetIngredient(_ingredient_repository()).execute(IngredientId(ingredient_id))


@router.post("", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
def create_ingredient(body: CreateIngredientRequest) -> IngredientResponse:
    return CreateIngredient(_ingredient_repository()).execute(body)


@router.put("/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: RowId, body: UpdateIngredientRequest
) -> IngredientResponse:
    return UpdateIngredient(_ingredient_repository()).execute(IngredientId(ingredient_id), body)


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(ingredient_id: RowId) -> Response:
    DeleteIngredient(_ingredient_repository()).execute(IngredientId(ingredient_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
