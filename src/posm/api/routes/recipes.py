from __future__ import annotations

from fastapi import APIRouter, Response, status

from posm.api.routes.params import RowId
from posm.application.dto.requests import CreateRecipeRequest, UpdateRecipeRequest
from posm.application.dto.responses import IngredientResponse, MethodStepResponse, RecipeResponse
from posm.application.use_cases.ingredients import ListIngredients
from posm.application.use_cases.method_steps import ListMethodSteps
from posm.application.use_cases.recipes import (
    CreateRecipe,
    DeleteRecipe,
    GetRecipe,
    ListRecipes,
    RecipeInclude,
    UpdateRecipe,
)
from posm.domain.common.ids import RecipeId
from posm.domain.common.pagination import Page
from posm.infrastructure.db.repositories.ingredient_repo import SqlAlchemyIngredientRepository
from posm.infrastructure.db.repositories.method_step_repo import SqlAlchemyMethodStepRepository
from posm.infrastructure.db.repositories.recipe_repo import SqlAlchemyRecipeRepository

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def _recipe_repository() -> SqlAlchemyRecipeRepository:
    return SqlAlchemyRecipeRepository()


@router.get("", response_model=list[RecipeResponse], response_model_exclude_none=True)
def list_recipes(limit: int | None = None, offset: int | None = None) -> list[RecipeResponse]:
    return ListRecipes(_recipe_repository()).execute(Page.clamp(limit, offset))


@router.get("/{recipe_id}", response_model=RecipeResponse, response_model_exclude_none=True)
def get_recipe(recipe_id: RowId, include: RecipeInclude | None = None) -> RecipeResponse:
    use_case = GetRecipe(
        _recipe_repository(),
        SqlAlchemyIngredientRepository(),
        SqlAlchemyMethodStepRepository(),
    )
    return use_case.execute(RecipeId(recipe_id), include)


@router.post(
    "",
    response_model=RecipeResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_recipe(body: CreateRecipeRequest) -> RecipeResponse:
    return CreateRecipe(_recipe_repository()).execute(body)


@router.put("/{recipe_id}", response_model=RecipeResponse, response_model_exclude_none=True)
def update_recipe(recipe_id: RowId, body: UpdateRecipeRequest) -> RecipeResponse:
    return UpdateRecipe(_recipe_repository()).execute(RecipeId(recipe_id), body)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(recipe_id: RowId) -> Response:
    DeleteRecipe(_recipe_repository()).execute(RecipeId(recipe_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{recipe_id}/ingredients", response_model=list[IngredientResponse])
def list_recipe_ingredients(
    recipe_id: RowId,
    limit: int | None = None,
    offset: int | None = None,
) -> list[IngredientResponse]:
    use_case = ListIngredients(_recipe_repository(), SqlAlchemyIngredientRepository())
    return use_case.execute(Page.clamp(limit, offset), RecipeId(recipe_id))


@router.get("/{recipe_id}/steps", response_model=list[MethodStepResponse])
def list_recipe_steps(
    recipe_id: RowId,
    limit: int | None = None,
    offset: int | None = None,
) -> list[MethodStepResponse]:
    use_case = ListMethodSteps(_recipe_repository(), SqlAlchemyMethodStepRepository())
    return use_case.execute(Page.clamp(limit, offset), RecipeId(recipe_id))
