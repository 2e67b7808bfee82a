from __future__ import annotations

from fastapi import APIRouter, Response, status

from posm.api.routes.params import RecipeFilter, RowId
from posm.application.dto.requests import CreateMethodStepRequest, UpdateMethodStepRequest
from posm.application.dto.responses import MethodStepResponse
from posm.application.use_cases.method_steps import (
    CreateMethodStep,
    DeleteMethodStep,
    GetMethodStep,
    ListMethodSteps,
    UpdateMethodStep,
)
from posm.domain.common.ids import MethodStepId, RecipeId
from posm.domain.common.pagination import Page
from posm.infrastructure.db.repositories.method_step_repo import SqlAlchemyMethodStepRepository
from posm.infrastructure.db.repositories.recipe_repo import SqlAlchemyRecipeRepository

router = APIRouter(prefix="/api/steps", tags=["steps"])


def _step_repository() -> SqlAlchemyMethodStepRepository:
    return SqlAlchemyMethodStepRepository()


@router.get("", response_model=list[MethodStepResponse])
def list_steps(
    recipe_id: RecipeFilter = None,
    limit: int | None = None,
    offset: int | None = None,
) -> list[MethodStepResponse]:
    use_case = ListMethodSteps(SqlAlchemyRecipeRepository(), _step_repository())
    return use_case.execute(
        Page.clamp(limit, offset),
        RecipeId(recipe_id) if recipe_id is not None else None,
    )


@router.get("/{step_id}", response_model=MethodStepResponse)
def get_step(step_id: RowId) -> MethodStepResponse:
    return GetMethodStep(_step_repository()).execute(MethodStepId(step_id))


@router.post("", response_model=MethodStepResponse, status_code=status.HTTP_201_CREATED)
def create_step(body: CreateMethodStepRequest) -> MethodStepResponse:
    return CreateMethodStep(_step_repository()).execute(body)


@router.put("/{step_id}", response_model=MethodStepResponse)
def update_step(step_id: RowId, body: UpdateMethodStepRequest) -> MethodStepResponse:
    return UpdateMethodStep(_step_repository()).execute(MethodStepId(step_id), body)


@router.delete("/{step_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_step(step_id: RowId) -> Response:
    DeleteMethodStep(_step_repository()).execute(MethodStepId(step_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
