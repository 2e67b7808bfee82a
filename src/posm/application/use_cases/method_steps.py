from __future__ import annotations

import logging

from posm.application.dto.requests import CreateMethodStepRequest, UpdateMethodStepRequest
from posm.application.dto.responses import MethodStepResponse
from posm.application.mappers.recipe_mapper import to_step_response
from posm.application.metrics.mutations import record_mutation, record_step_order_conflict
from posm.application.ports.repositories import (
    MethodStepRepository,
    MissingParentError,
    RecipeRepository,
    StepOrderConflictError,
)
from posm.application.use_cases.recipes import RecipeNotFoundError
from posm.domain.common.ids import MethodStepId, RecipeId
from posm.domain.common.pagination import Page
from posm.domain.recipe.entities import sort_steps

logger = logging.getLogger(__name__)


class MethodStepNotFoundError(Exception):
    def __init__(self, step_id: MethodStepId) -> None:
        super().__init__(f"method step not found for step_id={step_id}")
        self.details = {"stepId": int(step_id)}


class ListMethodSteps:
    def __init__(
        self,
        recipe_repository: RecipeRepository,
        repository: MethodStepRepository,
    ) -> None:
        self._recipe_repository = recipe_repository
        self._repository = repository

    def execute(self, page: Page, recipe_id: RecipeId | None = None) -> list[MethodStepResponse]:
        if recipe_id is not None and not self._recipe_repository.exists(recipe_id):
            raise RecipeNotFoundError(recipe_id)
        steps = self._repository.list_all(page=page, recipe_id=recipe_id)
        return [to_step_response(step) for step in sort_steps(steps)]


class GetMethodStep:
    def __init__(self, repository: MethodStepRepository) -> None:
        self._repository = repository

    def execute(self, step_id: MethodStepId) -> MethodStepResponse:
        step = self._repository.get(step_id)
        if step is None:
            raise MethodStepNotFoundError(step_id)
        return to_step_response(step)


class CreateMethodStep:
    def __init__(self, repository: MethodStepRepository) -> None:
        self._repository = repository

    def execute(self, request: CreateMethodStepRequest) -> MethodStepResponse:
        recipe_id = RecipeId(request.recipe_id)
        try:
            step = self._repository.create(
                recipe_id=recipe_id,
                order=request.order,
                instruction=request.instruction,
            )
        except MissingParentError as exc:
            raise RecipeNotFoundError(recipe_id) from exc
        except StepOrderConflictError:
            record_step_order_conflict()
            logger.info(
                "step_order_conflict",
                extra={"entity": "method_step", "recipe_id": recipe_id, "order": request.order},
            )
            raise
        record_mutation("method_step", "create")
        return to_step_response(step)


class UpdateMethodStep:
    def __init__(self, repository: MethodStepRepository) -> None:
        self._repository = repository

    def execute(
        self, step_id: MethodStepId, request: UpdateMethodStepRequest
    ) -> MethodStepResponse:
        try:
            step = self._repository.update(step_id, request.changes())
        except StepOrderConflictError:
            record_step_order_conflict()
            logger.info(
                "step_order_conflict",
                extra={"entity": "method_step", "entity_id": step_id, "order": request.order},
            )
            raise
        if step is None:
            raise MethodStepNotFoundError(step_id)
        record_mutation("method_step", "update")
        return to_step_response(step)


class DeleteMethodStep:
    def __init__(self, repository: MethodStepRepository) -> None:
        self._repository = repository

    def execute(self, step_id: MethodStepId) -> None:
        if not self._repository.delete(step_id):
            raise MethodStepNotFoundError(step_id)
        record_mutation("method_step", "delete")
