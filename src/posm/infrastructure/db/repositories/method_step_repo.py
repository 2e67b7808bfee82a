from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Engine, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from posm.application.ports.repositories import (
    MethodStepRepository,
    MissingParentError,
    StepOrderConflictError,
)
from posm.domain.common.ids import MethodStepId, RecipeId
from posm.domain.common.pagination import Page
from posm.domain.recipe.entities import MethodStep
from posm.infrastructure.db.models.recipe import MethodStepModel, RecipeModel
from posm.infrastructure.db.session import get_engine


class SqlAlchemyMethodStepRepository(MethodStepRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_all(
        self, page: Page | None = None, recipe_id: RecipeId | None = None
    ) -> list[MethodStep]:
        statement = select(MethodStepModel).order_by(MethodStepModel.order, MethodStepModel.id)
        if recipe_id is not None:
            statement = statement.where(MethodStepModel.recipe_id == int(recipe_id))
        if page is not None:
            statement = statement.offset(page.offset).limit(page.limit)
        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [_to_domain(model) for model in models]

    def get(self, step_id: MethodStepId) -> MethodStep | None:
        with Session(self._engine) as session:
            model = session.get(MethodStepModel, int(step_id))
            if model is None:
                return None
            return _to_domain(model)

    def create(self, recipe_id: RecipeId, order: int, instruction: str) -> MethodStep:
        try:
            with Session(self._engine) as session, session.begin():
                if session.get(RecipeModel, int(recipe_id)) is None:
                    raise MissingParentError("recipe", int(recipe_id))
                if _order_taken(session, int(recipe_id), order, exclude_id=None):
                    raise StepOrderConflictError(recipe_id, order)
                model = MethodStepModel(
                    recipe_id=int(recipe_id),
                    order=order,
                    instruction=instruction,
                )
                session.add(model)
                session.flush()
                return _to_domain(model)
        except IntegrityError as exc:
            raise StepOrderConflictError(recipe_id, order) from exc

    def update(self, step_id: MethodStepId, changes: Mapping[str, Any]) -> MethodStep | None:
        recipe_id: RecipeId | None = None
        order = changes.get("order")
        try:
            with Session(self._engine) as session, session.begin():
                model = session.get(MethodStepModel, int(step_id))
                if model is None:
                    return None
                recipe_id = RecipeId(model.recipe_id)
                if order is not None and order != model.order:
                    if _order_taken(session, model.recipe_id, order, exclude_id=model.id):
                        raise StepOrderConflictError(recipe_id, order)
                    model.order = order
                if "instruction" in changes:
                    model.instruction = changes["instruction"]
                session.flush()
                return _to_domain(model)
        except IntegrityError as exc:
            if recipe_id is None or order is None:
                raise
            raise StepOrderConflictError(recipe_id, order) from exc

    def delete(self, step_id: MethodStepId) -> bool:
        with Session(self._engine) as session, session.begin():
            model = session.get(MethodStepModel, int(step_id))
            if model is None:
                return False
            session.delete(model)
            return True


def _order_taken(session: Session, recipe_id: int, order: int, exclude_id: int | None) -> bool:
    statement = select(MethodStepModel.id).where(
        MethodStepModel.recipe_id == recipe_id,
        MethodStepModel.order == order,
    )
    if exclude_id is not None:
        statement = statement.where(MethodStepModel.id != exclude_id)
    return session.execute(statement.limit(1)).scalar_one_or_none() is not None


def _to_domain(model: MethodStepModel) -> MethodStep:
    return MethodStep(
        step_id=MethodStepId(model.id),
        recipe_id=RecipeId(model.recipe_id),
        order=model.order,
        instruction=model.instruction,
    )
