from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Engine, delete, select, update
from sqlalchemy.orm import Session

from posm.application.ports.repositories import RecipeRepository
from posm.domain.common.ids import RecipeId
from posm.domain.common.pagination import Page
from posm.domain.recipe.entities import Recipe
from posm.infrastructure.db.models.menu import MenuItemModel
from posm.infrastructure.db.models.recipe import IngredientModel, MethodStepModel, RecipeModel
from posm.infrastructure.db.session import get_engine


class SqlAlchemyRecipeRepository(RecipeRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_all(self, page: Page) -> list[Recipe]:
        statement = (
            select(RecipeModel).order_by(RecipeModel.id).offset(page.offset).limit(page.limit)
        )
        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [_to_domain(model) for model in models]

    def get(self, recipe_id: RecipeId) -> Recipe | None:
        with Session(self._engine) as session:
            model = session.get(RecipeModel, int(recipe_id))
            if model is None:
                return None
            return _to_domain(model)

    def exists(self, recipe_id: RecipeId) -> bool:
        statement = select(RecipeModel.id).where(RecipeModel.id == int(recipe_id)).limit(1)
        with Session(self._engine) as session:
            return session.execute(statement).scalar_one_or_none() is not None

    def create(self, name: str) -> Recipe:
        with Session(self._engine) as session, session.begin():
            model = RecipeModel(name=name)
            session.add(model)
            session.flush()
            return _to_domain(model)

    def update(self, recipe_id: RecipeId, changes: Mapping[str, Any]) -> Recipe | None:
        with Session(self._engine) as session, session.begin():
            model = session.get(RecipeModel, int(recipe_id))
            if model is None:
                return None
            if "name" in changes:
                model.name = changes["name"]
            session.flush()
            return _to_domain(model)

    def delete(self, recipe_id: RecipeId) -> bool:
        with Session(self._engine) as session, session.begin():
            model = session.get(RecipeModel, int(recipe_id))
            if model is None:
                return False
            session.execute(
                update(MenuItemModel)
                .where(MenuItemModel.recipe_id == model.id)
                .values(recipe_id=None)
            )
            session.execute(delete(IngredientModel).where(IngredientModel.recipe_id == model.id))
            session.execute(delete(MethodStepModel).where(MethodStepModel.recipe_id == model.id))
            session.delete(model)
            return True


def _to_domain(model: RecipeModel) -> Recipe:
    return Recipe(recipe_id=RecipeId(model.id), name=model.name)
