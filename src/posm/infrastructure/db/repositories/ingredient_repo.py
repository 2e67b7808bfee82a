from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from posm.application.ports.repositories import IngredientRepository, MissingParentError
from posm.domain.common.ids import IngredientId, RecipeId
from posm.domain.common.pagination import Page
from posm.domain.recipe.entities import Ingredient
from posm.infrastructure.db.models.recipe import IngredientModel, RecipeModel
from posm.infrastructure.db.session import get_engine

_UPDATABLE_FIELDS = frozenset({"name", "amount", "unit"})


class SqlAlchemyIngredientRepository(IngredientRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_all(
        self, page: Page | None = None, recipe_id: RecipeId | None = None
    ) -> list[Ingredient]:
        statement = select(IngredientModel).order_by(IngredientModel.id)
        if recipe_id is not None:
            statement = statement.where(IngredientModel.recipe_id == int(recipe_id))
        if page is not None:
            statement = statement.offset(page.offset).limit(page.limit)
        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [_to_domain(model) for model in models]

    def get(self, ingredient_id: IngredientId) -> Ingredient | None:
        with Session(self._engine) as session:
            model = session.get(IngredientModel, int(ingredient_id))
            if model is None:
                return None
            return _to_domain(model)

    def create(self, recipe_id: RecipeId, name: str, amount: float, unit: str) -> Ingredient:
        with Session(self._engine) as session, session.begin():
            if session.get(RecipeModel, int(recipe_id)) is None:
                raise MissingParentError("recipe", int(recipe_id))
            model = IngredientModel(recipe_id=int(recipe_id), name=name, amount=amount, unit=unit)
            session.add(model)
            session.flush()
            return _to_domain(model)

    def update(
        self, ingredient_id: IngredientId, changes: Mapping[str, Any]
    ) -> Ingredient | None:
        with Session(self._engine) as session, session.begin():
            model = session.get(IngredientModel, int(ingredient_id))
            if model is None:
                return None
            for field, value in changes.items():
                if field in _UPDATABLE_FIELDS:
                    setattr(model, field, value)
            session.flush()
            return _to_domain(model)

    def delete(self, ingredient_id: IngredientId) -> bool:
        with Session(self._engine) as session, session.begin():
            model = session.get(IngredientModel, int(ingredient_id))
            if model is None:
                return False
            session.delete(model)
            return True


def _to_domain(model: IngredientModel) -> Ingredient:
    return Ingredient(
        ingredient_id=IngredientId(model.id),
        recipe_id=RecipeId(model.recipe_id),
        name=model.name,
        amount=float(model.amount),
        unit=model.unit,
    )
