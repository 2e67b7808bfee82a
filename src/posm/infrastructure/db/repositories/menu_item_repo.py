from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from posm.application.ports.repositories import MenuItemRepository, MissingParentError
from posm.domain.common.ids import MenuId, MenuItemId, RecipeId
from posm.domain.common.money import Money
from posm.domain.common.pagination import Page
from posm.domain.menu.entities import MenuItem
from posm.infrastructure.db.models.menu import MenuItemModel, MenuModel
from posm.infrastructure.db.models.recipe import RecipeModel
from posm.infrastructure.db.session import get_engine

_UPDATABLE_FIELDS = frozenset({"name", "description", "cost_cents", "recipe_id"})


class SqlAlchemyMenuItemRepository(MenuItemRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_for_menu(self, menu_id: MenuId, page: Page | None = None) -> list[MenuItem]:
        statement = (
            select(MenuItemModel)
            .where(MenuItemModel.menu_id == int(menu_id))
            .order_by(MenuItemModel.id)
        )
        if page is not None:
            statement = statement.offset(page.offset).limit(page.limit)
        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [_to_domain(model) for model in models]

    def get(self, item_id: MenuItemId) -> MenuItem | None:
        with Session(self._engine) as session:
            model = session.get(MenuItemModel, int(item_id))
            if model is None:
                return None
            return _to_domain(model)

    def create(
        self,
        menu_id: MenuId,
        name: str,
        description: str | None,
        cost_cents: int,
        recipe_id: RecipeId | None,
    ) -> MenuItem:
        with Session(self._engine) as session, session.begin():
            if session.get(MenuModel, int(menu_id)) is None:
                raise MissingParentError("menu", int(menu_id))
            if recipe_id is not None and session.get(RecipeModel, int(recipe_id)) is None:
                raise MissingParentError("recipe", int(recipe_id))
            model = MenuItemModel(
                menu_id=int(menu_id),
                name=name,
                description=description,
                cost_cents=cost_cents,
                recipe_id=int(recipe_id) if recipe_id is not None else None,
            )
            session.add(model)
            session.flush()
            return _to_domain(model)

    def update(self, item_id: MenuItemId, changes: Mapping[str, Any]) -> MenuItem | None:
        with Session(self._engine) as session, session.begin():
            model = session.get(MenuItemModel, int(item_id))
            if model is None:
                return None
            recipe_id = changes.get("recipe_id")
            if recipe_id is not None and session.get(RecipeModel, int(recipe_id)) is None:
                raise MissingParentError("recipe", int(recipe_id))
            for field, value in changes.items():
                if field in _UPDATABLE_FIELDS:
                    setattr(model, field, value)
            session.flush()
            return _to_domain(model)

    def delete(self, item_id: MenuItemId) -> bool:
        with Session(self._engine) as session, session.begin():
            model = session.get(MenuItemModel, int(item_id))
            if model is None:
                return False
            session.delete(model)
            return True


def _to_domain(model: MenuItemModel) -> MenuItem:
    return MenuItem(
        item_id=MenuItemId(model.id),
        menu_id=MenuId(model.menu_id),
        name=model.name,
        description=model.description,
        cost=Money(amount_cents=model.cost_cents),
        recipe_id=RecipeId(model.recipe_id) if model.recipe_id is not None else None,
    )
