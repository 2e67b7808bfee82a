from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Engine, delete, select
from sqlalchemy.orm import Session

from posm.application.ports.repositories import MenuRepository
from posm.domain.common.ids import MenuId
from posm.domain.common.pagination import Page
from posm.domain.menu.entities import Menu
from posm.infrastructure.db.models.menu import MenuItemModel, MenuModel
from posm.infrastructure.db.session import get_engine

_UPDATABLE_FIELDS = frozenset({"name", "description"})


class SqlAlchemyMenuRepository(MenuRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_all(self, page: Page) -> list[Menu]:
        statement = select(MenuModel).order_by(MenuModel.id).offset(page.offset).limit(page.limit)
        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [_to_domain(model) for model in models]

    def get(self, menu_id: MenuId) -> Menu | None:
        with Session(self._engine) as session:
            model = session.get(MenuModel, int(menu_id))
            if model is None:
                return None
            return _to_domain(model)

    def exists(self, menu_id: MenuId) -> bool:
        statement = select(MenuModel.id).where(MenuModel.id == int(menu_id)).limit(1)
        with Session(self._engine) as session:
            return session.execute(statement).scalar_one_or_none() is not None

    def create(self, name: str, description: str | None) -> Menu:
        with Session(self._engine) as session, session.begin():
            model = MenuModel(name=name, description=description)
            session.add(model)
            session.flush()
            return _to_domain(model)

    def update(self, menu_id: MenuId, changes: Mapping[str, Any]) -> Menu | None:
        with Session(self._engine) as session, session.begin():
            model = session.get(MenuModel, int(menu_id))
            if model is None:
                return None
            for field, value in changes.items():
                if field in _UPDATABLE_FIELDS:
                    setattr(model, field, value)
            session.flush()
            return _to_domain(model)

    def delete(self, menu_id: MenuId) -> bool:
        with Session(self._engine) as session, session.begin():
            model = session.get(MenuModel, int(menu_id))
            if model is None:
                return False
            session.execute(delete(MenuItemModel).where(MenuItemModel.menu_id == model.id))
            session.delete(model)
            return True


def _to_domain(model: MenuModel) -> Menu:
    return Menu(
        menu_id=MenuId(model.id),
        name=model.name,
        description=model.description,
    )
