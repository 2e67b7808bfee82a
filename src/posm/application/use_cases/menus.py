from __future__ import annotations

import logging
from typing import Literal

from posm.application.dto.requests import CreateMenuRequest, UpdateMenuRequest
from posm.application.dto.responses import MenuResponse
from posm.application.mappers.menu_mapper import to_menu_response
from posm.application.metrics.mutations import record_mutation
from posm.application.ports.repositories import MenuItemRepository, MenuRepository
from posm.domain.common.ids import MenuId
from posm.domain.common.pagination import Page

logger = logging.getLogger(__name__)

MenuInclude = Literal["items", "all"]


class MenuNotFoundError(Exception):
    def __init__(self, menu_id: MenuId) -> None:
        super().__init__(f"menu not found for menu_id={menu_id}")
        self.details = {"menuId": int(menu_id)}


class ListMenus:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, page: Page) -> list[MenuResponse]:
        return [to_menu_response(menu) for menu in self._repository.list_all(page)]


class GetMenu:
    def __init__(self, repository: MenuRepository, item_repository: MenuItemRepository) -> None:
        self._repository = repository
        self._item_repository = item_repository

    def execute(self, menu_id: MenuId, include: MenuInclude | None = None) -> MenuResponse:
        menu = self._repository.get(menu_id)
        if menu is None:
            raise MenuNotFoundError(menu_id)

        if include in ("items", "all"):
            return to_menu_response(menu, self._item_repository.list_for_menu(menu_id))
        return to_menu_response(menu)


class CreateMenu:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, request: CreateMenuRequest) -> MenuResponse:
        menu = self._repository.create(name=request.name, description=request.description)
        record_mutation("menu", "create")
        logger.info("menu_created", extra={"entity": "menu", "entity_id": menu.menu_id})
        return to_menu_response(menu)


class UpdateMenu:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, menu_id: MenuId, request: UpdateMenuRequest) -> MenuResponse:
        menu = self._repository.update(menu_id, request.changes())
        if menu is None:
            raise MenuNotFoundError(menu_id)
        record_mutation("menu", "update")
        return to_menu_response(menu)


class DeleteMenu:
    """Deletes the menu together with every item on it."""

    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, menu_id: MenuId) -> None:
        if not self._repository.delete(menu_id):
            raise MenuNotFoundError(menu_id)
        record_mutation("menu", "delete")
        logger.info("menu_deleted", extra={"entity": "menu", "entity_id": menu_id})
