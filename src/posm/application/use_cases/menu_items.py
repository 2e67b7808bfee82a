from __future__ import annotations

import logging

from posm.application.dto.requests import CreateMenuItemRequest, UpdateMenuItemRequest
from posm.application.dto.responses import MenuItemResponse
from posm.application.mappers.menu_mapper import to_menu_item_response
from posm.application.metrics.mutations import record_mutation
from posm.application.ports.repositories import (
    MenuItemRepository,
    MenuRepository,
    MissingParentError,
)
from posm.application.use_cases.menus import MenuNotFoundError
from posm.application.use_cases.recipes import RecipeNotFoundError
from posm.domain.common.ids import MenuId, MenuItemId, RecipeId
from posm.domain.common.pagination import Page
from posm.domain.menu.entities import MenuItem

logger = logging.getLogger(__name__)


class MenuItemNotFoundError(Exception):
    def __init__(self, menu_id: MenuId, item_id: MenuItemId) -> None:
        super().__init__(f"menu item not found for menu_id={menu_id}, item_id={item_id}")
        self.details = {"menuId": int(menu_id), "itemId": int(item_id)}


class InvalidRequestError(Exception):
    pass


def _translate_missing_parent(exc: MissingParentError) -> Exception:
    if exc.entity == "recipe":
        return RecipeNotFoundError(RecipeId(exc.entity_id))
    return MenuNotFoundError(MenuId(exc.entity_id))


class _MenuItemUseCase:
    def __init__(self, item_repository: MenuItemRepository) -> None:
        self._item_repository = item_repository

    def _owned_item(self, menu_id: MenuId, item_id: MenuItemId) -> MenuItem:
        item = self._item_repository.get(item_id)
        if item is None or item.menu_id != menu_id:
            raise MenuItemNotFoundError(menu_id, item_id)
        return item


class ListMenuItems:
    def __init__(
        self,
        menu_repository: MenuRepository,
        item_repository: MenuItemRepository,
    ) -> None:
        self._menu_repository = menu_repository
        self._item_repository = item_repository

    def execute(self, menu_id: MenuId, page: Page) -> list[MenuItemResponse]:
        if not self._menu_repository.exists(menu_id):
            raise MenuNotFoundError(menu_id)
        items = self._item_repository.list_for_menu(menu_id, page)
        return [to_menu_item_response(item) for item in items]


class GetMenuItem(_MenuItemUseCase):
    def execute(self, menu_id: MenuId, item_id: MenuItemId) -> MenuItemResponse:
        return to_menu_item_response(self._owned_item(menu_id, item_id))


class CreateMenuItem(_MenuItemUseCase):
    def execute(self, menu_id: MenuId, request: CreateMenuItemRequest) -> MenuItemResponse:
        if request.menu_id is not None and request.menu_id != menu_id:
            raise InvalidRequestError(
                f"body menuId={request.menu_id} does not match path menu_id={menu_id}"
            )
        try:
            item = self._item_repository.create(
                menu_id=menu_id,
                name=request.name,
                description=request.description,
                cost_cents=request.cost_cents,
                recipe_id=RecipeId(request.recipe_id) if request.recipe_id is not None else None,
            )
        except MissingParentError as exc:
            raise _translate_missing_parent(exc) from exc

        record_mutation("menu_item", "create")
        logger.info(
            "menu_item_created",
            extra={"entity": "menu_item", "entity_id": item.item_id, "menu_id": menu_id},
        )
        return to_menu_item_response(item)


class UpdateMenuItem(_MenuItemUseCase):
    def execute(
        self,
        menu_id: MenuId,
        item_id: MenuItemId,
        request: UpdateMenuItemRequest,
    ) -> MenuItemResponse:
        self._owned_item(menu_id, item_id)
        try:
            item = self._item_repository.update(item_id, request.changes())
        except MissingParentError as exc:
            raise _translate_missing_parent(exc) from exc
        if item is None:
            raise MenuItemNotFoundError(menu_id, item_id)
        record_mutation("menu_item", "update")
        return to_menu_item_response(item)


class DeleteMenuItem(_MenuItemUseCase):
    def execute(self, menu_id: MenuId, item_id: MenuItemId) -> None:
        self._owned_item(menu_id, item_id)
        if not self._item_repository.delete(item_id):
            raise MenuItemNotFoundError(menu_id, item_id)
        record_mutation("menu_item", "delete")
