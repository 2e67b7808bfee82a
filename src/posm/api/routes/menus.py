from __future__ import annotations

from fastapi import APIRouter, Response, status

from posm.api.routes.params import RowId
from posm.application.dto.requests import (
    CreateMenuItemRequest,
    CreateMenuRequest,
    UpdateMenuItemRequest,
    UpdateMenuRequest,
)
from posm.application.dto.responses import MenuItemResponse, MenuResponse
from posm.application.use_cases.menu_items import (
    CreateMenuItem,
    DeleteMenuItem,
    GetMenuItem,
    ListMenuItems,
    UpdateMenuItem,
)
from posm.application.use_cases.menus import (
    CreateMenu,
    DeleteMenu,
    GetMenu,
    ListMenus,
    MenuInclude,
    UpdateMenu,
)
from posm.domain.common.ids import MenuId, MenuItemId
from posm.domain.common.pagination import Page
from posm.infrastructure.db.repositories.menu_item_repo import SqlAlchemyMenuItemRepository
from posm.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository

router = APIRouter(prefix="/api/menus", tags=["menus"])


def _menu_repository() -> SqlAlchemyMenuRepository:
    return SqlAlchemyMenuRepository()


def _item_repository() -> SqlAlchemyMenuItemRepository:
    return SqlAlchemyMenuItemRepository()


@router.get("", response_model=list[MenuResponse], response_model_exclude_none=True)
def list_menus(limit: int | None = None, offset: int | None = None) -> list[MenuResponse]:
    return ListMenus(_menu_repository()).execute(Page.clamp(limit, offset))


@router.get("/{menu_id}", response_model=MenuResponse, response_model_exclude_none=True)
def get_menu(menu_id: RowId, include: MenuInclude | None = None) -> MenuResponse:
    return GetMenu(_menu_repository(), _item_repository()).execute(MenuId(menu_id), include)


@router.post(
    "",
    response_model=MenuResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_menu(body: CreateMenuRequest) -> MenuResponse:
    return CreateMenu(_menu_repository()).execute(body)


@router.put("/{menu_id}", response_model=MenuResponse, response_model_exclude_none=True)
def update_menu(menu_id: RowId, body: UpdateMenuRequest) -> MenuResponse:
    return UpdateMenu(_menu_repository()).execute(MenuId(menu_id), body)


@router.delete("/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu(menu_id: RowId) -> Response:
    DeleteMenu(_menu_repository()).execute(MenuId(menu_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{menu_id}/items",
    response_model=list[MenuItemResponse],
    response_model_exclude_none=True,
)
def list_menu_items(
    menu_id: RowId,
    limit: int | None = None,
    offset: int | None = None,
) -> list[MenuItemResponse]:
    use_case = ListMenuItems(_menu_repository(), _item_repository())
    return use_case.execute(MenuId(menu_id), Page.clamp(limit, offset))


@router.get(
    "/{menu_id}/items/{item_id}",
    response_model=MenuItemResponse,
    response_model_exclude_none=True,
)
def get_menu_item(menu_id: RowId, item_id: RowId) -> MenuItemResponse:
    return GetMenuItem(_item_repository()).execute(MenuId(menu_id), MenuItemId(item_id))


@router.post(
    "/{menu_id}/items",
    response_model=MenuItemResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_menu_item(menu_id: RowId, body: CreateMenuItemRequest) -> MenuItemResponse:
    return CreateMenuItem(_item_repository()).execute(MenuId(menu_id), body)


@router.put(
    "/{menu_id}/items/{item_id}",
    response_model=MenuItemResponse,
    response_model_exclude_none=True,
)
def update_menu_item(
    menu_id: RowId,
    item_id: RowId,
    body: UpdateMenuItemRequest,
) -> MenuItemResponse:
    return UpdateMenuItem(_item_repository()).execute(MenuId(menu_id), MenuItemId(item_id), body)


@router.delete("/{menu_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(menu_id: RowId, item_id: RowId) -> Response:
    DeleteMenuItem(_item_repository()).execute(MenuId(menu_id), MenuItemId(item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
