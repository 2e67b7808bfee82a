from __future__ import annotations

from collections.abc import Sequence

from posm.application.dto.responses import MenuItemResponse, MenuResponse
from posm.domain.menu.entities import Menu, MenuItem


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        id=int(item.item_id),
        menuId=int(item.menu_id),
        name=item.name,
        description=item.description,
        costCents=item.cost_cents,
        cost=item.cost.dollars,
        recipeId=int(item.recipe_id) if item.recipe_id is not None else None,
    )


def to_menu_response(menu: Menu, items: Sequence[MenuItem] | None = None) -> MenuResponse:
    return MenuResponse(
        id=int(menu.menu_id),
        name=menu.name,
        description=menu.description,
        items=[to_menu_item_response(item) for item in items] if items is not None else None,
    )
