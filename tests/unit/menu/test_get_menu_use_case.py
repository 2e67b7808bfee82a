from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from posm.application.dto.requests import (
    CreateMenuItemRequest,
    CreateMenuRequest,
    UpdateMenuItemRequest,
    UpdateMenuRequest,
)
from posm.application.ports.repositories import MissingParentError
from posm.application.use_cases.menu_items import (
    CreateMenuItem,
    DeleteMenuItem,
    GetMenuItem,
    InvalidRequestError,
    ListMenuItems,
    MenuItemNotFoundError,
    UpdateMenuItem,
)
from posm.application.use_cases.menus import (
    DeleteMenu,
    GetMenu,
    ListMenus,
    MenuNotFoundError,
    UpdateMenu,
)
from posm.application.use_cases.recipes import RecipeNotFoundError
from posm.domain.common.ids import MenuId, MenuItemId, RecipeId
from posm.domain.common.money import Money
from posm.domain.common.pagination import Page
from posm.domain.menu.entities import Menu, MenuItem


class FakeMenuRepository:
    def __init__(self, menus: list[Menu] | None = None) -> None:
        self._menus = {menu.menu_id: menu for menu in menus or []}
        self.last_page: Page | None = None

    def list_all(self, page: Page) -> list[Menu]:
        self.last_page = page
        menus = sorted(self._menus.values(), key=lambda menu: menu.menu_id)
        return menus[page.offset : page.offset + page.limit]

    def get(self, menu_id: MenuId) -> Menu | None:
        return self._menus.get(menu_id)

    def exists(self, menu_id: MenuId) -> bool:
        return menu_id in self._menus

    def create(self, name: str, description: str | None) -> Menu:
        menu = Menu(menu_id=MenuId(len(self._menus) + 1), name=name, description=description)
        self._menus[menu.menu_id] = menu
        return menu

    def update(self, menu_id: MenuId, changes: dict[str, Any]) -> Menu | None:
        menu = self._menus.get(menu_id)
        if menu is None:
            return None
        updated = Menu(
            menu_id=menu_id,
            name=changes.get("name", menu.name),
            description=changes.get("description", menu.description),
        )
        self._menus[menu_id] = updated
        return updated

    def delete(self, menu_id: MenuId) -> bool:
        return self._menus.pop(menu_id, None) is not None


class FakeMenuItemRepository:
    def __init__(self, items: list[MenuItem] | None = None, known_recipes: set[int] | None = None):
        self._items = {item.item_id: item for item in items or []}
        self._known_recipes = known_recipes or set()
        self.created: list[dict[str, Any]] = []

    def list_for_menu(self, menu_id: MenuId, page: Page | None = None) -> list[MenuItem]:
        return [item for item in self._items.values() if item.menu_id == menu_id]

    def get(self, item_id: MenuItemId) -> MenuItem | None:
        return self._items.get(item_id)

    def create(
        self,
        menu_id: MenuId,
        name: str,
        description: str | None,
        cost_cents: int,
        recipe_id: RecipeId | None,
    ) -> MenuItem:
        if recipe_id is not None and recipe_id not in self._known_recipes:
            raise MissingParentError("recipe", recipe_id)
        self.created.append({"menu_id": menu_id, "name": name, "cost_cents": cost_cents})
        item = MenuItem(
            item_id=MenuItemId(len(self._items) + 100),
            menu_id=menu_id,
            name=name,
            description=description,
            cost=Money(amount_cents=cost_cents),
            recipe_id=recipe_id,
        )
        self._items[item.item_id] = item
        return item

    def update(self, item_id: MenuItemId, changes: dict[str, Any]) -> MenuItem | None:
        item = self._items.get(item_id)
        if item is None:
            return None
        updated = MenuItem(
            item_id=item.item_id,
            menu_id=item.menu_id,
            name=changes.get("name", item.name),
            description=changes.get("description", item.description),
            cost=Money(amount_cents=changes.get("cost_cents", item.cost_cents)),
            recipe_id=changes.get("recipe_id", item.recipe_id),
        )
        self._items[item_id] = updated
        return updated

    def delete(self, item_id: MenuItemId) -> bool:
        return self._items.pop(item_id, None) is not None


def _burger(menu_id: int = 1, item_id: int = 10) -> MenuItem:
    return MenuItem(
        item_id=MenuItemId(item_id),
        menu_id=MenuId(menu_id),
        name="Burger",
        description=None,
        cost=Money(amount_cents=999),
    )


def _lunch() -> Menu:
    return Menu(menu_id=MenuId(1), name="Lunch")


def test_get_menu_without_include_omits_items() -> None:
    use_case = GetMenu(FakeMenuRepository([_lunch()]), FakeMenuItemRepository([_burger()]))

    response = use_case.execute(MenuId(1))

    assert response.name == "Lunch"
    assert response.items is None


def test_get_menu_with_items_embeds_priced_items() -> None:
    use_case = GetMenu(FakeMenuRepository([_lunch()]), FakeMenuItemRepository([_burger()]))

    response = use_case.execute(MenuId(1), include="all")

    assert response.items is not None
    assert [(item.name, item.costCents, item.cost) for item in response.items] == [
        ("Burger", 999, 9.99)
    ]


def test_get_menu_raises_when_missing() -> None:
    use_case = GetMenu(FakeMenuRepository(), FakeMenuItemRepository())

    with pytest.raises(MenuNotFoundError) as exc_info:
        use_case.execute(MenuId(42))

    assert exc_info.value.details == {"menuId": 42}


def test_list_menus_forwards_page() -> None:
    repo = FakeMenuRepository([_lunch(), Menu(menu_id=MenuId(2), name="Dinner")])

    response = ListMenus(repo).execute(Page(limit=1, offset=1))

    assert [menu.name for menu in response] == ["Dinner"]
    assert repo.last_page == Page(limit=1, offset=1)


def test_update_menu_applies_only_supplied_fields() -> None:
    repo = FakeMenuRepository([Menu(menu_id=MenuId(1), name="Lunch", description="Noon")])

    response = UpdateMenu(repo).execute(MenuId(1), UpdateMenuRequest(name="Brunch"))

    assert response.name == "Brunch"
    assert response.description == "Noon"


def test_delete_missing_menu_raises() -> None:
    with pytest.raises(MenuNotFoundError):
        DeleteMenu(FakeMenuRepository()).execute(MenuId(3))


def test_list_menu_items_requires_existing_menu() -> None:
    use_case = ListMenuItems(FakeMenuRepository(), FakeMenuItemRepository())

    with pytest.raises(MenuNotFoundError):
        use_case.execute(MenuId(9), Page())


def test_create_menu_item_rejects_mismatched_body_menu_id() -> None:
    items = FakeMenuItemRepository()
    request = CreateMenuItemRequest(menuId=2, name="Burger", costCents=999)

    with pytest.raises(InvalidRequestError):
        CreateMenuItem(items).execute(MenuId(1), request)

    assert items.created == []


def test_create_menu_item_translates_missing_recipe() -> None:
    request = CreateMenuItemRequest(name="Burger", costCents=999, recipeId=5)

    with pytest.raises(RecipeNotFoundError):
        CreateMenuItem(FakeMenuItemRepository()).execute(MenuId(1), request)


def test_create_menu_item_links_known_recipe() -> None:
    request = CreateMenuItemRequest(name="Burger", costCents=1050, recipeId=5)

    response = CreateMenuItem(FakeMenuItemRepository(known_recipes={5})).execute(
        MenuId(1), request
    )

    assert response.menuId == 1
    assert response.recipeId == 5
    assert response.cost == 10.5


def test_item_operations_are_scoped_to_path_menu() -> None:
    items = FakeMenuItemRepository([_burger(menu_id=2, item_id=10)])

    with pytest.raises(MenuItemNotFoundError):
        GetMenuItem(items).execute(MenuId(1), MenuItemId(10))
    with pytest.raises(MenuItemNotFoundError):
        UpdateMenuItem(items).execute(
            MenuId(1), MenuItemId(10), UpdateMenuItemRequest(costCents=100)
        )
    with pytest.raises(MenuItemNotFoundError):
        DeleteMenuItem(items).execute(MenuId(1), MenuItemId(10))

    assert items.get(MenuItemId(10)) is not None


def test_update_menu_item_can_detach_recipe() -> None:
    linked = MenuItem(
        item_id=MenuItemId(10),
        menu_id=MenuId(1),
        name="Burger",
        description=None,
        cost=Money(amount_cents=999),
        recipe_id=RecipeId(5),
    )
    items = FakeMenuItemRepository([linked])

    response = UpdateMenuItem(items).execute(
        MenuId(1), MenuItemId(10), UpdateMenuItemRequest(recipeId=None)
    )

    assert response.recipeId is None
    assert response.costCents == 999


def test_create_menu_request_accepts_snake_case_names() -> None:
    assert CreateMenuRequest(name="Lunch").description is None
    assert CreateMenuItemRequest(name="Fries", cost_cents=300).cost_cents == 300
