from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from posm.application.dto.responses import MenuItemResponse, MenuResponse
from posm.client.state import (
    MenuState,
    Operation,
    RequestStatus,
    clear_error,
    fulfilled,
    pending,
    reduce,
    rejected,
    select_items_by_menu_id,
    select_menu_by_id,
    select_menu_error,
    select_menu_loading,
    select_menus,
)


def _menu(menu_id: int, name: str, items: list[MenuItemResponse] | None = None) -> MenuResponse:
    return MenuResponse(id=menu_id, name=name, items=items)


def _item(item_id: int, menu_id: int = 1, cost_cents: int = 999) -> MenuItemResponse:
    return MenuItemResponse(
        id=item_id,
        menuId=menu_id,
        name=f"Item {item_id}",
        costCents=cost_cents,
        cost=cost_cents / 100,
    )


def test_pending_sets_loading_and_clears_previous_error() -> None:
    state = reduce(MenuState(), rejected(Operation.FETCH_MENUS, "boom"))

    state = reduce(state, pending(Operation.FETCH_MENUS))

    assert select_menu_loading(state) is True
    assert select_menu_error(state) is None


def test_rejected_keeps_message_and_falls_back_to_default() -> None:
    with_message = reduce(MenuState(), rejected(Operation.CREATE_MENU, "Menu not found"))
    without_message = reduce(MenuState(), rejected(Operation.CREATE_MENU, None))

    assert with_message.request.status == RequestStatus.ERROR
    assert select_menu_error(with_message) == "Menu not found"
    assert select_menu_error(without_message) == "Request failed"
    assert select_menu_loading(with_message) is False


def test_clear_error_only_resets_error() -> None:
    state = reduce(MenuState(), fulfilled(Operation.FETCH_MENUS, [_menu(1, "Lunch")]))
    state = reduce(state, rejected(Operation.DELETE_MENU, "nope"))

    state = reduce(state, clear_error())

    assert select_menu_error(state) is None
    assert [menu.name for menu in select_menus(state)] == ["Lunch"]


def test_reduce_never_mutates_previous_state() -> None:
    before = reduce(MenuState(), fulfilled(Operation.FETCH_MENUS, [_menu(1, "Lunch")]))

    after = reduce(before, fulfilled(Operation.CREATE_MENU, _menu(2, "Dinner")))

    assert [menu.id for menu in select_menus(before)] == [1]
    assert [menu.id for menu in select_menus(after)] == [1, 2]
    assert select_menu_by_id(before, 2) is None


def test_get_menu_caches_menu_and_embedded_items() -> None:
    menu = _menu(1, "Lunch", items=[_item(10), _item(11)])

    state = reduce(MenuState(), fulfilled(Operation.GET_MENU, menu, menu_id=1))

    assert select_menu_by_id(state, 1) == menu
    assert [item.id for item in select_items_by_menu_id(state, 1)] == [10, 11]


def test_update_menu_replaces_in_place() -> None:
    state = reduce(
        MenuState(),
        fulfilled(Operation.FETCH_MENUS, [_menu(1, "Lunch"), _menu(2, "Dinner")]),
    )

    state = reduce(state, fulfilled(Operation.UPDATE_MENU, _menu(1, "Brunch"), menu_id=1))

    assert [menu.name for menu in select_menus(state)] == ["Brunch", "Dinner"]
    assert select_menu_by_id(state, 1).name == "Brunch"


def test_delete_menu_drops_menu_and_its_items() -> None:
    state = reduce(MenuState(), fulfilled(Operation.GET_MENU, _menu(1, "Lunch", [_item(10)])))
    state = reduce(state, fulfilled(Operation.CREATE_MENU, _menu(2, "Dinner")))

    state = reduce(state, fulfilled(Operation.DELETE_MENU, 1, menu_id=1))

    assert [menu.id for menu in select_menus(state)] == [2]
    assert select_menu_by_id(state, 1) is None
    assert select_items_by_menu_id(state, 1) == ()


def test_item_create_update_delete_update_cache() -> None:
    state = reduce(
        MenuState(),
        fulfilled(Operation.FETCH_MENU_ITEMS, [_item(10)], menu_id=1),
    )

    state = reduce(state, fulfilled(Operation.CREATE_MENU_ITEM, _item(11), menu_id=1))
    state = reduce(
        state,
        fulfilled(Operation.UPDATE_MENU_ITEM, _item(10, cost_cents=1050), menu_id=1),
    )
    assert [(item.id, item.costCents) for item in select_items_by_menu_id(state, 1)] == [
        (10, 1050),
        (11, 999),
    ]

    state = reduce(
        state,
        fulfilled(Operation.DELETE_MENU_ITEM, {"menu_id": 1, "item_id": 10}, menu_id=1),
    )
    assert [item.id for item in select_items_by_menu_id(state, 1)] == [11]
