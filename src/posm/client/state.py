"""Normalized client-side cache of menus and menu items.

State is immutable; ``reduce`` returns a new ``MenuState`` for every action. Each remote
operation goes through three phases (pending, fulfilled, rejected) tracked by a single
``AsyncResult`` so views can show a loading flag and the latest error message.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from posm.application.dto.responses import MenuItemResponse, MenuResponse

DEFAULT_ERROR_MESSAGE = "Request failed"


class RequestStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    OK = "ok"
    ERROR = "error"


class Phase(str, Enum):
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


class Operation(str, Enum):
    FETCH_MENUS = "menu/fetchMenus"
    GET_MENU = "menu/getMenu"
    CREATE_MENU = "menu/createMenu"
    UPDATE_MENU = "menu/updateMenu"
    DELETE_MENU = "menu/deleteMenu"
    FETCH_MENU_ITEMS = "menu/fetchMenuItems"
    CREATE_MENU_ITEM = "menu/createMenuItem"
    UPDATE_MENU_ITEM = "menu/updateMenuItem"
    DELETE_MENU_ITEM = "menu/deleteMenuItem"
    CLEAR_ERROR = "menu/clearError"


@dataclass(frozen=True)
class AsyncResult:
    status: RequestStatus = RequestStatus.IDLE
    data: Any = None
    error: str | None = None


@dataclass(frozen=True)
class Action:
    operation: Operation
    phase: Phase = Phase.FULFILLED
    payload: Any = None
    meta: Mapping[str, Any] = field(default_factory=dict)
    error: str | None = None


def pending(operation: Operation, **meta: Any) -> Action:
    return Action(operation=operation, phase=Phase.PENDING, meta=meta)


def fulfilled(operation: Operation, payload: Any, **meta: Any) -> Action:
    return Action(operation=operation, phase=Phase.FULFILLED, payload=payload, meta=meta)


def rejected(operation: Operation, error: str | None, **meta: Any) -> Action:
    return Action(operation=operation, phase=Phase.REJECTED, meta=meta, error=error)


def clear_error() -> Action:
    return Action(operation=Operation.CLEAR_ERROR)


_EMPTY: Mapping[Any, Any] = MappingProxyType({})


@dataclass(frozen=True)
class MenuState:
    menus: tuple[MenuResponse, ...] = ()
    by_id: Mapping[int, MenuResponse] = field(default_factory=lambda: _EMPTY)
    items_by_menu_id: Mapping[int, tuple[MenuItemResponse, ...]] = field(default_factory=lambda: _EMPTY)
    request: AsyncResult = AsyncResult()

    @property
    def loading(self) -> bool:
        return self.request.status == RequestStatus.LOADING

    @property
    def error(self) -> str | None:
        return self.request.error


def _frozen(mapping: dict[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(mapping)


def _upsert(sequence: tuple[Any, ...], entry: Any) -> tuple[Any, ...]:
    for index, existing in enumerate(sequence):
        if existing.id == entry.id:
            return sequence[:index] + (entry,) + sequence[index + 1 :]
    return sequence + (entry,)


def _with_menu(state: MenuState, menu: MenuResponse, *, append: bool = True) -> MenuState:
    by_id = dict(state.by_id)
    by_id[menu.id] = menu
    menus = state.menus
    if append or any(existing.id == menu.id for existing in menus):
        menus = _upsert(menus, menu)
    return replace(state, menus=menus, by_id=_frozen(by_id))


def _with_items(state: MenuState, menu_id: int, items: tuple[MenuItemResponse, ...]) -> MenuState:
    items_by_menu_id = dict(state.items_by_menu_id)
    items_by_menu_id[menu_id] = items
    return replace(state, items_by_menu_id=_frozen(items_by_menu_id))


def _apply_fulfilled(state: MenuState, action: Action) -> MenuState:
    operation = action.operation
    payload = action.payload

    if operation == Operation.FETCH_MENUS:
        menus = tuple(payload)
        by_id = dict(state.by_id)
        for menu in menus:
            by_id[menu.id] = menu
        return replace(state, menus=menus, by_id=_frozen(by_id))

    if operation == Operation.GET_MENU:
        state = _with_menu(state, payload)
        if payload.items is not None:
            state = _with_items(state, payload.id, tuple(payload.items))
        return state

    if operation == Operation.CREATE_MENU:
        return _with_menu(state, payload)

    if operation == Operation.UPDATE_MENU:
        return _with_menu(state, payload, append=False)

    if operation == Operation.DELETE_MENU:
        menu_id = payload
        by_id = {key: value for key, value in state.by_id.items() if key != menu_id}
        items_by_menu_id = {
            key: value for key, value in state.items_by_menu_id.items() if key != menu_id
        }
        return replace(
            state,
            menus=tuple(menu for menu in state.menus if menu.id != menu_id),
            by_id=_frozen(by_id),
            items_by_menu_id=_frozen(items_by_menu_id),
        )

    if operation == Operation.FETCH_MENU_ITEMS:
        return _with_items(state, action.meta["menu_id"], tuple(payload))

    if operation == Operation.CREATE_MENU_ITEM:
        current = state.items_by_menu_id.get(payload.menuId, ())
        return _with_items(state, payload.menuId, current + (payload,))

    if operation == Operation.UPDATE_MENU_ITEM:
        current = state.items_by_menu_id.get(payload.menuId, ())
        updated = tuple(payload if item.id == payload.id else item for item in current)
        return _with_items(state, payload.menuId, updated)

    if operation == Operation.DELETE_MENU_ITEM:
        menu_id = payload["menu_id"]
        current = state.items_by_menu_id.get(menu_id, ())
        remaining = tuple(item for item in current if item.id != payload["item_id"])
        return _with_items(state, menu_id, remaining)

    return state


def reduce(state: MenuState, action: Action) -> MenuState:
    if action.operation == Operation.CLEAR_ERROR:
        return replace(state, request=replace(state.request, error=None))

    if action.phase == Phase.PENDING:
        return replace(state, request=AsyncResult(status=RequestStatus.LOADING))

    if action.phase == Phase.REJECTED:
        message = action.error or DEFAULT_ERROR_MESSAGE
        return replace(state, request=AsyncResult(status=RequestStatus.ERROR, error=message))

    state = _apply_fulfilled(state, action)
    return replace(state, request=AsyncResult(status=RequestStatus.OK, data=action.payload))


# Selectors


def select_menus(state: MenuState) -> tuple[MenuResponse, ...]:
    return state.menus


def select_menu_by_id(state: MenuState, menu_id: int) -> MenuResponse | None:
    return state.by_id.get(menu_id)


def select_items_by_menu_id(state: MenuState, menu_id: int) -> tuple[MenuItemResponse, ...]:
    return state.items_by_menu_id.get(menu_id, ())


def select_menu_loading(state: MenuState) -> bool:
    return state.loading


def select_menu_error(state: MenuState) -> str | None:
    return state.error
