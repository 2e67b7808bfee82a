from __future__ import annotations

import logging
from collections.abc import Callable
from functools import lru_cache
from typing import Any

from posm.client.api import ApiError, MenuApiClient
from posm.client.state import (
    Action,
    MenuState,
    Operation,
    Phase,
    fulfilled,
    pending,
    reduce,
    rejected,
)

logger = logging.getLogger(__name__)

Listener = Callable[[MenuState], None]


class MenuStore:
    def __init__(self, api: MenuApiClient, state: MenuState | None = None) -> None:
        self._api = api
        self._state = state or MenuState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> MenuState:
        return self._state

    def dispatch(self, action: Action) -> Action:
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _run(self, operation: Operation, call: Callable[[], Any], **meta: Any) -> Action:
        self.dispatch(pending(operation, **meta))
        try:
            payload = call()
        except ApiError as exc:
            logger.info(
                "client_request_rejected",
                extra={"path": operation.value, "status_code": exc.status_code},
            )
            return self.dispatch(rejected(operation, str(exc), **meta))
        return self.dispatch(fulfilled(operation, payload, **meta))

    def fetch_menus(self) -> Action:
        return self._run(Operation.FETCH_MENUS, self._api.list_menus)

    def get_menu(self, menu_id: int, include: str | None = None) -> Action:
        return self._run(
            Operation.GET_MENU,
            lambda: self._api.get_menu(menu_id, include),
            menu_id=menu_id,
        )

    def create_menu(self, body: dict[str, Any]) -> Action:
        return self._run(Operation.CREATE_MENU, lambda: self._api.create_menu(body))

    def update_menu(self, menu_id: int, body: dict[str, Any]) -> Action:
        return self._run(
            Operation.UPDATE_MENU,
            lambda: self._api.update_menu(menu_id, body),
            menu_id=menu_id,
        )

    def delete_menu(self, menu_id: int) -> Action:
        def call() -> int:
            self._api.delete_menu(menu_id)
            return menu_id

        return self._run(Operation.DELETE_MENU, call, menu_id=menu_id)

    def fetch_menu_items(
        self,
        menu_id: int,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Action:
        return self._run(
            Operation.FETCH_MENU_ITEMS,
            lambda: self._api.list_menu_items(menu_id, limit=limit, offset=offset),
            menu_id=menu_id,
        )

    def create_menu_item(self, menu_id: int, body: dict[str, Any]) -> Action:
        return self._run(
            Operation.CREATE_MENU_ITEM,
            lambda: self._api.create_menu_item(menu_id, {"menuId": menu_id, **body}),
            menu_id=menu_id,
        )

    def update_menu_item(self, menu_id: int, item_id: int, body: dict[str, Any]) -> Action:
        return self._run(
            Operation.UPDATE_MENU_ITEM,
            lambda: self._api.update_menu_item(menu_id, item_id, body),
            menu_id=menu_id,
        )

    def delete_menu_item(self, menu_id: int, item_id: int) -> Action:
        def call() -> dict[str, int]:
            self._api.delete_menu_item(menu_id, item_id)
            return {"menu_id": menu_id, "item_id": item_id}

        return self._run(Operation.DELETE_MENU_ITEM, call, menu_id=menu_id)


def succeeded(action: Action) -> bool:
    return action.phase == Phase.FULFILLED


@lru_cache(maxsize=1)
def default_store() -> MenuStore:
    """Process-wide store bound to ``POSM_API_BASE``."""
    return MenuStore(MenuApiClient())
