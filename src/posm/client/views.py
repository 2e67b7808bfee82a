"""Text-rendered pages over the menu store.

Pages hold only local form state; everything else is read from the store through
selectors on every render.
"""

from __future__ import annotations

from dataclasses import dataclass

from posm.client.currency import cents_to_dollars, dollars_to_cents, format_price
from posm.client.state import (
    select_items_by_menu_id,
    select_menu_by_id,
    select_menu_error,
    select_menu_loading,
    select_menus,
)
from posm.client.store import MenuStore, succeeded

DELETE_MENU_CONFIRMATION = "Delete this menu? This will also delete all its items."
INVALID_PRICE_MESSAGE = "Enter a valid price in dollars, e.g. 9.99"


def _status_lines(store: MenuStore) -> list[str]:
    lines = []
    if select_menu_loading(store.state):
        lines.append("Loading...")
    error = select_menu_error(store.state)
    if error:
        lines.append(f"Error: {error}")
    return lines


@dataclass
class ItemForm:
    name: str = ""
    description: str = ""
    price: str = ""

    def body(self) -> dict[str, object] | None:
        cents = dollars_to_cents(self.price)
        if cents is None:
            return None
        return {
            "name": self.name.strip(),
            "description": self.description or None,
            "costCents": cents,
        }


class LandingPage:
    def render(self) -> str:
        return "\n".join(
            [
                "POSM - Point of Sale Management",
                "  menus list            browse menus",
                "  menus create NAME     add a menu",
            ]
        )


class MenuListPage:
    def __init__(self, store: MenuStore) -> None:
        self._store = store

    def load(self) -> None:
        self._store.fetch_menus()

    def delete(self, menu_id: int, confirmed: bool) -> bool:
        if not confirmed:
            return False
        return succeeded(self._store.delete_menu(menu_id))

    def render(self) -> str:
        lines = ["Menus", *_status_lines(self._store)]
        menus = select_menus(self._store.state)
        if not menus and not select_menu_loading(self._store.state):
            lines.append("No menus yet.")
        for menu in menus:
            line = f"  [{menu.id}] {menu.name}"
            if menu.description:
                line += f" - {menu.description}"
            lines.append(line)
        return "\n".join(lines)


class MenuDetailPage:
    def __init__(self, store: MenuStore, menu_id: int) -> None:
        self._store = store
        self._menu_id = menu_id

    def load(self) -> None:
        if self._menu_id > 0:
            self._store.get_menu(self._menu_id, include="all")

    def render(self) -> str:
        if self._menu_id <= 0:
            return "Invalid menu id."
        menu = select_menu_by_id(self._store.state, self._menu_id)
        lines = _status_lines(self._store)
        if menu is None:
            return "\n".join(lines or ["Menu not found."])

        lines.insert(0, menu.name)
        if menu.description:
            lines.append(menu.description)
        items = select_items_by_menu_id(self._store.state, self._menu_id)
        if not items:
            lines.append("No items on this menu.")
        for item in items:
            line = f"  [{item.id}] {item.name}  {format_price(item.costCents)}"
            if item.description:
                line += f"  ({item.description})"
            lines.append(line)
        return "\n".join(lines)


class MenuEditPage:
    """Add, edit and remove items of one menu. Prices are typed in dollars."""

    def __init__(self, store: MenuStore, menu_id: int) -> None:
        self._store = store
        self._menu_id = menu_id
        self.editing_id: int | None = None
        self.form = ItemForm()
        self.new_item = ItemForm()
        self.form_error: str | None = None

    def load(self) -> None:
        if self._menu_id <= 0:
            return
        menu = select_menu_by_id(self._store.state, self._menu_id)
        if menu is None or menu.items is None:
            self._store.get_menu(self._menu_id, include="all")

    def start_edit(self, item_id: int) -> bool:
        items = select_items_by_menu_id(self._store.state, self._menu_id)
        item = next((entry for entry in items if entry.id == item_id), None)
        if item is None:
            return False
        self.editing_id = item_id
        self.form = ItemForm(
            name=item.name,
            description=item.description or "",
            price=cents_to_dollars(item.costCents),
        )
        return True

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.form = ItemForm()

    def submit_edit(self) -> bool:
        if self.editing_id is None:
            return False
        body = self.form.body()
        if body is None:
            self.form_error = INVALID_PRICE_MESSAGE
            return False
        self.form_error = None
        action = self._store.update_menu_item(self._menu_id, self.editing_id, body)
        self.cancel_edit()
        return succeeded(action)

    def add_item(self) -> bool:
        body = self.new_item.body()
        if body is None:
            self.form_error = INVALID_PRICE_MESSAGE
            return False
        if not body["name"]:
            self.form_error = "Name is required"
            return False
        self.form_error = None
        if body["description"] is None:
            del body["description"]
        action = self._store.create_menu_item(self._menu_id, body)
        self.new_item = ItemForm()
        if select_menu_by_id(self._store.state, self._menu_id) is None:
            self._store.get_menu(self._menu_id, include="all")
        return succeeded(action)

    def remove_item(self, item_id: int) -> bool:
        return succeeded(self._store.delete_menu_item(self._menu_id, item_id))

    def render(self) -> str:
        if self._menu_id <= 0:
            return "Invalid menu id."
        menu = select_menu_by_id(self._store.state, self._menu_id)
        title = "Edit Menu Items"
        if menu is not None:
            title += f" - {menu.name}"
        lines = [title, *_status_lines(self._store)]
        if self.form_error:
            lines.append(f"Form error: {self.form_error}")
        for item in select_items_by_menu_id(self._store.state, self._menu_id):
            marker = "*" if item.id == self.editing_id else " "
            lines.append(f" {marker}[{item.id}] {item.name}  ${cents_to_dollars(item.costCents)}")
        return "\n".join(lines)


class NewMenuPage:
    def __init__(self, store: MenuStore) -> None:
        self._store = store
        self.name = ""
        self.description = ""
        self.form_error: str | None = None
        self.created_id: int | None = None

    def submit(self) -> bool:
        name = self.name.strip()
        if not name:
            self.form_error = "Name is required"
            return False
        self.form_error = None
        body: dict[str, object] = {"name": name}
        if self.description.strip():
            body["description"] = self.description.strip()
        action = self._store.create_menu(body)
        if not succeeded(action):
            return False
        self.created_id = action.payload.id
        return True

    def render(self) -> str:
        lines = ["New Menu", *_status_lines(self._store)]
        if self.form_error:
            lines.append(f"Form error: {self.form_error}")
        if self.created_id is not None:
            lines.append(f"Created menu {self.created_id}.")
        return "\n".join(lines)
