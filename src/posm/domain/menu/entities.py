from __future__ import annotations

from dataclasses import dataclass

from posm.domain.common.fields import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    check_optional_text,
    check_text,
)
from posm.domain.common.ids import MenuId, MenuItemId, RecipeId
from posm.domain.common.money import Money


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    menu_id: MenuId
    name: str
    description: str | None
    cost: Money
    recipe_id: RecipeId | None = None

    def __post_init__(self) -> None:
        check_text(self.name, "name", NAME_MAX_LENGTH)
        check_optional_text(self.description, "description", DESCRIPTION_MAX_LENGTH)

    @property
    def cost_cents(self) -> int:
        return self.cost.amount_cents


@dataclass(frozen=True)
class Menu:
    menu_id: MenuId
    name: str
    description: str | None = None

    def __post_init__(self) -> None:
        check_text(self.name, "name", NAME_MAX_LENGTH)
        check_optional_text(self.description, "description", DESCRIPTION_MAX_LENGTH)
