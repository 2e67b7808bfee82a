from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from posm.domain.common.ids import MenuId, MenuItemId, RecipeId
from posm.domain.common.money import Money, cents_to_dollars
from posm.domain.common.pagination import MAX_LIMIT, MAX_OFFSET, Page
from posm.domain.menu.entities import Menu, MenuItem


def test_money_invariants() -> None:
    with pytest.raises(ValueError):
        Money(amount_cents=0)
    with pytest.raises(ValueError):
        Money(amount_cents=-1)
    with pytest.raises(ValueError):
        Money(amount_cents=True)
    with pytest.raises(ValueError):
        Money(amount_cents=9.99)  # type: ignore[arg-type]


def test_cost_is_derived_from_cents() -> None:
    assert Money(amount_cents=999).dollars == 9.99
    assert Money(amount_cents=1050).dollars == 10.5
    assert cents_to_dollars(1) == 0.01


def test_menu_item_name_must_be_non_empty() -> None:
    with pytest.raises(ValueError):
        MenuItem(
            item_id=MenuItemId(1),
            menu_id=MenuId(1),
            name="   ",
            description=None,
            cost=Money(amount_cents=100),
        )


def test_menu_item_exposes_cost_cents_and_optional_recipe() -> None:
    item = MenuItem(
        item_id=MenuItemId(3),
        menu_id=MenuId(1),
        name="Burger",
        description="",
        cost=Money(amount_cents=1250),
        recipe_id=RecipeId(7),
    )

    assert item.cost_cents == 1250
    assert item.recipe_id == 7


def test_menu_name_length_is_bounded() -> None:
    Menu(menu_id=MenuId(1), name="x" * 200)
    with pytest.raises(ValueError):
        Menu(menu_id=MenuId(1), name="x" * 201)


@pytest.mark.parametrize(
    ("limit", "offset", "expected"),
    [
        (None, None, Page(limit=25, offset=0)),
        (500, 0, Page(limit=MAX_LIMIT, offset=0)),
        (0, 0, Page(limit=1, offset=0)),
        (-3, -5, Page(limit=1, offset=0)),
        (10, 20, Page(limit=10, offset=20)),
        (10, 10**20, Page(limit=10, offset=MAX_OFFSET)),
    ],
)
def test_page_clamps_out_of_range_values(limit, offset, expected) -> None:
    assert Page.clamp(limit, offset) == expected
