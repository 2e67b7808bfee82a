from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from posm.domain.common.ids import (
    IngredientId,
    MenuId,
    MenuItemId,
    MethodStepId,
    RecipeId,
)
from posm.domain.common.pagination import Page
from posm.domain.menu.entities import Menu, MenuItem
from posm.domain.recipe.entities import Ingredient, MethodStep, Recipe


class MenuRepository(Protocol):
    def list_all(self, page: Page) -> list[Menu]: ...

    def get(self, menu_id: MenuId) -> Menu | None: ...

    def exists(self, menu_id: MenuId) -> bool: ...

    def create(self, name: str, description: str | None) -> Menu: ...

    def update(self, menu_id: MenuId, changes: Mapping[str, Any]) -> Menu | None: ...

    def delete(self, menu_id: MenuId) -> bool: ...


class MenuItemRepository(Protocol):
    def list_for_menu(self, menu_id: MenuId, page: Page | None = None) -> list[MenuItem]: ...

    def get(self, item_id: MenuItemId) -> MenuItem | None: ...

    def create(
        self,
        menu_id: MenuId,
        name: str,
        description: str | None,
        cost_cents: int,
        recipe_id: RecipeId | None,
    ) -> MenuItem: ...

    def update(self, item_id: MenuItemId, changes: Mapping[str, Any]) -> MenuItem | None: ...

    def delete(self, item_id: MenuItemId) -> bool: ...


class RecipeRepository(Protocol):
    def list_all(self, page: Page) -> list[Recipe]: ...

    def get(self, recipe_id: RecipeId) -> Recipe | None: ...

    def exists(self, recipe_id: RecipeId) -> bool: ...

    def create(self, name: str) -> Recipe: ...

    def update(self, recipe_id: RecipeId, changes: Mapping[str, Any]) -> Recipe | None: ...

    def delete(self, recipe_id: RecipeId) -> bool: ...


class IngredientRepository(Protocol):
    def list_all(
        self, page: Page | None = None, recipe_id: RecipeId | None = None
    ) -> list[Ingredient]: ...

    def get(self, ingredient_id: IngredientId) -> Ingredient | None: ...

    def create(self, recipe_id: RecipeId, name: str, amount: float, unit: str) -> Ingredient: ...

    def update(
        self, ingredient_id: IngredientId, changes: Mapping[str, Any]
    ) -> Ingredient | None: ...

    def delete(self, ingredient_id: IngredientId) -> bool: ...


class MethodStepRepository(Protocol):
    def list_all(
        self, page: Page | None = None, recipe_id: RecipeId | None = None
    ) -> list[MethodStep]: ...

    def get(self, step_id: MethodStepId) -> MethodStep | None: ...

    def create(self, recipe_id: RecipeId, order: int, instruction: str) -> MethodStep: ...

    def update(self, step_id: MethodStepId, changes: Mapping[str, Any]) -> MethodStep | None: ...

    def delete(self, step_id: MethodStepId) -> bool: ...


class MissingParentError(Exception):
    """A referenced menu or recipe row does not exist."""

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} not found for {entity}_id={entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class StepOrderConflictError(Exception):
    def __init__(self, recipe_id: RecipeId, order: int) -> None:
        super().__init__(f"step order {order} already exists for recipe_id={recipe_id}")
        self.details = {"recipeId": int(recipe_id), "order": order}
