from __future__ import annotations

from typing import NewType

MenuId = NewType("MenuId", int)
MenuItemId = NewType("MenuItemId", int)
RecipeId = NewType("RecipeId", int)
IngredientId = NewType("IngredientId", int)
MethodStepId = NewType("MethodStepId", int)
