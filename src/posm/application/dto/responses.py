from __future__ import annotations

from pydantic import BaseModel


class MenuItemResponse(BaseModel):
    id: int
    menuId: int
    name: str
    description: str | None = None
    costCents: int
    cost: float
    recipeId: int | None = None


class MenuResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    items: list[MenuItemResponse] | None = None


class IngredientResponse(BaseModel):
    id: int
    recipeId: int
    name: str
    amount: float
    unit: str


class MethodStepResponse(BaseModel):
    id: int
    recipeId: int
    order: int
    instruction: str


class RecipeResponse(BaseModel):
    id: int
    name: str
    ingredients: list[IngredientResponse] | None = None
    steps: list[MethodStepResponse] | None = None
