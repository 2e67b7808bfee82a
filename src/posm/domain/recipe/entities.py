from __future__ import annotations

import math
from dataclasses import dataclass

from posm.domain.common.fields import (
    INSTRUCTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    STEP_ORDER_MAX,
    UNIT_MAX_LENGTH,
    check_text,
)
from posm.domain.common.ids import IngredientId, MethodStepId, RecipeId


@dataclass(frozen=True)
class Recipe:
    recipe_id: RecipeId
    name: str

    def __post_init__(self) -> None:
        check_text(self.name, "name", NAME_MAX_LENGTH)


@dataclass(frozen=True)
class Ingredient:
    ingredient_id: IngredientId
    recipe_id: RecipeId
    name: str
    amount: float
    unit: str

    def __post_init__(self) -> None:
        check_text(self.name, "name", NAME_MAX_LENGTH)
        check_text(self.unit, "unit", UNIT_MAX_LENGTH, allow_blank=True)
        if not math.isfinite(self.amount) or self.amount <= 0:
            raise ValueError("amount must be a positive number")


@dataclass(frozen=True)
class MethodStep:
    step_id: MethodStepId
    recipe_id: RecipeId
    order: int
    instruction: str

    def __post_init__(self) -> None:
        if not 1 <= self.order <= STEP_ORDER_MAX:
            raise ValueError(f"order must be between 1 and {STEP_ORDER_MAX}")
        check_text(self.instruction, "instruction", INSTRUCTION_MAX_LENGTH)


def sort_steps(steps: list[MethodStep]) -> list[MethodStep]:
    return sorted(steps, key=lambda step: (step.order, step.step_id))
