from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from posm.application.dto.requests import (
    CreateMethodStepRequest,
    UpdateMethodStepRequest,
)
from posm.application.ports.repositories import MissingParentError, StepOrderConflictError
from posm.application.use_cases.method_steps import (
    CreateMethodStep,
    DeleteMethodStep,
    ListMethodSteps,
    MethodStepNotFoundError,
    UpdateMethodStep,
)
from posm.application.use_cases.recipes import GetRecipe, RecipeNotFoundError
from posm.domain.common.ids import IngredientId, MethodStepId, RecipeId
from posm.domain.common.pagination import Page
from posm.domain.recipe.entities import Ingredient, MethodStep, Recipe


class FakeRecipeRepository:
    def __init__(self, recipes: list[Recipe]) -> None:
        self._recipes = {recipe.recipe_id: recipe for recipe in recipes}

    def get(self, recipe_id: RecipeId) -> Recipe | None:
        return self._recipes.get(recipe_id)

    def exists(self, recipe_id: RecipeId) -> bool:
        return recipe_id in self._recipes


class FakeIngredientRepository:
    def __init__(self, ingredients: list[Ingredient]) -> None:
        self._ingredients = ingredients

    def list_all(
        self, page: Page | None = None, recipe_id: RecipeId | None = None
    ) -> list[Ingredient]:
        return [item for item in self._ingredients if item.recipe_id == recipe_id]


class FakeMethodStepRepository:
    """Keeps (recipe_id, order) unique the same way the database constraint does."""

    def __init__(self, recipes: set[int], steps: list[MethodStep] | None = None) -> None:
        self._recipes = recipes
        self._steps = {step.step_id: step for step in steps or []}

    def _taken(self, recipe_id: RecipeId, order: int, exclude_id: int | None = None) -> bool:
        return any(
            step.recipe_id == recipe_id and step.order == order and step.step_id != exclude_id
            for step in self._steps.values()
        )

    def list_all(
        self, page: Page | None = None, recipe_id: RecipeId | None = None
    ) -> list[MethodStep]:
        return [
            step
            for step in self._steps.values()
            if recipe_id is None or step.recipe_id == recipe_id
        ]

    def get(self, step_id: MethodStepId) -> MethodStep | None:
        return self._steps.get(step_id)

    def create(self, recipe_id: RecipeId, order: int, instruction: str) -> MethodStep:
        if recipe_id not in self._recipes:
            raise MissingParentError("recipe", recipe_id)
        if self._taken(recipe_id, order):
            raise StepOrderConflictError(recipe_id, order)
        step = MethodStep(
            step_id=MethodStepId(len(self._steps) + 1),
            recipe_id=recipe_id,
            order=order,
            instruction=instruction,
        )
        self._steps[step.step_id] = step
        return step

    def update(self, step_id: MethodStepId, changes: dict[str, Any]) -> MethodStep | None:
        step = self._steps.get(step_id)
        if step is None:
            return None
        order = changes.get("order", step.order)
        if self._taken(step.recipe_id, order, exclude_id=step_id):
            raise StepOrderConflictError(step.recipe_id, order)
        updated = MethodStep(
            step_id=step_id,
            recipe_id=step.recipe_id,
            order=order,
            instruction=changes.get("instruction", step.instruction),
        )
        self._steps[step_id] = updated
        return updated

    def delete(self, step_id: MethodStepId) -> bool:
        return self._steps.pop(step_id, None) is not None


def _step(step_id: int, order: int, instruction: str, recipe_id: int = 1) -> MethodStep:
    return MethodStep(
        step_id=MethodStepId(step_id),
        recipe_id=RecipeId(recipe_id),
        order=order,
        instruction=instruction,
    )


def test_create_step_rejects_duplicate_order() -> None:
    repo = FakeMethodStepRepository({1}, [_step(1, 1, "Season")])

    with pytest.raises(StepOrderConflictError) as exc_info:
        CreateMethodStep(repo).execute(
            CreateMethodStepRequest(recipeId=1, order=1, instruction="Grill")
        )

    assert exc_info.value.details == {"recipeId": 1, "order": 1}
    assert len(repo.list_all()) == 1


def test_same_order_is_allowed_in_another_recipe() -> None:
    repo = FakeMethodStepRepository({1, 2}, [_step(1, 1, "Season")])

    response = CreateMethodStep(repo).execute(
        CreateMethodStepRequest(recipeId=2, order=1, instruction="Boil")
    )

    assert (response.recipeId, response.order) == (2, 1)


def test_create_step_for_unknown_recipe_raises_not_found() -> None:
    with pytest.raises(RecipeNotFoundError):
        CreateMethodStep(FakeMethodStepRepository(set())).execute(
            CreateMethodStepRequest(recipeId=9, order=1, instruction="Boil")
        )


def test_update_step_to_its_own_order_is_not_a_conflict() -> None:
    repo = FakeMethodStepRepository({1}, [_step(1, 1, "Season"), _step(2, 2, "Grill")])

    response = UpdateMethodStep(repo).execute(
        MethodStepId(2), UpdateMethodStepRequest(order=2, instruction="Grill 4 min")
    )

    assert response.order == 2
    assert response.instruction == "Grill 4 min"


def test_update_step_into_taken_order_conflicts() -> None:
    repo = FakeMethodStepRepository({1}, [_step(1, 1, "Season"), _step(2, 2, "Grill")])

    with pytest.raises(StepOrderConflictError):
        UpdateMethodStep(repo).execute(MethodStepId(2), UpdateMethodStepRequest(order=1))

    assert repo.get(MethodStepId(2)).order == 2


def test_missing_step_operations_raise_not_found() -> None:
    repo = FakeMethodStepRepository({1})

    with pytest.raises(MethodStepNotFoundError):
        UpdateMethodStep(repo).execute(MethodStepId(5), UpdateMethodStepRequest(order=3))
    with pytest.raises(MethodStepNotFoundError):
        DeleteMethodStep(repo).execute(MethodStepId(5))


def test_list_steps_are_sorted_by_order() -> None:
    repo = FakeMethodStepRepository({1}, [_step(1, 3, "Serve"), _step(2, 1, "Season")])

    response = ListMethodSteps(FakeRecipeRepository([]), repo).execute(Page())

    assert [step.order for step in response] == [1, 3]


def test_list_steps_for_unknown_recipe_raises() -> None:
    with pytest.raises(RecipeNotFoundError):
        ListMethodSteps(FakeRecipeRepository([]), FakeMethodStepRepository(set())).execute(
            Page(), recipe_id=RecipeId(4)
        )


def test_get_recipe_include_controls_embedded_children() -> None:
    recipes = FakeRecipeRepository([Recipe(recipe_id=RecipeId(1), name="House Burger")])
    ingredients = FakeIngredientRepository(
        [
            Ingredient(
                ingredient_id=IngredientId(1),
                recipe_id=RecipeId(1),
                name="Beef patty",
                amount=150,
                unit="g",
            )
        ]
    )
    steps = FakeMethodStepRepository({1}, [_step(1, 2, "Grill"), _step(2, 1, "Season")])
    use_case = GetRecipe(recipes, ingredients, steps)

    bare = use_case.execute(RecipeId(1))
    with_steps = use_case.execute(RecipeId(1), include="steps")
    full = use_case.execute(RecipeId(1), include="all")

    assert bare.ingredients is None and bare.steps is None
    assert with_steps.ingredients is None
    assert [step.instruction for step in with_steps.steps] == ["Season", "Grill"]
    assert [ingredient.name for ingredient in full.ingredients] == ["Beef patty"]
