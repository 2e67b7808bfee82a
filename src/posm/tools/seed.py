from __future__ import annotations

from posm.domain.common.ids import RecipeId
from posm.domain.common.pagination import Page
from posm.infrastructure.db.repositories.ingredient_repo import SqlAlchemyIngredientRepository
from posm.infrastructure.db.repositories.menu_item_repo import SqlAlchemyMenuItemRepository
from posm.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from posm.infrastructure.db.repositories.method_step_repo import SqlAlchemyMethodStepRepository
from posm.infrastructure.db.repositories.recipe_repo import SqlAlchemyRecipeRepository
from posm.infrastructure.db.session import create_schema, get_engine

BURGER_INGREDIENTS = [
    ("Beef patty", 180.0, "g"),
    ("Brioche bun", 1.0, "pc"),
    ("Cheddar", 2.0, "slice"),
]

BURGER_STEPS = [
    "Season the patty and grill for 4 minutes per side.",
    "Melt the cheddar over the patty during the last minute.",
    "Toast the bun and assemble.",
]


def seed() -> bool:
    engine = get_engine()
    create_schema(engine)

    menus = SqlAlchemyMenuRepository(engine)
    if menus.list_all(Page.clamp(limit=1)):
        return False

    recipes = SqlAlchemyRecipeRepository(engine)
    ingredients = SqlAlchemyIngredientRepository(engine)
    steps = SqlAlchemyMethodStepRepository(engine)
    items = SqlAlchemyMenuItemRepository(engine)

    burger = recipes.create(name="House Burger")
    recipe_id = RecipeId(burger.recipe_id)
    for name, amount, unit in BURGER_INGREDIENTS:
        ingredients.create(recipe_id=recipe_id, name=name, amount=amount, unit=unit)
    for order, instruction in enumerate(BURGER_STEPS, start=1):
        steps.create(recipe_id=recipe_id, order=order, instruction=instruction)

    lunch = menus.create(name="Lunch", description="Served 11:00-15:00")
    items.create(
        menu_id=lunch.menu_id,
        name="House Burger",
        description="Cheddar, brioche, fries",
        cost_cents=1450,
        recipe_id=recipe_id,
    )
    items.create(
        menu_id=lunch.menu_id,
        name="Caesar Salad",
        description="Romaine, croutons, parmesan",
        cost_cents=990,
        recipe_id=None,
    )
    return True


def main() -> None:
    if seed():
        print("seed complete")
    else:
        print("database already has menus; nothing seeded")


if __name__ == "__main__":
    main()
