from __future__ import annotations

from sqlalchemy import CheckConstraint, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from posm.infrastructure.db.models.menu import Base


class RecipeModel(Base):
    __tablename__ = "recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)


class IngredientModel(Base):
    __tablename__ = "ingredients"
    __table_args__ = (CheckConstraint("amount > 0", name="ck_ingredients_amount_positive"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)


class MethodStepModel(Base):
    __tablename__ = "method_steps"
    __table_args__ = (
        UniqueConstraint("recipe_id", "order", name="uq_method_steps_recipe_order"),
        CheckConstraint('"order" BETWEEN 1 AND 10000', name="ck_method_steps_order_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    order: Mapped[int] = mapped_column("order", Integer, nullable=False)
    instruction: Mapped[str] = mapped_column(String(4000), nullable=False)
