from __future__ import annotations

from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictInt, model_validator

from posm.domain.common.fields import (
    COST_CENTS_MAX,
    DESCRIPTION_MAX_LENGTH,
    INSTRUCTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    ROW_ID_MAX,
    STEP_ORDER_MAX,
    UNIT_MAX_LENGTH,
)


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must be non-empty")
    return value


Name = Annotated[str, Field(max_length=NAME_MAX_LENGTH), AfterValidator(_not_blank)]
Description = Annotated[str, Field(max_length=DESCRIPTION_MAX_LENGTH)]
Unit = Annotated[str, Field(max_length=UNIT_MAX_LENGTH)]
Instruction = Annotated[str, Field(max_length=INSTRUCTION_MAX_LENGTH), AfterValidator(_not_blank)]
PositiveId = Annotated[StrictInt, Field(gt=0, le=ROW_ID_MAX)]
CostCents = Annotated[StrictInt, Field(gt=0, le=COST_CENTS_MAX)]
Amount = Annotated[float, Field(gt=0, allow_inf_nan=False)]
StepOrder = Annotated[StrictInt, Field(gt=0, le=STEP_ORDER_MAX)]


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class PartialUpdateModel(CamelBaseModel):
    """Body where omitted fields stay unchanged and only NULLABLE fields accept null."""

    NULLABLE: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_for_required_columns(self) -> PartialUpdateModel:
        for name in self.model_fields_set:
            if name not in self.NULLABLE and getattr(self, name) is None:
                raise ValueError(f"{_to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class CreateMenuRequest(CamelBaseModel):
    name: Name
    description: Description | None = None


class UpdateMenuRequest(PartialUpdateModel):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"description"})

    name: Name | None = None
    description: Description | None = None


class CreateMenuItemRequest(CamelBaseModel):
    menu_id: PositiveId | None = None
    name: Name
    description: Description | None = None
    cost_cents: CostCents
    recipe_id: PositiveId | None = None


class UpdateMenuItemRequest(PartialUpdateModel):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"description", "recipe_id"})

    name: Name | None = None
    description: Description | None = None
    cost_cents: CostCents | None = None
    recipe_id: PositiveId | None = None


class CreateRecipeRequest(CamelBaseModel):
    name: Name


class UpdateRecipeRequest(PartialUpdateModel):
    name: Name | None = None


class CreateIngredientRequest(CamelBaseModel):
    recipe_id: PositiveId
    name: Name
    amount: Amount
    unit: Unit


class UpdateIngredientRequest(PartialUpdateModel):
    name: Name | None = None
    amount: Amount | None = None
    unit: Unit | None = None


class CreateMethodStepRequest(CamelBaseModel):
    recipe_id: PositiveId
    order: StepOrder
    instruction: Instruction


class UpdateMethodStepRequest(PartialUpdateModel):
    order: StepOrder | None = None
    instruction: Instruction | None = None
