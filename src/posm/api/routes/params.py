from __future__ import annotations

from typing import Annotated

from fastapi import Path, Query

from posm.domain.common.fields import ROW_ID_MAX

# ids outside the column range can never match a row
RowId = Annotated[int, Path(gt=0, le=ROW_ID_MAX)]
RecipeFilter = Annotated[int | None, Query(alias="recipeId", gt=0, le=ROW_ID_MAX)]
