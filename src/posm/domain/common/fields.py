from __future__ import annotations

NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000
UNIT_MAX_LENGTH = 50
INSTRUCTION_MAX_LENGTH = 4000
STEP_ORDER_MAX = 10000

# Integer columns are 32-bit on PostgreSQL
INTEGER_COLUMN_MAX = 2_147_483_647
ROW_ID_MAX = INTEGER_COLUMN_MAX
COST_CENTS_MAX = INTEGER_COLUMN_MAX


def check_text(value: str, field: str, max_length: int, *, allow_blank: bool = False) -> None:
    if not allow_blank and not value.strip():
        raise ValueError(f"{field} must be non-empty")
    if len(value) > max_length:
        raise ValueError(f"{field} must be at most {max_length} characters")


def check_optional_text(value: str | None, field: str, max_length: int) -> None:
    if value is not None:
        check_text(value, field, max_length, allow_blank=True)
