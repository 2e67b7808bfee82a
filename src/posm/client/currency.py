from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from posm.domain.common.fields import COST_CENTS_MAX


def cents_to_dollars(cents: int | None) -> str:
    """Format cents as an editable dollar string, e.g. 1050 -> "10.50"."""
    if cents is None:
        return ""
    return f"{Decimal(cents) / 100:.2f}"


def format_price(cents: int) -> str:
    return f"${cents_to_dollars(cents)}"


def dollars_to_cents(text: str) -> int | None:
    """Parse a dollar amount into integer cents; None when the input is not a usable price."""
    try:
        dollars = Decimal(text.strip())
        if not dollars.is_finite():
            return None
        cents = int((dollars * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return None
    if not 0 < cents <= COST_CENTS_MAX:
        return None
    return cents
