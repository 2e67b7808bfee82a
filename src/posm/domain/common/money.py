from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    amount_cents: int

    def __post_init__(self) -> None:
        if isinstance(self.amount_cents, bool) or not isinstance(self.amount_cents, int):
            raise ValueError("amount_cents must be an integer")
        if self.amount_cents <= 0:
            raise ValueError("amount_cents must be > 0")

    @property
    def dollars(self) -> float:
        return cents_to_dollars(self.amount_cents)


def cents_to_dollars(cents: int) -> float:
    """Dollar value of an integer cent amount, rounded half-up to two places."""
    return float((Decimal(cents) / 100).quantize(_CENT, rounding=ROUND_HALF_UP))
