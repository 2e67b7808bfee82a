from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LIMIT = 25
MAX_LIMIT = 100
# largest OFFSET a 64-bit SQL integer can hold
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class Page:
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    @classmethod
    def clamp(cls, limit: int | None = None, offset: int | None = None) -> Page:
        """Out-of-range values are pulled into range, never rejected."""
        effective_limit = DEFAULT_LIMIT if limit is None else limit
        effective_offset = 0 if offset is None else offset
        return cls(
            limit=min(max(effective_limit, 1), MAX_LIMIT),
            offset=min(max(effective_offset, 0), MAX_OFFSET),
        )
