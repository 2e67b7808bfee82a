from __future__ import annotations

from prometheus_client import Counter

ENTITY_MUTATIONS_TOTAL = Counter(
    "posm_entity_mutations_total",
    "Total number of persisted entity mutations.",
    ["entity", "operation"],
)

STEP_ORDER_CONFLICTS_TOTAL = Counter(
    "posm_step_order_conflicts_total",
    "Total number of method step writes rejected for a duplicate order.",
)


def record_mutation(entity: str, operation: str) -> None:
    ENTITY_MUTATIONS_TOTAL.labels(entity=entity, operation=operation).inc()


def record_step_order_conflict() -> None:
    STEP_ORDER_CONFLICTS_TOTAL.inc()
