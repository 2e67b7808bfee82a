from __future__ import annotations

from fastapi import APIRouter, Response, status

from posm.infrastructure.db.session import ping_database

router = APIRouter()


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(response: Response) -> dict[str, object]:
    database_ready = ping_database()

    if database_ready:
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "unavailable",
        "checks": {"database": database_ready},
    }
