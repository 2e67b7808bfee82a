from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

_ENV_ALIASES = {
    "dev": "development",
    "development": "development",
    "test": "development",
    "prod": "production",
    "production": "production",
}


@dataclass(frozen=True)
class Settings:
    environment: str
    database_url: str
    log_level: str
    cors_allow_origins: tuple[str, ...]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _environment() -> str:
    raw_value = os.getenv("APP_ENV", "development").strip().lower()
    try:
        return _ENV_ALIASES[raw_value]
    except KeyError as exc:
        raise RuntimeError(f"unsupported APP_ENV={raw_value!r}") from exc


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    db_path = os.getenv("APP_DB_PATH", "var/data.sqlite")
    return f"sqlite:///{db_path}"


def _cors_allow_origins(environment: str) -> tuple[str, ...]:
    # Development: unblock everything (no credentials allowed)
    if environment == "development":
        return ("*",)

    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "")
    return tuple(origin.strip() for origin in raw_value.split(",") if origin.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    environment = _environment()
    return Settings(
        environment=environment,
        database_url=_database_url(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_allow_origins=_cors_allow_origins(environment),
    )
