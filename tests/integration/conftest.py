from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from posm.api.main import app
from posm.config import get_settings
from posm.infrastructure.db import session as db_session


@pytest.fixture
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    url = f"sqlite:///{tmp_path / 'posm.sqlite'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.setenv("APP_ENV", "test")
    get_settings.cache_clear()
    db_session._build_engine.cache_clear()

    yield url

    db_session.get_engine().dispose()
    get_settings.cache_clear()
    db_session._build_engine.cache_clear()


@pytest.fixture
def client(database_url: str) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def lunch_menu(client: TestClient) -> dict:
    response = client.post("/api/menus", json={"name": "Lunch", "description": "Weekdays"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def burger_recipe(client: TestClient) -> dict:
    response = client.post("/api/recipes", json={"name": "House Burger"})
    assert response.status_code == 201
    return response.json()
