from __future__ import annotations

import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fake_backend import FakeMenuBackend

from posm.client.api import ApiError, MenuApiClient, api_base_from_env


def _client(handler) -> MenuApiClient:
    return MenuApiClient(base_url="http://posm.test", transport=httpx.MockTransport(handler))


def test_api_base_defaults_and_env_override(monkeypatch) -> None:
    monkeypatch.delenv("POSM_API_BASE", raising=False)
    assert api_base_from_env() == "http://127.0.0.1:8080"

    monkeypatch.setenv("POSM_API_BASE", "http://pos.example:9000")
    assert api_base_from_env() == "http://pos.example:9000"


def test_list_and_create_menus_round_trip_json() -> None:
    backend = FakeMenuBackend()
    backend.add_menu("Lunch")

    with MenuApiClient(base_url="http://posm.test", transport=backend.transport()) as api:
        created = api.create_menu({"name": "Dinner", "description": "Evenings"})
        menus = api.list_menus(limit=10)

    assert created.name == "Dinner"
    assert [menu.name for menu in menus] == ["Lunch", "Dinner"]
    post = backend.requests[0]
    assert post.headers["content-type"] == "application/json"
    assert json.loads(post.content) == {"name": "Dinner", "description": "Evenings"}
    assert backend.requests[1].url.params["limit"] == "10"
    assert "offset" not in backend.requests[1].url.params


def test_delete_returns_none_on_no_content() -> None:
    backend = FakeMenuBackend()
    menu_id = backend.add_menu("Lunch")

    with MenuApiClient(base_url="http://posm.test", transport=backend.transport()) as api:
        assert api.delete_menu(menu_id) is None

    assert backend.menus == {}


def test_error_message_comes_from_envelope() -> None:
    backend = FakeMenuBackend()

    with MenuApiClient(base_url="http://posm.test", transport=backend.transport()) as api:
        with pytest.raises(ApiError) as exc_info:
            api.get_menu(99)

    assert str(exc_info.value) == "menu not found for menu_id=99"
    assert exc_info.value.status_code == 404


def test_error_message_falls_back_to_raw_text_then_status() -> None:
    with _client(lambda request: httpx.Response(502, text="upstream down")) as api:
        with pytest.raises(ApiError, match="upstream down"):
            api.list_menus()

    with _client(lambda request: httpx.Response(500)) as api:
        with pytest.raises(ApiError, match=r"Request failed: 500"):
            api.list_menus()


def test_transport_failure_becomes_api_error() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(refuse) as api:
        with pytest.raises(ApiError, match="connection refused") as exc_info:
            api.list_menus()

    assert exc_info.value.status_code is None
