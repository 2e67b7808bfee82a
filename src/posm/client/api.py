"""HTTP client for the POSM REST API.

Every call is a single synchronous round trip; failures raise ``ApiError`` carrying the
message the server sent so callers can show it verbatim.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

import httpx

from posm.application.dto.responses import (
    IngredientResponse,
    MenuItemResponse,
    MenuResponse,
    MethodStepResponse,
    RecipeResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "http://127.0.0.1:8080"


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def api_base_from_env() -> str:
    return os.getenv("POSM_API_BASE", DEFAULT_API_BASE)


def _error_message(response: httpx.Response) -> str:
    text = response.text
    if not text:
        return f"Request failed: {response.status_code}"
    try:
        payload = json.loads(text)
    except ValueError:
        return text
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return text


def _query(**params: Any) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


class MenuApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._client = httpx.Client(
            base_url=(base_url or api_base_from_env()).rstrip("/"),
            headers={"Content-Type": "application/json"},
            transport=transport,
            timeout=timeout_seconds,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> MenuApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = self._client.request(method, path, params=params, json=body)
        except httpx.RequestError as exc:
            logger.warning("api_request_failed", extra={"method": method, "path": path})
            raise ApiError(str(exc) or "Request failed") from exc

        if response.is_error:
            raise ApiError(_error_message(response), status_code=response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Menus

    def list_menus(self, limit: int | None = None, offset: int | None = None) -> list[MenuResponse]:
        payload = self._request("GET", "/api/menus", params=_query(limit=limit, offset=offset))
        return [MenuResponse.model_validate(item) for item in payload]

    def get_menu(self, menu_id: int, include: str | None = None) -> MenuResponse:
        payload = self._request("GET", f"/api/menus/{menu_id}", params=_query(include=include))
        return MenuResponse.model_validate(payload)

    def create_menu(self, body: dict[str, Any]) -> MenuResponse:
        return MenuResponse.model_validate(self._request("POST", "/api/menus", body=body))

    def update_menu(self, menu_id: int, body: dict[str, Any]) -> MenuResponse:
        payload = self._request("PUT", f"/api/menus/{menu_id}", body=body)
        return MenuResponse.model_validate(payload)

    def delete_menu(self, menu_id: int) -> None:
        self._request("DELETE", f"/api/menus/{menu_id}")

    # Menu items

    def list_menu_items(
        self,
        menu_id: int,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[MenuItemResponse]:
        payload = self._request(
            "GET",
            f"/api/menus/{menu_id}/items",
            params=_query(limit=limit, offset=offset),
        )
        return [MenuItemResponse.model_validate(item) for item in payload]

    def create_menu_item(self, menu_id: int, body: dict[str, Any]) -> MenuItemResponse:
        payload = self._request("POST", f"/api/menus/{menu_id}/items", body=body)
        return MenuItemResponse.model_validate(payload)

    def update_menu_item(
        self, menu_id: int, item_id: int, body: dict[str, Any]
    ) -> MenuItemResponse:
        payload = self._request("PUT", f"/api/menus/{menu_id}/items/{item_id}", body=body)
        return MenuItemResponse.model_validate(payload)

    def delete_menu_item(self, menu_id: int, item_id: int) -> None:
        self._request("DELETE", f"/api/menus/{menu_id}/items/{item_id}")

    # Recipes

    def list_recipes(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[RecipeResponse]:
        payload = self._request("GET", "/api/recipes", params=_query(limit=limit, offset=offset))
        return [RecipeResponse.model_validate(item) for item in payload]

    def get_recipe(self, recipe_id: int, include: str | None = None) -> RecipeResponse:
        payload = self._request(
            "GET", f"/api/recipes/{recipe_id}", params=_query(include=include)
        )
        return RecipeResponse.model_validate(payload)

    def create_recipe(self, body: dict[str, Any]) -> RecipeResponse:
        return RecipeResponse.model_validate(self._request("POST", "/api/recipes", body=body))

    def create_ingredient(self, body: dict[str, Any]) -> IngredientResponse:
        payload = self._request("POST", "/api/ingredients", body=body)
        return IngredientResponse.model_validate(payload)

    def create_step(self, body: dict[str, Any]) -> MethodStepResponse:
        return MethodStepResponse.model_validate(self._request("POST", "/api/steps", body=body))

    def update_step(self, step_id: int, body: dict[str, Any]) -> MethodStepResponse:
        payload = self._request("PUT", f"/api/steps/{step_id}", body=body)
        return MethodStepResponse.model_validate(payload)
