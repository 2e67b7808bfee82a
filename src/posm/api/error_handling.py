from __future__ import annotations

from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from posm.api.middleware.request_id import get_request_id
from posm.application.ports.repositories import StepOrderConflictError
from posm.application.use_cases.ingredients import IngredientNotFoundError
from posm.application.use_cases.menu_items import InvalidRequestError, MenuItemNotFoundError
from posm.application.use_cases.menus import MenuNotFoundError
from posm.application.use_cases.method_steps import MethodStepNotFoundError
from posm.application.use_cases.recipes import RecipeNotFoundError


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": jsonable_encoder(details or {}),
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": validation_exc.errors()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (InvalidRequestError, 400, "INVALID_REQUEST"),
        (MenuNotFoundError, 404, "MENU_NOT_FOUND"),
        (MenuItemNotFoundError, 404, "MENU_ITEM_NOT_FOUND"),
        (RecipeNotFoundError, 404, "RECIPE_NOT_FOUND"),
        (IngredientNotFoundError, 404, "INGREDIENT_NOT_FOUND"),
        (MethodStepNotFoundError, 404, "METHOD_STEP_NOT_FOUND"),
        (StepOrderConflictError, 409, "STEP_ORDER_CONFLICT"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
