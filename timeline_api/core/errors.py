"""
Structured error responses and global exception handlers.

Every error returned by the API follows this envelope:

    {
        "error": "snake_case_code",
        "message": "Human-readable description.",
        "detail": { ... }   // optional
    }

The clustering core raises the domain exceptions below directly; they are
plain exceptions outside of FastAPI and only become JSON at the boundary.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Canonical error envelope
# --------------------------------------------------------------------------- #

def error_response(
    code: str,
    message: str,
    status_code: int,
    detail: Any = None,
) -> JSONResponse:
    body: dict[str, Any] = {"error": code, "message": message}
    if detail is not None:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


# --------------------------------------------------------------------------- #
# Custom exception classes
# --------------------------------------------------------------------------- #

class TimelineAPIError(Exception):
    """Base exception for all domain errors raised inside services."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: Any = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class InvalidClusterParametersError(TimelineAPIError):
    def __init__(self, message: str) -> None:
        super().__init__(
            "invalid_cluster_parameters",
            message,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
        )


class MalformedPhotoError(TimelineAPIError):
    def __init__(self, message: str, photo_ids: list[int] | None = None) -> None:
        super().__init__(
            "malformed_photo",
            message,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"photo_ids": photo_ids} if photo_ids else None,
        )


class InvalidSplitTimeError(TimelineAPIError):
    def __init__(self, message: str) -> None:
        super().__init__("invalid_split_time", message, status.HTTP_422_UNPROCESSABLE_ENTITY)


class EmptyEventError(TimelineAPIError):
    def __init__(self, message: str = "Cannot build an event from zero photos.") -> None:
        super().__init__("empty_event", message, status.HTTP_422_UNPROCESSABLE_ENTITY)


class TooManyPhotosError(TimelineAPIError):
    def __init__(self, received: int, max_allowed: int) -> None:
        super().__init__(
            "too_many_photos",
            f"Request contains {received:,} photos; maximum allowed is {max_allowed:,}.",
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        )


# --------------------------------------------------------------------------- #
# FastAPI exception handlers - register via register_exception_handlers()
# --------------------------------------------------------------------------- #

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TimelineAPIError)
    async def timeline_api_error_handler(
        request: Request, exc: TimelineAPIError
    ) -> JSONResponse:
        logger.warning("TimelineAPIError [%s]: %s", exc.code, exc.message)
        return error_response(exc.code, exc.message, exc.status_code, exc.detail)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Dependencies such as require_admin_key already raise with the envelope.
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            return JSONResponse(
                status_code=exc.status_code, content=exc.detail, headers=exc.headers
            )
        return error_response("http_error", str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.debug("RequestValidationError: %s", exc.errors())
        return error_response(
            code="validation_error",
            message="Request body or query parameters failed validation.",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=_jsonable_errors(exc.errors()),
        )

    @app.exception_handler(ValidationError)
    async def pydantic_validation_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return error_response(
            code="validation_error",
            message="Internal data validation error.",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=_jsonable_errors(exc.errors()),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled exception: %s", exc)
        return error_response(
            code="internal_error",
            message="An unexpected error occurred. Please try again later.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def _jsonable_errors(errors: Any) -> list[dict[str, Any]]:
    # pydantic puts the raw exception object in `ctx` for custom validators.
    cleaned = []
    for err in errors:
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        cleaned.append(err)
    return cleaned
