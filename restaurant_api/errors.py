from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base error carrying the HTTP status and body it maps to."""

    status_code = 500

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ApiError):
    status_code = 400


class DuplicateEmailError(ValidationError):
    def __init__(self, email: str) -> None:
        super().__init__("Email already in use")
        self.email = email


class AuthError(ApiError):
    status_code = 403


class InvalidCredentialsError(AuthError):
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class NotFoundError(ApiError):
    status_code = 404


class StorageError(ApiError):
    status_code = 500


class DuplicateKeyError(StorageError):
    """A unique index rejected a write."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(f"Duplicate value for unique field '{field}'")
        self.field = field
        self.value = value


def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.warning(
            "Storage failure on %s %s", request.method, request.url.path, exc_info=exc,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": ".".join(str(p) for p in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"error": "Validation failed", "details": details},
    )


def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, _unhandled_error_handler)
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
