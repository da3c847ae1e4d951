"""Domain errors raised by services and their HTTP translation."""

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal Server Error"

    def __init__(self, message: Union[str, List[str]], details: Optional[Dict[str, Any]] = None):
        super().__init__(message if isinstance(message, str) else "; ".join(message))
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "statusCode": self.status_code,
            "error": self.error,
            "message": self.message,
        }
        result.update(self.details)
        return result


class ValidationError(AppError):
    """Malformed or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"

    def __init__(self, message, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class ConflictError(AppError):
    """A unique field already holds the candidate value."""

    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"

    def __init__(self, message: str, field: str):
        super().__init__(message, details={"field": field})
        self.field = field


class BusinessRuleError(AppError):
    """Input is well-formed but violates a business rule (e.g. expired promo code)."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.info(
        "%s: %s",
        exc.__class__.__name__,
        exc,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({
            "statusCode": status.HTTP_400_BAD_REQUEST,
            "error": "Bad Request",
            "message": messages,
        }),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
