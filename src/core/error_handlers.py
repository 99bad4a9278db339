"""Application-wide exception handlers.

Every failed request is answered with the same JSON envelope:
``{"message": ..., "code": ..., "details"?: ..., "errors"?: [...]}``.
"""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

VALIDATION_ERROR_MESSAGE = "Erro de validação"
DATABASE_ERROR_MESSAGE = "Erro de banco de dados"
INTERNAL_ERROR_MESSAGE = "Erro interno do servidor"
REQUIRED_FIELD_MESSAGE = "Campo obrigatório"

# Location prefixes FastAPI puts in front of the field path
_LOCATIONS = {"body", "query", "path", "header", "cookie"}
_VALUE_ERROR_PREFIX = "Value error, "


def _error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    body = ErrorResponse(message=message, code=status_code, **extra)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True)
    )


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten Pydantic error dicts into ``[{field, message}]``.

    Args:
        errors: Errors as returned by ``RequestValidationError.errors()``.

    Returns:
        One entry per error, with the dotted field path and a readable message.
    """
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATIONS:
            loc = loc[1:]
        if error.get("type") == "missing":
            message = REQUIRED_FIELD_MESSAGE
        else:
            message = error.get("msg", "")
            if message.startswith(_VALUE_ERROR_PREFIX):
                message = message[len(_VALUE_ERROR_PREFIX):]
        formatted.append({"field": ".".join(loc), "message": message})
    return formatted


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = format_validation_errors(exc.errors())
    logger.info("Rejected request to %s: %s", request.url.path, errors)
    return _error_response(
        status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR_MESSAGE, errors=errors
    )


async def pydantic_validation_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    logger.warning("Validation error on %s: %s", request.url.path, exc)
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        VALIDATION_ERROR_MESSAGE,
        details=format_validation_errors(exc.errors()),
    )


async def database_error_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    logger.error("Database error on %s: %s", request.url.path, exc)
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        DATABASE_ERROR_MESSAGE,
        details=exc.__class__.__name__,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on ``app``."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PydanticValidationError, pydantic_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
