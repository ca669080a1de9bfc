"""
Traducción de errores de dominio a respuestas HTTP con sobre de error.

    validación  → 400
    no existe   → 404
    almacén     → 500 (mensaje genérico; la causa solo va al log)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend_fastapi.api.schemas import ErrorEnvelope
from core.domain.errors import StorageError, TaskNotFoundError, TaskValidationError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(error=message).model_dump(),
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def _validation_error_handler(
    request: Request, exc: TaskValidationError
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def _request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))


async def _not_found_handler(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, "Task not found")


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    # Respaldo: las rutas ya traducen StorageError con un mensaje por
    # operación; aquí solo llega lo que falla fuera de ellas (dependencias).
    logger.error(
        f"❌ Error de almacenamiento en {request.method} {request.url.path}",
        exc_info=exc,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorEnvelope(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskValidationError, _validation_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_error_handler)
    app.add_exception_handler(TaskNotFoundError, _not_found_handler)
    app.add_exception_handler(StorageError, _storage_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
