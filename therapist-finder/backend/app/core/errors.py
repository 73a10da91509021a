"""
Errores del directorio y su traducción a respuestas JSON {"error": ...}.
Nunca se exponen trazas ni detalles internos del store.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("app.errors")


class DirectoryError(Exception):
    """Base de los errores del directorio."""


class InvalidTherapistId(DirectoryError):
    def __init__(self, raw_id: str):
        super().__init__(f"invalid therapist id: {raw_id!r}")
        self.raw_id = raw_id


class StoreUnavailable(DirectoryError):
    """El store no responde (conexión caída, timeout de selección de servidor...)."""


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid request")

    @app.exception_handler(InvalidTherapistId)
    async def invalid_id(request: Request, exc: InvalidTherapistId):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid id")

    @app.exception_handler(StoreUnavailable)
    async def store_unavailable(request: Request, exc: StoreUnavailable):
        logger.error(f"{request.method} {request.url.path}: store unavailable: {exc}")
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Store unavailable")

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
