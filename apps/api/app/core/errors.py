import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.http import fail
from app.services.errors import RegistrationNotFound, ShiftRejection

logger = logging.getLogger(__name__)

DB_UNAVAILABLE_MESSAGE = "Database connection timeout. Please try again."


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http(request: Request, e: StarletteHTTPException):
        return fail(e.detail or "HTTP error", status=e.status_code, headers=getattr(e, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def _validation(request: Request, e: RequestValidationError):
        return fail("Validation failed", status=400, code="VALIDATION_FAILED", details=jsonable_encoder(e.errors()))

    @app.exception_handler(ShiftRejection)
    async def _rejected(request: Request, e: ShiftRejection):
        return fail(e.message, status=e.status_code, code=e.code)

    @app.exception_handler(RegistrationNotFound)
    async def _not_found(request: Request, e: RegistrationNotFound):
        return fail(e.message, status=e.status_code, code=e.code)

    @app.exception_handler(OperationalError)
    @app.exception_handler(PoolTimeoutError)
    async def _db_unavailable(request: Request, e: Exception):
        logger.warning("database unavailable on %s %s: %s", request.method, request.url.path, e)
        return fail(DB_UNAVAILABLE_MESSAGE, status=503, code="DATABASE_UNAVAILABLE")

    @app.exception_handler(IntegrityError)
    async def _integrity(request: Request, e: IntegrityError):
        return fail("Duplicate or constraint violation", status=409, code="CONSTRAINT_ERROR")

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, e: Exception):
        logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=e)
        return fail("Internal server error", status=500)
