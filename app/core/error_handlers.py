# app/core/error_handlers.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import (
    ServiceError,
    InvalidRoleError, InvalidEmailError, InvalidCityError,
    InvalidProductTypeError, InvalidPickupPointError, InvalidDateError,
    UserExistsError, OpenReceptionExistsError, NoOpenReceptionError, NoProductsError,
    InvalidCredentialsError, InvalidTokenError, TokenExpiredError,
    MissingAuthHeaderError, InvalidAuthHeaderError, AccessDeniedError,
    InternalError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    InvalidRoleError: status.HTTP_400_BAD_REQUEST,
    InvalidEmailError: status.HTTP_400_BAD_REQUEST,
    InvalidCityError: status.HTTP_400_BAD_REQUEST,
    InvalidProductTypeError: status.HTTP_400_BAD_REQUEST,
    InvalidPickupPointError: status.HTTP_400_BAD_REQUEST,
    InvalidDateError: status.HTTP_400_BAD_REQUEST,
    OpenReceptionExistsError: status.HTTP_400_BAD_REQUEST,
    NoOpenReceptionError: status.HTTP_400_BAD_REQUEST,
    NoProductsError: status.HTTP_400_BAD_REQUEST,
    UserExistsError: status.HTTP_409_CONFLICT,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    InvalidTokenError: status.HTTP_401_UNAUTHORIZED,
    TokenExpiredError: status.HTTP_401_UNAUTHORIZED,
    MissingAuthHeaderError: status.HTTP_401_UNAUTHORIZED,
    InvalidAuthHeaderError: status.HTTP_401_UNAUTHORIZED,
    AccessDeniedError: status.HTTP_403_FORBIDDEN,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def status_code_for(exc: ServiceError) -> int:
    for error_class in type(exc).__mro__:
        if error_class in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_class]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code = status_code_for(exc)
    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.message}")
    return error_response(status_code, exc.message, headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} - Request inválido: {exc.errors()}")
    return error_response(status.HTTP_400_BAD_REQUEST, "invalid request")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


def setup_error_handlers(app: FastAPI):
    """Registrar los handlers que convierten errores en {"error": "..."}"""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
