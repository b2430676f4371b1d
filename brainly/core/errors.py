import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

MISSING_DETAILS_MESSAGE = "Please provide all details"


class BrainlyError(Exception):
    """
    Базовая ошибка сервиса. Каждая ошибка завершает обработку текущего запроса
    и превращается в JSON-ответ вида {"message": ...} с кодом status_code.
    """

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(BrainlyError):
    status_code = 400
    message = MISSING_DETAILS_MESSAGE


class ConflictError(BrainlyError):
    status_code = 409
    message = "User already exists"


class AuthError(BrainlyError):
    status_code = 403
    message = "You are not logged in"


class NotFoundError(BrainlyError):
    # Публичный контракт отвечает 400, а не 404
    status_code = 400
    message = "Not found"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def brainly_error_handler(request: Request, exc: BrainlyError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Некорректное тело запроса %s %s: %s", request.method, request.url.path, exc.errors())
    return await brainly_error_handler(request, ValidationError())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Необработанная ошибка при обработке %s %s", request.method, request.url.path)
    return error_response(500, BrainlyError.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BrainlyError, brainly_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
