"""Exception handlers rendering failures as response envelopes.

Domain errors raised by the application are mapped to HTTP status codes
here, so routers only handle the cases that differ per endpoint.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from watch_server.api.schemas import ResponseValue, Status
from watch_server.services.catalog import (
    EmailAlreadyUsedError,
    IncorrectPasswordError,
    NotFoundError,
    SameNewPasswordError,
    TokenInvalidError,
)
from watch_server.utils.logger import setup_logger

logger = setup_logger("api.errors")


class APIError(Exception):
    """Failure with an explicit HTTP status and envelope status.

    Attributes:
        status_code: HTTP status code.
        status: Envelope status.
        message: Optional detail.
    """

    def __init__(
        self,
        status_code: int,
        response_status: Status,
        message: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.status = response_status
        self.message = message
        super().__init__(message or response_status.value)


_DOMAIN_ERRORS: dict[type[Exception], tuple[int, Status]] = {
    NotFoundError: (status.HTTP_404_NOT_FOUND, Status.NOT_FOUND),
    EmailAlreadyUsedError: (status.HTTP_400_BAD_REQUEST, Status.EMAIL_ALREADY_USED),
    IncorrectPasswordError: (status.HTTP_400_BAD_REQUEST, Status.INCORRECT_PASSWORD),
    SameNewPasswordError: (status.HTTP_400_BAD_REQUEST, Status.SAME_NEW_PASSWORD),
    TokenInvalidError: (status.HTTP_400_BAD_REQUEST, Status.TOKEN_INVALID),
}


def error_response(
    status_code: int,
    response_status: Status,
    message: str | None = None,
) -> JSONResponse:
    """Render an error envelope.

    Args:
        status_code: HTTP status code.
        response_status: Envelope status.
        message: Optional detail.

    Returns:
        JSON response.
    """
    body = ResponseValue(status=response_status, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def _api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path}: {exc.status.value}")
    return error_response(exc.status_code, exc.status, exc.message)


async def _domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code, response_status = _DOMAIN_ERRORS[type(exc)]
    logger.info(f"{request.method} {request.url.path}: {exc}")
    return error_response(status_code, response_status)


async def _validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    if any(error["loc"] and error["loc"][0] == "path" for error in errors):
        logger.info(f"{request.method} {request.url.path}: invalid URL parameter")
        return error_response(status.HTTP_400_BAD_REQUEST, Status.INVALID_URL_PARAMETER)

    message = "; ".join(_format_validation_error(error) for error in errors)
    logger.info(f"{request.method} {request.url.path}: invalid request: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, Status.INVALID_REQUEST, message)


def _format_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error["loc"] if part != "body")
    return f"{location}: {error['msg']}" if location else error["msg"]


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path}: internal server error", exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        Status.INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install envelope-rendering exception handlers.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(APIError, _api_error_handler)
    for error_type in _DOMAIN_ERRORS:
        app.add_exception_handler(error_type, _domain_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
