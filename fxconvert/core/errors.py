"""Conversion error taxonomy and the FastAPI handlers that render it.

Every failure a conversion can hit derives from ``ConversionError`` and
carries the HTTP status the JSON API answers with plus a short machine code.
The UI route catches the same base class and turns it into an alert.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("fxconvert.errors")


class ConversionError(Exception):
    """Base class; ``code`` and ``status_code`` drive the JSON error body."""

    code = "conversion_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    user_message = "Currency conversion failed, please try again later."

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAmountError(ConversionError, ValueError):
    code = "invalid_amount"
    status_code = status.HTTP_400_BAD_REQUEST
    user_message = "Please enter a valid amount."


class RateFetchError(ConversionError):
    code = "rate_fetch_failed"
    status_code = status.HTTP_502_BAD_GATEWAY
    user_message = "Could not fetch exchange rates, please try again later."


class RateParseError(ConversionError):
    code = "rate_parse_failed"
    status_code = status.HTTP_502_BAD_GATEWAY
    user_message = "Could not fetch exchange rates, please try again later."


class UnknownCurrencyError(ConversionError, LookupError):
    code = "unknown_currency"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, currency: str):
        super().__init__(f"No exchange rate available for currency '{currency}'")
        self.currency = currency

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f"Currency {self.currency} is not supported."


def conversion_error_handler(request: Request, exc: ConversionError):  # type: ignore
    logger.warning(
        "conversion failed: %s", exc.message, extra={"error_code": exc.code}
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.message},
    )


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "not_found",
                "detail": f"No route for {request.method} {request.url.path}",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "http_error", "detail": exc.detail},
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_errors(exc),
        },
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    # pydantic v2 puts the raw exception object under "ctx"
    return [
        {k: v for k, v in err.items() if k in ("type", "loc", "msg")}
        for err in exc.errors()
    ]


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConversionError, conversion_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, server_error_handler)
