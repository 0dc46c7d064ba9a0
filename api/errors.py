"""Exception handlers mapping core.errors onto JSON error responses.

Every error body has the same shape::

    {"error": {"message": <str | list[str]>, "status": <int>}}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.errors import BooksAPIError, InternalError, ValidationError

logger = logging.getLogger(__name__)


def error_response(error: BooksAPIError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"error": {"message": error.message, "status": error.status_code}},
    )


async def handle_books_api_error(request: Request, exc: BooksAPIError) -> JSONResponse:
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return error_response(exc)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies (e.g. invalid JSON) are client errors, not 422s."""
    messages = [error.get("msg", "Invalid request") for error in exc.errors()]
    return error_response(ValidationError(messages))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(InternalError())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BooksAPIError, handle_books_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
