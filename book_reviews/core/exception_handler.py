# book_reviews/core/exception_handler.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from book_reviews.core.exceptions import AppException, InternalServerError

logger = logging.getLogger(__name__)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an AppException as `{"message": detail}`."""
    request_id = getattr(request.state, "request_id", None)
    if exc.status_code >= 500:
        logger.error(
            "Server error while handling request",
            extra={
                "request_id": request_id,
                "path": request.url.path,
                "detail": exc.detail,
            },
        )
    else:
        logger.info(
            "Client error",
            extra={
                "request_id": request_id,
                "path": request.url.path,
                "status_code": exc.status_code,
                "detail": exc.detail,
            },
        )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Missing fields, wrong types and malformed path ids all become a 400."""
    errors = [
        {
            "field": ".".join(str(part) for part in (error.get("loc") or ())[1:]),
            "message": error.get("msg"),
        }
        for error in exc.errors()
    ]
    locations = {(error.get("loc") or ("",))[0] for error in exc.errors()}
    if "path" in locations:
        message = "Invalid book ID"
    else:
        message = "Invalid request payload"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"message": message, "errors": errors}),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log everything, tell the client nothing."""
    logger.exception(
        "Unhandled exception",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "path": request.url.path,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": InternalServerError.default_detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
