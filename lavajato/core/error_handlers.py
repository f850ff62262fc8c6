from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from lavajato.constants.error_codes import ErrorCode
from lavajato.core.exceptions import AppException
import logging

logger = logging.getLogger(__name__)


def error_envelope(
    status_code: int,
    message: str,
    error_code: ErrorCode,
    details: Optional[Any] = None,
) -> JSONResponse:
    """Shape of every error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "error_code": error_code,
            "details": details,
        },
    )


# -------------------------
# APP EXCEPTIONS
# -------------------------
async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code == 409:
        logger.info(
            "Conflict",
            extra={"path": request.url.path, "error_code": exc.error_code},
        )
    return error_envelope(exc.status_code, exc.detail, exc.error_code, exc.details)


# -------------------------
# REQUEST VALIDATION
# -------------------------
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    # loc/msg/type only; the submitted input is never echoed back
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    return error_envelope(
        422,
        "Invalid request data",
        ErrorCode.VALIDATION_ERROR,
        jsonable_encoder(errors),
    )


# -------------------------
# HTTP EXCEPTIONS (mapped)
# -------------------------
HTTP_STATUS_TO_ERROR_CODE = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.PERMISSION_DENIED,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.VALIDATION_ERROR,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION_ERROR,
}


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
):
    error_code = HTTP_STATUS_TO_ERROR_CODE.get(
        exc.status_code,
        ErrorCode.INTERNAL_ERROR,
    )
    response = error_envelope(exc.status_code, exc.detail, error_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


# -------------------------
# DB INTEGRITY ERRORS
# -------------------------
async def integrity_error_handler(
    request: Request, exc: IntegrityError
):
    # expected constraint violations are translated by the services before this point
    logger.warning(
        "Unmapped integrity error",
        extra={"path": request.url.path, "error": str(exc.orig)},
    )
    return error_envelope(
        409,
        "The record conflicts with existing data. Reload and try again.",
        ErrorCode.CONFLICT,
    )


# -------------------------
# LAST RESORT
# -------------------------
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )
    return error_envelope(
        500,
        "Something went wrong. Please try again.",
        ErrorCode.INTERNAL_ERROR,
        {"request_id": getattr(request.state, "request_id", None)},
    )
