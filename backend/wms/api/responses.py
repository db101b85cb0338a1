"""
Response envelope and exception handlers

Every response body is {"code", "message", "data"?, "error"?}. 5xx bodies
never carry internal error text.
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from wms.exceptions import WMSError

logger = logging.getLogger(__name__)

INTERNAL_MESSAGE = "Internal server error"


def envelope(code: int, message: str, data: Any = None, error: Any = None) -> dict:
    body = {"code": code, "message": message}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    if error is not None:
        body["error"] = error
    return body


def ok(data: Any = None, message: str = "Success", code: int = status.HTTP_200_OK) -> dict:
    return envelope(code, message, data=data)


def created(data: Any = None, message: str = "Created") -> dict:
    return envelope(status.HTTP_201_CREATED, message, data=data)


def error_response(code: int, message: str, error: Optional[Any] = None, headers=None) -> JSONResponse:
    return JSONResponse(status_code=code, content=envelope(code, message, error=error), headers=headers)


def classify_integrity_error(exc: IntegrityError) -> int:
    """Fallback mapping of driver constraint text when a service check was skipped"""
    text = str(getattr(exc, "orig", exc)).lower()
    if "foreign key" in text:
        return status.HTTP_400_BAD_REQUEST
    if "unique" in text or "duplicate" in text:
        return status.HTTP_409_CONFLICT
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append("%s: %s" % (loc, err.get("msg")) if loc else str(err.get("msg")))
    return "; ".join(parts)


async def wms_error_handler(request: Request, exc: WMSError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return error_response(exc.status_code, INTERNAL_MESSAGE)
    logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
    return error_response(exc.status_code, exc.default_message, error=exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    detail = _format_validation_errors(exc)
    logger.warning("%s %s invalid request: %s", request.method, request.url.path, detail)
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", error=detail)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        return error_response(exc.status_code, INTERNAL_MESSAGE, headers=getattr(exc, "headers", None))
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def integrity_error_handler(request: Request, exc: IntegrityError):
    code = classify_integrity_error(exc)
    if code >= 500:
        logger.error("%s %s integrity error: %s", request.method, request.url.path, exc.orig)
        return error_response(code, INTERNAL_MESSAGE)
    logger.warning("%s %s constraint violation: %s", request.method, request.url.path, exc.orig)
    message = "Conflict" if code == status.HTTP_409_CONFLICT else "Validation failed"
    return error_response(code, message, error="constraint violation")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_MESSAGE)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WMSError, wms_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
