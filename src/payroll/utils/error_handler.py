# src/payroll/utils/error_handler.py
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.payroll.services.employee_client import EmployeeServiceUnavailable

logger = logging.getLogger("payroll.api")


def _safe_args(exc: Exception) -> str:
    a = getattr(exc, "args", None)
    return str(a) if a else "No additional details"


def _json_error(
    status_code: int,
    message: str,
    exc: Exception,
    extra: Dict[str, Any] | None = None,
) -> JSONResponse:
    """
    Unified JSON error response.
    Note: We keep professional user-facing messages here.
    """
    user_message = message
    if status_code == 404:
        user_message = "The requested resource was not found."
    elif status_code == 503:
        user_message = "Employee data is temporarily unavailable. Please try again later."
    elif status_code == 500:
        user_message = "Internal Server Error. Please try again later."

    payload: Dict[str, Any] = {
        "message": user_message,
        "error_type": exc.__class__.__name__,
        "status_code": status_code,
    }
    if extra:
        payload.update(extra)
    return JSONResponse(status_code=status_code, content=payload)


def _log_http(request: Request, status_code: int, detail: str, exc: Exception) -> None:
    """
    Log levels:
    - 404 -> INFO (normal noise)
    - other 4xx -> WARNING
    - 5xx -> EXCEPTION (stack trace)
    """
    url = str(request.url)
    method = request.method

    if status_code == 404:
        logger.info("404 Not Found: %s %s | detail=%s", method, url, detail)
        return

    if 400 <= status_code < 500:
        logger.warning("%s: %s %s | detail=%s | args=%s", status_code, method, url, detail, _safe_args(exc))
        return

    logger.exception("%s: %s %s | detail=%s", status_code, method, url, detail)


async def custom_exception_handler(request: Request, exc: Exception):
    # -----------------------------
    # 1) HTTPException (FastAPI's subclasses Starlette's)
    # -----------------------------
    if isinstance(exc, StarletteHTTPException):
        status = int(exc.status_code)
        detail = str(exc.detail)
        _log_http(request, status, detail, exc)
        return _json_error(status_code=status, message=detail, exc=exc)

    # -----------------------------
    # 2) Validation error
    # -----------------------------
    if isinstance(exc, RequestValidationError):
        logger.warning("422 Validation error: %s %s | %s", request.method, str(request.url), exc.errors())
        return _json_error(
            status_code=422,
            message="Validation error occurred",
            exc=exc,
            extra={"validation_errors": jsonable_errors(exc)},
        )

    # -----------------------------
    # 3) Employee service down / unreadable
    # -----------------------------
    if isinstance(exc, EmployeeServiceUnavailable):
        logger.error("503 Employee service unavailable: %s %s | %s", request.method, str(request.url), exc)
        return _json_error(status_code=503, message=str(exc), exc=exc)

    # -----------------------------
    # 4) Any other unexpected exception
    # -----------------------------
    logger.exception("500 Unhandled exception: %s %s | %s", request.method, str(request.url), str(exc))
    return _json_error(
        status_code=500,
        message="Internal Server Error. Please try again later.",
        exc=exc,
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may carry the raw exception object, which JSONResponse cannot encode
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, custom_exception_handler)
    app.add_exception_handler(RequestValidationError, custom_exception_handler)
    app.add_exception_handler(EmployeeServiceUnavailable, custom_exception_handler)
    app.add_exception_handler(Exception, custom_exception_handler)
