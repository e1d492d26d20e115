"""Exception handlers rendering every failure as the error envelope."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.logging import get_logger
from app.services.erpnext.client import ERPNextConfigError, ERPNextError
from app.services.response import error_envelope

logger = get_logger(__name__)

# Checked in order; the first keyword found in the remote message wins.
_KEYWORD_STATUS = (
    (("does not exist", "not found"), 404),
    (("permission", "access"), 403),
    (("duplicate", "already exists"), 409),
    (("required", "mandatory"), 400),
)


def erp_error_status(exc: ERPNextError) -> int:
    message = (exc.message or "").lower()
    for keywords, status_code in _KEYWORD_STATUS:
        if any(keyword in message for keyword in keywords):
            return status_code
    if exc.status_code and exc.status_code >= 400:
        return exc.status_code
    return 500


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]


def _json(status_code: int, error: str, details=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_envelope(error, details, status_code))


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        detail = exc.detail
        error = detail if isinstance(detail, str) else "Request failed"
        details = None if isinstance(detail, str) else detail
        return _json(exc.status_code, error, details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _json(400, "Validation Error", _validation_details(exc))

    @app.exception_handler(ERPNextConfigError)
    async def erp_config_handler(request: Request, exc: ERPNextConfigError):
        logger.error("erp_configuration_error path=%s error=%s", request.url.path, exc.message)
        return _json(500, "Configuration Error", exc.message)

    @app.exception_handler(ERPNextError)
    async def erp_error_handler(request: Request, exc: ERPNextError):
        status_code = erp_error_status(exc)
        logger.warning(
            "erp_request_failed path=%s status=%s remote_status=%s error=%s",
            request.url.path,
            status_code,
            exc.status_code,
            exc.message,
        )
        return _json(status_code, "Frappe API Error", exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error path=%s", request.url.path)
        return _json(500, "Application Error", str(exc))
