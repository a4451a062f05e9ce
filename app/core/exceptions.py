# app/core/exceptions.py

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base error translated into a JSON `{error, details?}` response."""

    status_code = 500

    def __init__(
        self,
        error: str,
        details: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(error)
        self.error = error
        self.details = details
        self.extra = dict(extra or {})

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        body.update(self.extra)
        return body


class ValidationError(ApiError):
    status_code = 400


class NotFound(ApiError):
    status_code = 404


class StoreError(ApiError):
    status_code = 500


class StoreUnavailable(StoreError):
    """The pool could not reach the database."""


def require_email(email: Optional[str], message: str = "Email is required") -> str:
    if email is None or not str(email).strip():
        raise ValidationError(message)
    return email


def _format_validation_errors(exc: RequestValidationError):
    out = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        out.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return out


def register_exception_handlers(app: FastAPI, expose_errors: bool = False) -> None:
    """Install the JSON error translation used by every route."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path}: {exc.error} ({exc.details})")
        else:
            logger.warning(f"⚠️ {request.method} {request.url.path}: {exc.error}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"❗️ Validation error for {request.url.path}: {exc.errors()!r}")
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": _format_validation_errors(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"💥 Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(exc) if expose_errors else "Something went wrong",
            },
        )
