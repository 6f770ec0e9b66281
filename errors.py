"""
Error taxonomy for the storefront API.

Every failure a handler can produce is an AppError subclass; the handlers
registered by `install_handlers` turn them (and the framework/database errors
that map onto them) into the uniform JSON failure body:

    {"success": false, "error": "<name>", "message": "<text>", "errors": [...]}
"""
from typing import List, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError, PyMongoError, WriteError

logger = structlog.get_logger(__name__)

# MongoDB "Document failed validation"
SCHEMA_VALIDATION_CODE = 121


class AppError(Exception):
    status_code = 500
    error = "UnexpectedError"
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[dict]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def to_body(self) -> dict:
        body = {"success": False, "error": self.error, "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class InvalidIdentifier(AppError):
    status_code = 400
    error = "InvalidIdentifier"
    default_message = "Invalid id"


class ValidationError(AppError):
    status_code = 400
    error = "ValidationError"
    default_message = "Validation failed"


class Unauthorized(AppError):
    status_code = 401
    error = "Unauthorized"
    default_message = "Unauthorized - Please sign in"


class NotFound(AppError):
    status_code = 404
    error = "NotFound"
    default_message = "Not found"


class Conflict(AppError):
    status_code = 409
    error = "Conflict"
    default_message = "Duplicate entry"


class UpstreamError(AppError):
    status_code = 500
    error = "UpstreamError"
    default_message = "Upstream service failed"


class UnexpectedError(AppError):
    pass


def field_errors(raw_errors) -> List[dict]:
    """Flatten pydantic error dicts into [{field, message}]."""
    out = []
    for err in raw_errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        out.append({"field": ".".join(loc) or None, "message": err.get("msg", "Invalid value")})
    return out


def _respond(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.error, detail=exc.message)
    return _respond(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _respond(ValidationError("Validation failed", field_errors(exc.errors())))


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
    logger.warning("duplicate_key", path=request.url.path, detail=str(exc)[:200])
    return _respond(Conflict("An entry with this information already exists"))


async def database_error_handler(request: Request, exc: PyMongoError):
    if isinstance(exc, WriteError) and exc.code == SCHEMA_VALIDATION_CODE:
        return _respond(ValidationError("Document failed validation"))
    logger.error("database_error", path=request.url.path, exc_info=exc)
    return _respond(UpstreamError("Database operation failed"))


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error("unexpected_error", path=request.url.path, exc_info=exc)
    return _respond(UnexpectedError("Internal server error. Please try again later."))


def install_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    # DuplicateKeyError is a PyMongoError; the most specific handler wins
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.add_exception_handler(PyMongoError, database_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
