"""
Handlers for expected errors: application errors, HTTP exceptions and
request validation failures.
"""

from typing import Dict, List

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dpf_cms.core.logging_config import get_logger

from .errors import AppError, ValidationFailed

logger = get_logger(__name__)


def _field_name(loc) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path", "form", "header"):
        parts = parts[1:]
    return ".".join(parts)


def validation_errors_to_dict(errors) -> Dict[str, List[str]]:
    """Group pydantic error entries by dotted field name."""
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        field = _field_name(error.get("loc", ()))
        message = error.get("msg", "Invalid value.")
        grouped.setdefault(field, []).append(message)
    return grouped


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    content = {"message": exc.message}
    if isinstance(exc, ValidationFailed):
        content["errors"] = exc.errors
    logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=content, headers=_auth_headers(exc.status_code))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = validation_errors_to_dict(exc.errors())
    first = next(iter(errors.values()), ["The given data was invalid."])[0]
    return JSONResponse(status_code=422, content={"message": first, "errors": errors})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _auth_headers(status_code: int):
    if status_code == 401:
        return {"WWW-Authenticate": "Bearer"}
    return None
