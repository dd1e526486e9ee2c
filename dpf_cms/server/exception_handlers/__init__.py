"""
Exception handlers for the DPF CMS server.

This package contains the application error types, their handlers and a
setup function to register them with the FastAPI application.
"""

from .errors import (
    AppError,
    BadRequest,
    BusinessRuleViolation,
    Forbidden,
    NotFound,
    Unauthenticated,
    ValidationFailed,
)
from .global_handler import setup_exception_handlers

__all__ = [
    "AppError",
    "BadRequest",
    "BusinessRuleViolation",
    "Forbidden",
    "NotFound",
    "Unauthenticated",
    "ValidationFailed",
    "setup_exception_handlers",
]
