"""
Application error types.

Routers and services raise these; ``setup_exception_handlers`` renders them
as ``{"message": ...}`` responses, with an ``errors`` map for field-level
validation failures.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to a specific HTTP status."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthenticated.") -> None:
        super().__init__(message)


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "This action is unauthorized.") -> None:
        super().__init__(message)


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, identifier: object = None) -> None:
        message = f"{resource} not found." if identifier is None else f"{resource} {identifier} not found."
        super().__init__(message)


class BusinessRuleViolation(AppError):
    """A request that is well formed but refused by a business rule (HTTP 422)."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class ValidationFailed(AppError):
    """Field-level validation failure (HTTP 422) carrying ``{field: [messages]}``."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, errors: Dict[str, List[str]]) -> None:
        first = next((msgs[0] for msgs in errors.values() if msgs), "The given data was invalid.")
        super().__init__(first)
        self.errors = errors

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationFailed":
        return cls({field: [message]})
