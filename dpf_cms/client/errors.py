"""Error types raised by the CMS API client.

Purpose:
- Carry the HTTP status and the server's JSON body for failed requests.
- Flatten the server's ``{"errors": {field: [messages]}}`` shape into a list
  suitable for display.
"""

from __future__ import annotations

from typing import Any, List, Optional


def flatten_errors(payload: Any) -> List[str]:
    """Turn an error response body into a flat list of messages.

    Field errors are listed first in field order; the top-level ``message``
    is used only when there are no field errors.

    >>> flatten_errors({"message": "Invalid.", "errors": {"title": ["Required."], "slug": ["Taken.", "Bad."]}})
    ['Required.', 'Taken.', 'Bad.']
    >>> flatten_errors({"message": "Not found."})
    ['Not found.']
    """
    if not isinstance(payload, dict):
        return [str(payload)] if payload else []
    messages: List[str] = []
    errors = payload.get("errors")
    if isinstance(errors, dict):
        for value in errors.values():
            if isinstance(value, (list, tuple)):
                messages.extend(str(item) for item in value)
            elif value:
                messages.append(str(value))
    if not messages:
        for key in ("message", "detail"):
            if payload.get(key):
                messages.append(str(payload[key]))
                break
    return messages


class CmsApiError(Exception):
    """Base error for CMS API failures.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code of the failed response, if any.
        details: Parsed JSON body (or raw text) returned by the server.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details
        self.messages = flatten_errors(details) or [message]
