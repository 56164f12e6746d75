# src/taskdeck/errors.py

"""
Error taxonomy.

- TransportError: the request never produced a usable response
  (connection refused, DNS failure, timeout).
- ApiError: the backend answered with a non-2xx status. It is a TransportError
  too, so callers that only care about "the call failed" catch one class.
- ValidationError: the task payload was rejected, either locally
  (blank title, before any network call) or by the backend (400/422).
"""

from __future__ import annotations


class TaskDeckError(Exception):
    """Base class for every error raised by taskdeck."""


class TransportError(TaskDeckError):
    def __init__(self, message: str, *, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error


class ApiError(TransportError):
    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        method: str = "",
        url: str = "",
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body


class ValidationError(TaskDeckError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
