"""
Notes API — Custom Exception Hierarchy
========================================

What:  Defines application-specific exceptions and the single function that
       turns any exception into an HTTP status plus failure envelope.
Why:   Handlers raise typed outcomes (not found, conflict) with precise
       messages; everything else is converted to a generic 500 without
       leaking internal details to the client.
How:   Each exception class carries a message, an HTTP status and an
       optional context dict. translate_error() maps exceptions to
       (status, body); main.py registers handlers that call it.
Who:   Raised by services; translated by the handlers in main.py.

Exception Hierarchy:
    NotesAPIError (base)
    ├── NotFoundError      → 404 Not Found
    ├── ConflictError      → 409 Conflict
    └── InternalError      → 500 Internal Server Error
        └── DatabaseError  → 500 Internal Server Error

translate_error() has no dependency on FastAPI or Starlette, so the
mapping can be unit-tested on its own.
"""

from typing import Any, Dict, Optional, Tuple

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class NotesAPIError(Exception):
    """
    Base exception for all Notes API application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = GENERIC_ERROR_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(NotesAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /api/note/{id} for a missing or malformed id,
             GET /api/note/read/{title} for an unknown title, and
             GET /api/notes when there are no notes at all.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows (not an exception); the
    service layer converts None into this exception.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Note not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConflictError(NotesAPIError):
    """
    Raised when a write would violate the unique title constraint.

    HTTP:    409 Conflict
    """

    status_code = 409

    def __init__(
        self,
        message: str = "Note with this title already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InternalError(NotesAPIError):
    """
    Raised for failures the client cannot fix.

    HTTP:    500 Internal Server Error
    The message is logged; the client only ever sees GENERIC_ERROR_MESSAGE.
    """

    status_code = 500


class DatabaseError(InternalError):
    """
    Raised when a database operation fails unexpectedly.

    When:    Connection lost mid-query, NOT NULL violation on a missing
             field, any SQLAlchemyError that is not a title conflict.

    Security Note:
        Detailed error info (SQL, constraint name, driver text) goes into
        `context` and the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def error_body(message: str) -> Dict[str, Any]:
    """Failure envelope."""
    return {"success": False, "message": message}


def translate_error(exc: BaseException) -> Tuple[int, Dict[str, Any]]:
    """
    Map any exception to (HTTP status, failure envelope).

    NotFoundError and ConflictError keep their own message. Everything
    else, typed InternalError or not, becomes 500 with a generic message.
    """
    if isinstance(exc, NotesAPIError) and exc.status_code < 500:
        return exc.status_code, error_body(exc.message)
    return 500, error_body(GENERIC_ERROR_MESSAGE)
