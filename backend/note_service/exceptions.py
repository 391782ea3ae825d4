"""
Note Service — Application Error Taxonomy
==========================================

What:  Classified application errors shared by every layer.
How:   Each error carries a kind (ErrorKind), a client-safe message, a
       developer message and, for wrapped failures, the original cause.
       Exception handlers (middleware/errors.py) map the kind to a status code.
Who:   Raised by routes (bad request), storage (not found) and services
       (internal wrapping); caught by the global exception handlers.

Exception Hierarchy:
    AppError (base, carries ErrorKind)
    ├── BadRequestError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── InternalError     → 500 Internal Server Error (wraps a cause)

Classification is always by kind, never by message text:

    try:
        ...
    except Exception as exc:
        if is_not_found(exc):
            raise
        raise InternalError("failed to delete note", cause=exc) from exc
"""

import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """Error classification understood by the error-translation layer."""

    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class AppError(Exception):
    """
    Base exception for all classified application errors.

    Attributes:
        kind:              ErrorKind driving the HTTP status code
        message:           Client-facing description
        developer_message: Extra detail for API consumers (never raw driver text)
        cause:             The wrapped exception, if any (for programmatic inspection)
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = "internal system error",
        developer_message: str = "",
        cause: Optional[BaseException] = None,
    ):
        self.message = message
        self.developer_message = developer_message
        self.cause = cause
        super().__init__(self.message)

    def is_kind(self, kind: ErrorKind) -> bool:
        return self.kind is kind

    def unwrap(self) -> Optional[BaseException]:
        return self.cause

    def to_dict(self) -> dict:
        """Serialized error body: {"message": ..., "developer_message": ...}"""
        return {"message": self.message, "developer_message": self.developer_message}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class BadRequestError(AppError):
    """
    Raised when client input is malformed or missing.

    When:  Blank path identifiers, missing query parameters, undecodable JSON,
           partial updates that change nothing.
    HTTP:  400 Bad Request
    """

    kind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str = "bad request", developer_message: str = ""):
        super().__init__(message=message, developer_message=developer_message)


class NotFoundError(AppError):
    """
    Raised when a requested resource does not exist.

    When:  Storage finds no document for a uuid, or a service policy treats an
           empty result set as missing.
    HTTP:  404 Not Found
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str = "resource", resource_id: Optional[str] = None):
        message = "not found"
        developer_message = f"the requested {resource} was not found"
        if resource_id:
            developer_message = f"{resource} '{resource_id}' was not found"
        super().__init__(message=message, developer_message=developer_message)
        self.resource = resource
        self.resource_id = resource_id


class InternalError(AppError):
    """
    Wraps an unclassified failure with a descriptive context message.

    The message is the service-level description (e.g. "failed to update note").
    The developer message only names the cause's type so driver text is never
    exposed; the cause itself stays attached for logging and inspection.
    HTTP:  500 Internal Server Error
    """

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        developer_message = type(cause).__name__ if cause is not None else ""
        super().__init__(message=message, developer_message=developer_message, cause=cause)

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}. error: {self.cause}"


def is_kind(exc: BaseException, kind: ErrorKind) -> bool:
    """
    True when exc, or any error it wraps, is an AppError of the given kind.

    Follows AppError.cause links the way errors.Is-style unwrapping would.
    """
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, AppError):
            if current.is_kind(kind):
                return True
            current = current.cause
        else:
            current = None
    return False


def is_not_found(exc: BaseException) -> bool:
    return is_kind(exc, ErrorKind.NOT_FOUND)


def is_bad_request(exc: BaseException) -> bool:
    return is_kind(exc, ErrorKind.BAD_REQUEST)
