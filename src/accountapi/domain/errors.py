"""Domain-specific exceptions."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ValidationError


class ErrorKind(str, Enum):
    """Category of a failed account API call."""

    INVALID_INPUT = "invalid_input"
    TRANSPORT = "transport"
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    UNKNOWN = "unknown"
    DECODE = "decode"


class ErrorBody(BaseModel):
    """Error body returned on non-success responses.

    The message is optional; servers may send an empty object.
    """

    error_message: str = ""


_LABELS = {
    ErrorKind.INVALID_INPUT: "Invalid Input Error",
    ErrorKind.TRANSPORT: "Transport Error",
    ErrorKind.BAD_REQUEST: "Bad Request Error",
    ErrorKind.NOT_FOUND: "Not Found Error",
    ErrorKind.CONFLICT: "Conflict Error",
    ErrorKind.INTERNAL_SERVER_ERROR: "Internal Server Error",
    ErrorKind.UNKNOWN: "Unknown Error",
    ErrorKind.DECODE: "Decode Error",
}


class AccountApiError(Exception):
    """Raised for every failure of an account API call.

    The failure category lives in ``kind``; callers branch on it rather
    than on exception subclasses.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str = "",
        *,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.cause = cause
        super().__init__(f"{_LABELS[kind]}: {message}")

    def __repr__(self) -> str:
        return (
            f"AccountApiError(kind={self.kind.value!r}, message={self.message!r}, "
            f"status_code={self.status_code!r})"
        )


def classify_status(status_code: int) -> ErrorKind:
    """Map a non-success HTTP status code to an error kind."""
    if status_code == 400:
        return ErrorKind.BAD_REQUEST
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if status_code == 409:
        return ErrorKind.CONFLICT
    if status_code >= 500:
        return ErrorKind.INTERNAL_SERVER_ERROR
    return ErrorKind.UNKNOWN


def error_from_response(status_code: int, body: bytes) -> AccountApiError:
    """Build the error for a non-success response.

    A body that cannot be decoded into ``ErrorBody`` yields a DECODE error
    instead of the status-based kind.
    """
    kind = classify_status(status_code)
    try:
        decoded = ErrorBody.model_validate_json(body)
    except ValidationError as e:
        return AccountApiError(
            ErrorKind.DECODE,
            f"could not decode error body for HTTP {status_code}: {e}",
            status_code=status_code,
            cause=e,
        )
    return AccountApiError(kind, decoded.error_message, status_code=status_code)
