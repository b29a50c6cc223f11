"""Error types for the ConceptNet client.

Caller mistakes (``ArgumentError``, ``ValidationError``) are raised before any
request is sent. Network and decoding failures (``TransportError``,
``DecodeError``) are never raised by the client; they arrive as ``Err`` values
on the request's completion.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a client error."""

    ARGUMENT = "argument"
    VALIDATION = "validation"
    TRANSPORT = "transport"
    DECODE = "decode"


class ConceptNetError(Exception):
    """Base class for all client errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ArgumentError(ConceptNetError, TypeError):
    """Missing argument or argument of the wrong runtime type."""

    kind = ErrorKind.ARGUMENT


class ValidationError(ConceptNetError, ValueError):
    """Argument has the right type but fails its grammar or range check."""

    kind = ErrorKind.VALIDATION


class TransportError(ConceptNetError):
    """Network-level failure, timeout or non-success HTTP status."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(ConceptNetError):
    """Response body is not valid JSON."""

    kind = ErrorKind.DECODE
