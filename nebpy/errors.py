"""
Exceptions raised by nebpy.

Every failure surfaced to callers derives from NebError so that a single
``except NebError`` catches the whole taxonomy, while each category stays
distinguishable by its class:

    NebError
    ├── TransportError            connection or protocol failure
    │   └── TransportTimeout      bounded wait exceeded
    ├── ApiError                  non-2xx status or GraphQL ``errors`` array
    ├── ResponseFormatError       2xx reply that is not a GraphQL envelope
    ├── MissingFieldError         required response field absent
    ├── UnexpectedResultCountError
    ├── TokenDeliveryFailure
    ├── RecipeError
    │   ├── RecipeFailure         recipe reached a failed terminal state
    │   └── RecipeTimeout         recipe did not finish before the deadline
    └── ValidationIssues          pre-flight check reported issues

Server-reported text is always kept in the message.
"""

from __future__ import annotations

from typing import Any


class NebError(Exception):
    """Base exception for nebpy errors."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.args[0]} (status={self.status_code})"
        return self.args[0]


# =============================================================================
# Transport
# =============================================================================


class TransportError(NebError):
    """Raised when an HTTP exchange could not be completed."""

    def __init__(self, message: str, *, url: str | None = None):
        super().__init__(message)
        self.url = url


class TransportTimeout(TransportError):
    """Raised when an HTTP exchange exceeded its bounded wait."""


class ApiError(NebError):
    """Raised when UCAPI answered with a non-2xx status or GraphQL errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        messages: list[str] | None = None,
    ):
        super().__init__(message, status_code=status_code)
        self.messages = messages or []

    def __str__(self) -> str:
        return self.args[0]

    @classmethod
    def from_response(cls, status_code: int, messages: list[str]) -> ApiError:
        """Build the error text from the HTTP status and server messages."""
        text = ", ".join([f"Request error (HTTP {status_code})", *messages])
        return cls(text, status_code=status_code, messages=messages)


class ResponseFormatError(NebError):
    """Raised when a successful reply cannot be read as a GraphQL envelope."""


# =============================================================================
# Materialization
# =============================================================================


class MissingFieldError(NebError):
    """
    Raised when a field declared as required is absent from a response.

    This indicates a schema mismatch between client and server and is never
    recovered locally.
    """

    def __init__(self, field: str, shape: str, path: str):
        super().__init__(
            f"Required field '{field}' ({path}) missing from '{shape}' response"
        )
        self.field = field
        self.shape = shape
        self.path = path


class UnexpectedResultCountError(NebError):
    """Raised when a single-result call returned zero or several results."""

    def __init__(self, operation: str, actual: int, expected: int = 1):
        super().__init__(
            f"Unexpected number of results returned by '{operation}': "
            f"expected {expected}, got {actual}"
        )
        self.operation = operation
        self.actual = actual
        self.expected = expected


# =============================================================================
# Hardware operations
# =============================================================================


class TokenDeliveryFailure(NebError):
    """Raised when a security token could not be delivered to the SPUs."""

    def __init__(self, message: str, *, response_body: str | None = None):
        super().__init__(message)
        self.response_body = response_body


class RecipeError(NebError):
    """Base class for asynchronous recipe failures."""

    def __init__(
        self,
        message: str,
        *,
        recipe_uuid: Any = None,
        npod_uuid: Any = None,
    ):
        super().__init__(message)
        self.recipe_uuid = recipe_uuid
        self.npod_uuid = npod_uuid


class RecipeFailure(RecipeError):
    """Raised when a recipe reached the Failed, Timeout or Cancelled state."""

    def __init__(self, message: str, *, state: Any = None, status: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.state = state
        self.status = status


class RecipeTimeout(RecipeError):
    """Raised when a recipe did not reach a terminal state before its deadline."""

    def __init__(self, message: str, *, elapsed: float = 0.0, **kwargs):
        super().__init__(message, **kwargs)
        self.elapsed = elapsed


class ValidationIssues(NebError):
    """Raised when a pre-flight validation reported blocking issues."""

    def __init__(
        self,
        message: str,
        *,
        errors: list[Any] | None = None,
        warnings: list[Any] | None = None,
    ):
        super().__init__(message)
        self.errors = errors or []
        self.warnings = warnings or []
