"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so the CLI
layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageUnavailableError(DomainException):
    """Durable client-side storage could not be read or written."""


# ---------------------------------------------------------------------------
# Transport-level failures raised by CatalogGateway implementations
# ---------------------------------------------------------------------------


class CatalogTransportError(DomainException):
    """The catalog API could not be reached (connection, DNS, timeout)."""


class CatalogResponseError(DomainException):
    """The catalog API answered with a non-success status."""

    def __init__(self, status: int, message: str | None = None) -> None:
        self.status = status
        self.server_message = message
        super().__init__(message or f"Catalog API responded with status {status}")


# ---------------------------------------------------------------------------
# Classified errors published by the CatalogStore
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    NETWORK_ERROR = "NETWORK_ERROR"
    NOT_FOUND = "NOT_FOUND"
    SERVER_ERROR = "SERVER_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ApiError(DomainException):
    """A catalog fetch failure, classified for display."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        status: int | None = None,
        details: Any = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status = status
        self.details = details
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ApiError(code={self.code.value}, status={self.status}, message={self.message!r})"
