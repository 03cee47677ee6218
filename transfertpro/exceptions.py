"""
TransfertPro exception hierarchy.

All exceptions inherit from TransfertProError for easy catching. Each concrete
error carries an ``ErrorKind`` so callers can branch on the failure kind.
"""

from enum import StrEnum
from typing import Any

import httpx


class ErrorKind(StrEnum):
    """Failure kinds surfaced by the client."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    TRANSFER = "transfer"


class TransfertProError(Exception):
    """Base exception for all transfertpro errors."""

    kind: ErrorKind | None = None

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class ValidationError(TransfertProError):
    """A required input is missing or empty."""

    kind = ErrorKind.VALIDATION


class AuthenticationError(TransfertProError):
    """Login failed, or the token was rejected."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(
        self, message: str, *, response: httpx.Response | None = None, **context: Any
    ) -> None:
        if response is not None:
            context.setdefault("status_code", response.status_code)
        super().__init__(message, **context)
        self.response = response


class NotFoundError(TransfertProError):
    """Path, directory or file does not exist remotely."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str, *, path: str, **context: Any) -> None:
        super().__init__(message, path=path, **context)
        self.path = path


class TransferError(TransfertProError):
    """A data call failed (bad status, network failure, retries exhausted)."""

    kind = ErrorKind.TRANSFER

    def __init__(
        self,
        message: str,
        *,
        file_name: str | None = None,
        response: httpx.Response | None = None,
        **context: Any,
    ) -> None:
        if file_name is not None:
            context["file_name"] = file_name
        if response is not None:
            context.setdefault("status_code", response.status_code)
        super().__init__(message, **context)
        self.file_name = file_name
        self.response = response

    @property
    def status_code(self) -> int | None:
        """HTTP status of the failed call, if one was received."""
        return self.context.get("status_code")
