from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a role lacks permission for a report or an action."""


class UnknownReportError(DomainError):
    """Raised when a report name has no definition."""


class FetchError(DomainError):
    """Raised when the HR API is unreachable or answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: str = "",
        server_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url
        self.server_message = server_message


class ActionInProgressError(DomainError):
    """Raised when the same action on the same record is already in flight."""
