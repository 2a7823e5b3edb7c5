from __future__ import annotations


class HelpdeskConfigError(RuntimeError):
    """Raised when the Helpdesk widget configuration is missing or invalid."""


class HelpdeskTransportError(RuntimeError):
    """Raised when a Helpdesk API call fails (network, timeout, HTTP status or JSON body)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TokenCacheError(RuntimeError):
    """Raised when the token cache store cannot be accessed."""
