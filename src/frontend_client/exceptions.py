"""Client-specific exceptions."""

from __future__ import annotations


class FrontendClientError(Exception):
    """Base exception for all frontend client failures."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.cause = cause

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        if self.url is None:
            return str(self.args[0])
        return f"{self.args[0]} ({self.url})"


class FrontendClientValidationError(FrontendClientError):
    """Raised when a request cannot be put on the wire as given."""


class InterceptorRejection(FrontendClientError):
    """Raised when the request interceptor vetoes a call."""


class TransportError(FrontendClientError):
    """Raised by transports for failures below the HTTP layer."""


class TransportNetworkError(TransportError):
    """Raised for connection-level failures like DNS and TCP errors."""


class TransportTimeoutError(TransportError):
    """Raised when the transport gives up waiting on the server."""


class ConfigurationWarning(UserWarning):
    """Category for option values that were ignored instead of applied."""
