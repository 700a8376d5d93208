"""Custom exceptions for the status pipeline."""

from __future__ import annotations

RETRYABLE_STATUS_CODES = frozenset({408, 409, 425, 429})


class StatusError(Exception):
    """Base exception for all vibestatus errors."""


class TransportError(StatusError):
    """Base for failures talking to an upstream HTTP API."""


class ConnectionFailedError(TransportError):
    """Raised when the client cannot connect to the API."""


class RequestTimeoutError(TransportError):
    """Raised when a request to the API times out."""


class APIError(TransportError):
    """Raised when the API returns an error response (4xx/5xx)."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")

    @property
    def retryable(self) -> bool:
        return self.status_code >= 500 or self.status_code in RETRYABLE_STATUS_CODES


class ResponseFormatError(TransportError):
    """Raised when a 2xx response body is not the JSON we expected."""


class WeatherUnavailableError(StatusError):
    """Weather could not be fetched. Non-fatal: the prompt goes ungrounded."""


class CompletionTransientError(StatusError):
    """A completion attempt failed in a way worth retrying."""


class CompletionFatalError(StatusError):
    """The completion call failed for good; the fallback record is published."""


class PublishError(StatusError):
    """The status document could not be written."""
