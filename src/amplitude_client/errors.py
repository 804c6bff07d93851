"""
Custom exceptions for the Amplitude client.

Provides:
- Typed exception hierarchy separating network failures from API failures
- Error context preservation for debugging
- The final OutcomeRecord attached to every ApiError
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from .models import OutcomeRecord


class AmplitudeError(Exception):
    """Base exception for all Amplitude client errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


class ConfigurationError(AmplitudeError):
    """Client configuration is missing or unusable."""

    pass


# =============================================================================
# Transport Errors
# =============================================================================


class TransportError(AmplitudeError):
    """Network-level failure. Never retried by the dispatcher."""

    pass


class TransportTimeoutError(TransportError):
    """The attempt did not complete within timeout_ms."""

    pass


class TransportConnectionError(TransportError):
    """Connection refused, reset, or could not be established."""

    pass


# =============================================================================
# API Errors
# =============================================================================


class ApiError(AmplitudeError):
    """
    The ingestion endpoint answered with a non-200 status.

    Raised when the status is non-retryable, or retryable but the retry
    budget is spent. ``response`` is the final attempt's OutcomeRecord.
    """

    def __init__(
        self,
        message: str,
        response: OutcomeRecord,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def retry_count(self) -> int:
        return self.response.retry_count


# =============================================================================
# Error Handling Utilities
# =============================================================================


def wrap_transport_error(
    exc: httpx.TransportError, context: dict[str, Any] | None = None
) -> TransportError:
    """
    Wrap an httpx transport exception in our typed error hierarchy.

    Args:
        exc: The original httpx exception
        context: Additional context for debugging

    Returns:
        Typed TransportError subclass
    """
    ctx = context or {}
    ctx['original_error'] = str(exc)
    ctx['error_type'] = type(exc).__name__

    if isinstance(exc, httpx.TimeoutException):
        return TransportTimeoutError(
            f"Amplitude request timed out: {exc}",
            context=ctx,
        )
    elif isinstance(exc, (httpx.ConnectError, httpx.ReadError, httpx.WriteError)):
        return TransportConnectionError(
            f"Amplitude connection failed: {exc}",
            context=ctx,
        )
    else:
        return TransportError(
            f"Amplitude transport error: {exc}",
            context=ctx,
        )
