"""
Exception types for the BCH consumer client.

Two failure kinds reach callers from an operation:

    - ValidationError: raised locally before any network call when an
      input fails its shape check. Subclasses TypeError.
    - TransportError: raised by the transport when the gateway could not
      be reached, answered with a non-2xx status, or sent a body that is
      not JSON. The ledger client never catches or wraps it.

ConfigurationError is raised at construction time only.

A gateway-reported logical failure (``{"success": false, ...}`` in a
normal 200 response) is not an error at this layer. It is returned as
data and the caller inspects ``success``.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ConsumerError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "TRANSPORT_ERROR_CODES",
]

# Machine-readable categories carried by TransportError.error_code
TRANSPORT_ERROR_CODES = ("TIMEOUT", "CONNECTION_FAILED", "HTTP_ERROR", "INVALID_JSON")


class ConsumerError(Exception):
    """Base class for all errors raised by bch_consumer."""


class ConfigurationError(ConsumerError, ValueError):
    """Client was constructed without a usable configuration."""


class ValidationError(ConsumerError, TypeError):
    """An operation input failed its type/shape check.

    Raised before the transport is touched, so no request was sent.
    """


class TransportError(ConsumerError):
    """The transport failed to complete a request.

    Args:
        message: Human-readable summary.
        error_code: One of TRANSPORT_ERROR_CODES.
        details: Diagnostic context (url, status_code, ...).
    """

    def __init__(
        self,
        message: str,
        *,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"TransportError({str(self)!r}, error_code={self.error_code!r})"
