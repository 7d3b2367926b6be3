"""
HTTP access to the gateway.

BchClient only ever calls ``post_json`` and ``get_json`` on whatever it
was given, so anything with those two coroutines will do. HttpxTransport
is what you get by default.

Every call returns the decoded JSON body as-is (object, array or bare
number). Anything other than a 2xx answer with a JSON body raises
TransportError; redirects are not followed.

    error_code          raised when
    TIMEOUT             httpx timed out
    CONNECTION_FAILED   the gateway could not be reached
    HTTP_ERROR          non-2xx status, or any other httpx failure
    INVALID_JSON        the body is not decodable JSON
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from bch_consumer.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0


@runtime_checkable
class Transport(Protocol):
    """Async transport for gateway POST/GET requests."""

    async def post_json(self, url: str, payload: dict[str, Any]) -> Any:
        """POST a JSON body and return the decoded JSON response.

        Args:
            url: Full endpoint URL.
            payload: Request body, serialized as JSON.

        Returns:
            Decoded JSON response body.

        Raises:
            Exception: On transport-level failures. HttpxTransport raises
                TransportError; other implementations may raise their own.
        """
        ...

    async def get_json(self, url: str) -> Any:
        """GET a URL and return the decoded JSON response."""
        ...


class HttpxTransport:
    """Default transport using httpx.AsyncClient.

    A new AsyncClient is opened per request. No pooling, no retries.

    Args:
        timeout_s: Request timeout in seconds.
        headers: Additional headers to include in every request.
    """

    def __init__(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._timeout_s = timeout_s
        self._headers = headers or {}

    @property
    def timeout_s(self) -> float:
        """Request timeout in seconds."""
        return self._timeout_s

    async def post_json(self, url: str, payload: dict[str, Any]) -> Any:
        """Send a POST request with a JSON body via httpx."""
        logger.debug("POST %s", url)
        return await self._request("POST", url, payload)

    async def get_json(self, url: str) -> Any:
        """Send a GET request via httpx."""
        logger.debug("GET %s", url)
        return await self._request("GET", url, None)

    async def _request(self, method: str, url: str, payload: dict[str, Any] | None) -> Any:
        headers = {"Accept": "application/json", **self._headers}
        if payload is not None:
            headers["Content-Type"] = "application/json"

        try:
            async with httpx.AsyncClient(timeout=self._timeout_s) as client:
                response = await client.request(
                    method,
                    url,
                    json=payload,
                    headers=headers,
                )
        except httpx.TimeoutException as e:
            logger.debug("%s %s timed out after %ss", method, url, self._timeout_s)
            raise TransportError(
                f"HTTP request timed out after {self._timeout_s}s",
                error_code="TIMEOUT",
                details={
                    "url": url,
                    "timeout_s": self._timeout_s,
                },
            ) from e
        except httpx.ConnectError as e:
            logger.debug("%s %s connection failed: %s", method, url, e)
            raise TransportError(
                f"Failed to connect to {url}",
                error_code="CONNECTION_FAILED",
                details={
                    "url": url,
                },
            ) from e
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise TransportError(
                f"HTTP error: {e}",
                error_code="HTTP_ERROR",
                details={
                    "url": url,
                    "error": str(e),
                },
            ) from e

        if not response.is_success:
            logger.debug("%s %s returned HTTP %s", method, url, response.status_code)
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                error_code="HTTP_ERROR",
                details={
                    "url": url,
                    "status_code": response.status_code,
                    "reason": response.reason_phrase,
                    "body_preview": _body_preview(response),
                },
            )

        try:
            return response.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError both land here
            raise TransportError(
                "Response was not valid JSON",
                error_code="INVALID_JSON",
                details={
                    "url": url,
                    "status_code": response.status_code,
                    "body_preview": _body_preview(response),
                },
            ) from e


def _body_preview(response: httpx.Response, limit: int = 200) -> str:
    """First bytes of the body, decoded leniently for diagnostics."""
    return response.content[:limit].decode("utf-8", errors="replace")
