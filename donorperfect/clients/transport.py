# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (DonorPerfect)
# Description: HTTP transport for the DonorPerfect XML API.
# ============================================================================
"""
DonorPerfect Transport

Single Responsibility: perform one GET request and return the body text.
All httpx failures are mapped to TransportError; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from donorperfect.protocol.exceptions import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@runtime_checkable
class Transport(Protocol):
    """
    Interface for the HTTP collaborator.

    Implementations must raise TransportError on network, timeout or
    non-2xx failures.
    """

    def get(self, url: str) -> str:
        """Perform a GET request and return the response body."""
        ...

    def close(self) -> None:
        """Release any held connections."""
        ...


class HttpxTransport:
    """
    Synchronous transport on a reused httpx.Client.

    Example:
        with HttpxTransport(timeout=10) as transport:
            body = transport.get("https://www.donorperfect.net/prod/xmlrequest.asp?...")
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, client: httpx.Client | None = None):
        """
        Initialize transport.

        Args:
            timeout: Request timeout in seconds
            client: Preconfigured httpx.Client (owned by the transport from now on)
        """
        self.timeout = timeout
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/xml, text/xml"},
        )

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()

    def get(self, url: str) -> str:
        """
        Perform a GET request.

        Args:
            url: Absolute URL with query string

        Returns:
            Response body text

        Raises:
            TransportError: On timeout, connection failure or non-2xx status
        """
        try:
            response = self._client.get(url)
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            logger.error(f"DonorPerfect HTTP error: status={e.response.status_code}")
            raise TransportError(f"HTTP {e.response.status_code} from DonorPerfect") from e
        except httpx.TimeoutException as e:
            logger.error(f"DonorPerfect request timed out: {e}")
            raise TransportError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            logger.error(f"DonorPerfect connection error: {e}")
            raise TransportError(f"Connection error: {e}") from e

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()
