# ============================================================================
# Tests for the httpx transport
# ============================================================================
"""
Tests for HttpxTransport.

Verifies:
- Body text is returned on 2xx
- Non-2xx, timeouts and connection errors map to TransportError
- The request URL is sent unchanged
"""

import httpx
import pytest

from donorperfect.clients.transport import HttpxTransport, Transport
from donorperfect.protocol.exceptions import TransportError

URL = "https://www.donorperfect.net/prod/xmlrequest.asp?apikey=K&action=dp_gifts&params=%40donor_id%3D7"


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestHttpxTransport:
    """Test transport behavior for different outcomes."""

    def test_implements_protocol(self) -> None:
        """Should satisfy the Transport protocol."""
        transport = _transport(lambda request: httpx.Response(200, text=""))
        assert isinstance(transport, Transport)
        transport.close()

    def test_returns_body_text(self) -> None:
        """Test that successful requests return the response text."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="<result></result>")

        with _transport(handler) as transport:
            assert transport.get(URL) == "<result></result>"

        assert seen[0].method == "GET"
        assert "params=%40donor_id%3D7" in str(seen[0].url)

    def test_http_error_status(self) -> None:
        """Test that 5xx responses raise TransportError without retry."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        with _transport(handler) as transport:
            with pytest.raises(TransportError, match="503") as exc_info:
                transport.get(URL)

        assert len(calls) == 1
        assert exc_info.value.error_code == "TRANSPORT_ERROR"
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    def test_timeout(self) -> None:
        """Test that timeouts raise TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with _transport(handler) as transport:
            with pytest.raises(TransportError, match="timed out"):
                transport.get(URL)

    def test_connection_error(self) -> None:
        """Test that connection failures raise TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with _transport(handler) as transport:
            with pytest.raises(TransportError, match="Connection error"):
                transport.get(URL)
