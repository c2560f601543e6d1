"""Unit tests for the httpx transport."""

import httpx
import pytest

from dockyard.client.transport import UNIX_BASE_URL, HttpxTransport, parse_endpoint
from dockyard.exceptions import (
    ConfigurationError,
    ConnectionFailedError,
    TransportError,
    TransportIOError,
    TransportTimeoutError,
)


def mock_transport(handler) -> HttpxTransport:
    return HttpxTransport(
        "tcp://docker.test:2375",
        api_version="1.41",
        transport=httpx.MockTransport(handler),
    )


class TestParseEndpoint:
    """Test Docker host string parsing."""

    def test_unix_scheme(self):
        """Test unix:// endpoints use the socket path."""
        assert parse_endpoint("unix:///var/run/docker.sock") == (
            UNIX_BASE_URL,
            "/var/run/docker.sock",
        )

    def test_bare_socket_path(self):
        """Test a bare path is treated as a Unix socket."""
        assert parse_endpoint("/tmp/docker.sock") == (UNIX_BASE_URL, "/tmp/docker.sock")

    def test_tcp_scheme(self):
        """Test tcp:// becomes plain http."""
        assert parse_endpoint("tcp://10.0.0.5:2375/") == ("http://10.0.0.5:2375", None)

    def test_https(self):
        """Test https endpoints pass through."""
        assert parse_endpoint("https://docker.example:2376") == (
            "https://docker.example:2376",
            None,
        )

    def test_unsupported_scheme(self):
        """Test unknown schemes are a configuration error."""
        with pytest.raises(ConfigurationError):
            parse_endpoint("ssh://user@host")


class TestHttpxTransport:
    """Test HttpxTransport.execute()."""

    @pytest.mark.asyncio
    async def test_request_is_versioned_and_passed_through(self):
        """Test the version prefix, query, headers and body reach the daemon."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["method"] = request.method
            seen["content_type"] = request.headers.get("content-type")
            seen["user_agent"] = request.headers.get("user-agent")
            seen["body"] = request.content
            return httpx.Response(201, content=b'{"Id": "abc"}', headers={"X-Test": "1"})

        transport = mock_transport(handler)
        response = await transport.execute(
            "POST",
            "/containers/create",
            headers={"Content-Type": "application/json"},
            body=b'{"Image": "alpine"}',
            params={"name": "test"},
        )
        await transport.close()

        assert seen["url"] == "http://docker.test:2375/v1.41/containers/create?name=test"
        assert seen["method"] == "POST"
        assert seen["content_type"] == "application/json"
        assert seen["user_agent"] == "dockyard"
        assert seen["body"] == b'{"Image": "alpine"}'
        assert response.status_code == 201
        assert response.body == b'{"Id": "abc"}'
        assert response.headers["x-test"] == "1"

    @pytest.mark.asyncio
    async def test_error_status_is_not_an_exception(self):
        """Test HTTP error statuses are returned, not raised."""
        transport = mock_transport(lambda request: httpx.Response(500, content=b"boom"))

        response = await transport.execute("GET", "/_ping")

        assert response.status_code == 500
        assert response.body == b"boom"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raised,expected",
        [
            (httpx.ConnectError("connection refused"), ConnectionFailedError),
            (httpx.ReadTimeout("timed out"), TransportTimeoutError),
            (httpx.ConnectTimeout("timed out"), TransportTimeoutError),
            (httpx.RemoteProtocolError("peer closed"), TransportIOError),
        ],
    )
    async def test_httpx_errors_are_mapped(self, raised, expected):
        """Test httpx failures become the matching TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise raised

        transport = mock_transport(handler)

        with pytest.raises(expected) as exc_info:
            await transport.execute("GET", "/_ping")

        assert isinstance(exc_info.value, TransportError)
        assert exc_info.value.context["endpoint"] == "tcp://docker.test:2375"
        assert exc_info.value.__cause__ is raised

    def test_construction_does_not_connect(self):
        """Test a unix transport can be built for a socket that does not exist."""
        transport = HttpxTransport("unix:///nonexistent/docker.sock")

        assert transport.endpoint == "unix:///nonexistent/docker.sock"
        assert "nonexistent" in repr(transport)
