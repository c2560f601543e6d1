"""Transport layer for talking to the Docker daemon.

The core only relies on the :class:`Transport` interface. The default
implementation, :class:`HttpxTransport`, speaks HTTP/1.1 with httpx over a
Unix domain socket or TCP. Connections are opened lazily on the first
request and pooled by httpx; no retries happen at this layer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Mapping, Optional

import httpx

from dockyard.config import DEFAULT_API_VERSION, DEFAULT_TIMEOUT_SECONDS
from dockyard.exceptions import (
    ConfigurationError,
    ConnectionFailedError,
    TransportIOError,
    TransportTimeoutError,
)
from dockyard.logging_config import get_logger

logger = get_logger(__name__)

UNIX_BASE_URL = "http://docker"


@dataclass(frozen=True)
class RawResponse:
    """Status code, headers and body bytes exactly as received."""

    status_code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)


class Transport(ABC):
    """Abstract transport to the Docker daemon.

    Implementations perform exactly one network exchange per ``execute`` call
    and raise :class:`~dockyard.exceptions.TransportError` subclasses when no
    response could be obtained. HTTP error statuses are *not* errors at this
    layer; they are returned as ordinary responses.
    """

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """Human-readable daemon address, used in error messages and logs."""
        pass

    @abstractmethod
    async def execute(
        self,
        method: str,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> RawResponse:
        """Send one request and return the raw response.

        Args:
            method: HTTP method
            path: API path without version prefix (e.g. "/containers/create")
            headers: Extra request headers
            body: Encoded request body
            params: Already-encoded query parameters

        Returns:
            The daemon's response, whatever its status code

        Raises:
            ConnectionFailedError: If the daemon could not be reached
            TransportTimeoutError: If the exchange timed out
            TransportIOError: For any other low-level failure
        """
        pass

    async def close(self) -> None:
        """Release pooled connections."""
        pass


def parse_endpoint(endpoint: str) -> tuple[str, Optional[str]]:
    """Split a Docker host string into ``(base_url, unix_socket_path)``.

    Accepts ``unix:///path``, a bare socket path, ``tcp://host:port``,
    ``http://host:port`` and ``https://host:port``.

    Raises:
        ConfigurationError: If the scheme is not supported
    """
    if endpoint.startswith("unix://"):
        return UNIX_BASE_URL, endpoint[len("unix://"):]
    if endpoint.startswith("/"):
        return UNIX_BASE_URL, endpoint
    if endpoint.startswith("tcp://"):
        return "http://" + endpoint[len("tcp://"):].rstrip("/"), None
    if endpoint.startswith(("http://", "https://")):
        return endpoint.rstrip("/"), None
    raise ConfigurationError(
        f"Unsupported Docker endpoint: {endpoint}", endpoint=endpoint
    )


class HttpxTransport(Transport):
    """httpx-based transport over a Unix socket or TCP.

    Usage:
        transport = HttpxTransport("unix:///var/run/docker.sock")
        response = await transport.execute("GET", "/_ping")
        await transport.close()
    """

    def __init__(
        self,
        endpoint: str,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the transport without connecting.

        Args:
            endpoint: Docker host string (see :func:`parse_endpoint`)
            api_version: API version used as path prefix ("1.40" -> "/v1.40")
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport override (used by tests)

        Raises:
            ConfigurationError: If the endpoint is malformed or the timeout
                is not positive
        """
        if timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {timeout}")

        base_url, socket_path = parse_endpoint(endpoint)
        self._endpoint = endpoint
        self.api_version = api_version

        if transport is None and socket_path is not None:
            transport = httpx.AsyncHTTPTransport(uds=socket_path)

        self._client = httpx.AsyncClient(
            base_url=f"{base_url}/v{api_version}",
            transport=transport,
            timeout=timeout,
            headers={"User-Agent": "dockyard"},
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def execute(
        self,
        method: str,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> RawResponse:
        try:
            response = await self._client.request(
                method,
                path,
                headers=dict(headers or {}),
                content=body,
                params=dict(params or {}),
            )
        except httpx.ConnectError as e:
            raise ConnectionFailedError(self._endpoint, str(e) or type(e).__name__) from e
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(self._endpoint, str(e) or type(e).__name__) from e
        except httpx.TransportError as e:
            raise TransportIOError(self._endpoint, str(e) or type(e).__name__) from e

        return RawResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    async def close(self) -> None:
        await self._client.aclose()
        logger.debug("docker_transport_closed", endpoint=self._endpoint)

    def __repr__(self) -> str:
        return f"<HttpxTransport endpoint={self._endpoint!r} api_version={self.api_version!r}>"
