"""Shared pytest fixtures."""

from typing import Callable

import httpx
import pytest
import structlog

from dockyard.client.client import DockerClient
from dockyard.client.transport import HttpxTransport
from dockyard.config import reset_settings


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Isolate tests from the caller's Docker environment and cached settings."""
    for var in (
        "DOCKER_HOST",
        "DOCKER_API_VERSION",
        "DOCKER_TIMEOUT_SECONDS",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()
    structlog.reset_defaults()


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Requests seen by the mock daemon, in order."""
    return []


@pytest.fixture
def make_client(recorded_requests) -> Callable[..., DockerClient]:
    """Factory for a DockerClient talking to an httpx.MockTransport handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> DockerClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        transport = HttpxTransport(
            "tcp://docker.test:2375",
            api_version="1.40",
            timeout=5.0,
            transport=httpx.MockTransport(recording_handler),
        )
        return DockerClient(transport=transport)

    return factory
