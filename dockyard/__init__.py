"""Dockyard: typed async client for the Docker Engine API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dockyard")
except PackageNotFoundError:
    # Package is not installed, use fallback
    __version__ = "0.0.0.dev"

from dockyard.builders import (  # noqa: E402
    ContainerConfig,
    Filters,
    HostConfig,
    ImagePullConfig,
    NetworkConfig,
    RegistryAuth,
    VolumeConfig,
)
from dockyard.client import ApiResult, DockerClient, Err, Ok, Operation  # noqa: E402
from dockyard.exceptions import (  # noqa: E402
    ApiError,
    BuildError,
    DockyardError,
    TransportError,
)
from dockyard.logging_config import setup_logging  # noqa: E402

__all__ = [
    "__version__",
    "ApiError",
    "ApiResult",
    "BuildError",
    "ContainerConfig",
    "DockerClient",
    "DockyardError",
    "Err",
    "Filters",
    "HostConfig",
    "ImagePullConfig",
    "NetworkConfig",
    "Ok",
    "Operation",
    "RegistryAuth",
    "TransportError",
    "VolumeConfig",
    "setup_logging",
]
