"""Configuration builders for Docker Engine API payloads.

Each payload is an immutable pydantic model that can only be obtained from
its builder's ``build()`` step (or by validating a wire dict), so a
partially-filled config never reaches the client.
"""

from dockyard.builders.base import ConfigBuilder, WireModel
from dockyard.builders.container import (
    ContainerConfig,
    ContainerConfigBuilder,
    HealthCheck,
)
from dockyard.builders.filters import Filters, FiltersBuilder
from dockyard.builders.host import (
    HostConfig,
    HostConfigBuilder,
    PortBinding,
    RestartPolicy,
)
from dockyard.builders.image import (
    ImagePullConfig,
    ImagePullConfigBuilder,
    RegistryAuth,
)
from dockyard.builders.network import (
    IPAMConfig,
    IPAMConfigBuilder,
    NetworkConfig,
    NetworkConfigBuilder,
)
from dockyard.builders.volume import VolumeConfig, VolumeConfigBuilder

__all__ = [
    # Base
    "ConfigBuilder",
    "WireModel",
    # Containers
    "ContainerConfig",
    "ContainerConfigBuilder",
    "HealthCheck",
    "HostConfig",
    "HostConfigBuilder",
    "PortBinding",
    "RestartPolicy",
    # Images
    "ImagePullConfig",
    "ImagePullConfigBuilder",
    "RegistryAuth",
    # Networks
    "IPAMConfig",
    "IPAMConfigBuilder",
    "NetworkConfig",
    "NetworkConfigBuilder",
    # Volumes
    "VolumeConfig",
    "VolumeConfigBuilder",
    # Filters
    "Filters",
    "FiltersBuilder",
]
