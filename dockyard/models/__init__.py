"""Read-only descriptors decoded from Docker daemon responses."""

from dockyard.models.base import Descriptor
from dockyard.models.container import (
    ChangeKind,
    ContainerInfo,
    ContainerState,
    ContainerSummary,
    CreatedContainer,
    FileSystemChange,
    ProcessList,
    WaitCondition,
    WaitError,
    WaitStatus,
)
from dockyard.models.image import (
    ImageDeleteItem,
    ImageInfo,
    ImageSummary,
    PullProgress,
)
from dockyard.models.network import CreatedNetwork, NetworkInfo
from dockyard.models.system import VersionInfo
from dockyard.models.volume import VolumeInfo, VolumeList, VolumePruneReport

__all__ = [
    "Descriptor",
    # Containers
    "ChangeKind",
    "ContainerInfo",
    "ContainerState",
    "ContainerSummary",
    "CreatedContainer",
    "FileSystemChange",
    "ProcessList",
    "WaitCondition",
    "WaitError",
    "WaitStatus",
    # Images
    "ImageDeleteItem",
    "ImageInfo",
    "ImageSummary",
    "PullProgress",
    # Networks
    "CreatedNetwork",
    "NetworkInfo",
    # Volumes
    "VolumeInfo",
    "VolumeList",
    "VolumePruneReport",
    # System
    "VersionInfo",
]
