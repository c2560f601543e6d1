"""Daemon-level descriptors."""

from pydantic import Field

from dockyard.models.base import Descriptor


class VersionInfo(Descriptor):
    """Response of ``GET /version``."""

    version: str = Field(default="", alias="Version")
    api_version: str = Field(default="", alias="ApiVersion")
    min_api_version: str = Field(default="", alias="MinAPIVersion")
    git_commit: str = Field(default="", alias="GitCommit")
    go_version: str = Field(default="", alias="GoVersion")
    os: str = Field(default="", alias="Os")
    arch: str = Field(default="", alias="Arch")
    kernel_version: str = Field(default="", alias="KernelVersion")
