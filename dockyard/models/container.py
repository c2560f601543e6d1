"""Container descriptors."""

from enum import Enum, IntEnum
from typing import Any, Optional

from pydantic import Field, field_validator

from dockyard.models.base import Descriptor, none_as_empty


class WaitCondition(str, Enum):
    """Condition ``POST /containers/{id}/wait`` blocks on."""

    NOT_RUNNING = "not-running"
    NEXT_EXIT = "next-exit"
    REMOVED = "removed"


class ChangeKind(IntEnum):
    """Kind of a filesystem change reported by ``/containers/{id}/changes``."""

    MODIFIED = 0
    ADDED = 1
    DELETED = 2


class CreatedContainer(Descriptor):
    """Response of a successful container creation."""

    id: str = Field(alias="Id")
    warnings: tuple[str, ...] = Field(default=(), alias="Warnings")

    @field_validator("warnings", mode="before")
    @classmethod
    def _warnings(cls, v: Any) -> Any:
        return none_as_empty(v, ())


class ContainerSummary(Descriptor):
    """One entry of ``GET /containers/json``."""

    id: str = Field(alias="Id")
    names: tuple[str, ...] = Field(default=(), alias="Names")
    image: str = Field(default="", alias="Image")
    image_id: str = Field(default="", alias="ImageID")
    command: str = Field(default="", alias="Command")
    created: int = Field(default=0, alias="Created")
    state: str = Field(default="", alias="State")
    status: str = Field(default="", alias="Status")
    labels: dict[str, str] = Field(default_factory=dict, alias="Labels")
    ports: tuple[dict[str, Any], ...] = Field(default=(), alias="Ports")

    @field_validator("names", "ports", mode="before")
    @classmethod
    def _sequences(cls, v: Any) -> Any:
        return none_as_empty(v, ())

    @field_validator("labels", mode="before")
    @classmethod
    def _labels(cls, v: Any) -> Any:
        return none_as_empty(v, {})

    @property
    def short_id(self) -> str:
        return self.id[:12]

    @property
    def name(self) -> str:
        """Primary name without the leading slash."""
        return self.names[0].lstrip("/") if self.names else ""


class ContainerState(Descriptor):
    """Runtime state block of ``GET /containers/{id}/json``."""

    status: str = Field(default="", alias="Status")
    running: bool = Field(default=False, alias="Running")
    paused: bool = Field(default=False, alias="Paused")
    restarting: bool = Field(default=False, alias="Restarting")
    oom_killed: bool = Field(default=False, alias="OOMKilled")
    dead: bool = Field(default=False, alias="Dead")
    pid: int = Field(default=0, alias="Pid")
    exit_code: int = Field(default=0, alias="ExitCode")
    error: str = Field(default="", alias="Error")
    started_at: str = Field(default="", alias="StartedAt")
    finished_at: str = Field(default="", alias="FinishedAt")


class ContainerInfo(Descriptor):
    """Low-level container details from ``GET /containers/{id}/json``."""

    id: str = Field(alias="Id")
    name: str = Field(default="", alias="Name")
    created: str = Field(default="", alias="Created")
    path: str = Field(default="", alias="Path")
    args: tuple[str, ...] = Field(default=(), alias="Args")
    state: ContainerState = Field(default_factory=ContainerState, alias="State")
    image: str = Field(default="", alias="Image")
    restart_count: int = Field(default=0, alias="RestartCount")
    driver: str = Field(default="", alias="Driver")
    platform: str = Field(default="", alias="Platform")
    size_rw: Optional[int] = Field(default=None, alias="SizeRw")
    size_root_fs: Optional[int] = Field(default=None, alias="SizeRootFs")
    config: dict[str, Any] = Field(default_factory=dict, alias="Config")
    host_config: dict[str, Any] = Field(default_factory=dict, alias="HostConfig")
    network_settings: dict[str, Any] = Field(
        default_factory=dict, alias="NetworkSettings"
    )

    @field_validator("args", mode="before")
    @classmethod
    def _args(cls, v: Any) -> Any:
        return none_as_empty(v, ())

    @field_validator("config", "host_config", "network_settings", mode="before")
    @classmethod
    def _mappings(cls, v: Any) -> Any:
        return none_as_empty(v, {})

    @property
    def short_id(self) -> str:
        return self.id[:12]

    @property
    def display_name(self) -> str:
        """Name without the leading slash the daemon adds."""
        return self.name.lstrip("/")


class WaitError(Descriptor):
    message: str = Field(default="", alias="Message")


class WaitStatus(Descriptor):
    """Result of ``POST /containers/{id}/wait``."""

    status_code: int = Field(alias="StatusCode")
    error: Optional[WaitError] = Field(default=None, alias="Error")


class FileSystemChange(Descriptor):
    """One entry of ``GET /containers/{id}/changes``."""

    path: str = Field(alias="Path")
    kind: ChangeKind = Field(alias="Kind")


class ProcessList(Descriptor):
    """Result of ``GET /containers/{id}/top``: ``ps`` column titles and rows."""

    titles: tuple[str, ...] = Field(default=(), alias="Titles")
    processes: tuple[tuple[str, ...], ...] = Field(default=(), alias="Processes")

    @field_validator("titles", "processes", mode="before")
    @classmethod
    def _sequences(cls, v: Any) -> Any:
        return none_as_empty(v, ())

    def as_dicts(self) -> list[dict[str, str]]:
        """Rows keyed by column title."""
        return [dict(zip(self.titles, row)) for row in self.processes]
