"""Volume descriptors."""

from typing import Any

from pydantic import Field, field_validator

from dockyard.models.base import Descriptor, none_as_empty


class VolumeInfo(Descriptor):
    """A volume as reported by the daemon."""

    name: str = Field(alias="Name")
    driver: str = Field(default="local", alias="Driver")
    mountpoint: str = Field(default="", alias="Mountpoint")
    created_at: str = Field(default="", alias="CreatedAt")
    scope: str = Field(default="local", alias="Scope")
    labels: dict[str, str] = Field(default_factory=dict, alias="Labels")
    options: dict[str, str] = Field(default_factory=dict, alias="Options")

    @field_validator("labels", "options", mode="before")
    @classmethod
    def _mappings(cls, v: Any) -> Any:
        return none_as_empty(v, {})


class VolumeList(Descriptor):
    """Response of ``GET /volumes``."""

    volumes: tuple[VolumeInfo, ...] = Field(default=(), alias="Volumes")
    warnings: tuple[str, ...] = Field(default=(), alias="Warnings")

    @field_validator("volumes", "warnings", mode="before")
    @classmethod
    def _sequences(cls, v: Any) -> Any:
        return none_as_empty(v, ())


class VolumePruneReport(Descriptor):
    """Response of ``POST /volumes/prune``."""

    volumes_deleted: tuple[str, ...] = Field(default=(), alias="VolumesDeleted")
    space_reclaimed: int = Field(default=0, alias="SpaceReclaimed")

    @field_validator("volumes_deleted", mode="before")
    @classmethod
    def _deleted(cls, v: Any) -> Any:
        return none_as_empty(v, ())
