"""Image descriptors."""

from typing import Any, Optional

from pydantic import Field, field_validator

from dockyard.models.base import Descriptor, none_as_empty


class ImageSummary(Descriptor):
    """One entry of ``GET /images/json``."""

    id: str = Field(alias="Id")
    parent_id: str = Field(default="", alias="ParentId")
    repo_tags: tuple[str, ...] = Field(default=(), alias="RepoTags")
    repo_digests: tuple[str, ...] = Field(default=(), alias="RepoDigests")
    created: int = Field(default=0, alias="Created")
    size: int = Field(default=0, alias="Size")
    shared_size: int = Field(default=-1, alias="SharedSize")
    virtual_size: Optional[int] = Field(default=None, alias="VirtualSize")
    labels: dict[str, str] = Field(default_factory=dict, alias="Labels")
    containers: int = Field(default=-1, alias="Containers")

    @field_validator("repo_tags", "repo_digests", mode="before")
    @classmethod
    def _sequences(cls, v: Any) -> Any:
        return none_as_empty(v, ())

    @field_validator("labels", mode="before")
    @classmethod
    def _labels(cls, v: Any) -> Any:
        return none_as_empty(v, {})

    @property
    def short_id(self) -> str:
        return self.id.removeprefix("sha256:")[:12]


class ImageInfo(Descriptor):
    """Low-level image details from ``GET /images/{name}/json``."""

    id: str = Field(alias="Id")
    repo_tags: tuple[str, ...] = Field(default=(), alias="RepoTags")
    repo_digests: tuple[str, ...] = Field(default=(), alias="RepoDigests")
    parent: str = Field(default="", alias="Parent")
    created: str = Field(default="", alias="Created")
    architecture: str = Field(default="", alias="Architecture")
    os: str = Field(default="", alias="Os")
    size: int = Field(default=0, alias="Size")
    config: dict[str, Any] = Field(default_factory=dict, alias="Config")

    @field_validator("repo_tags", "repo_digests", mode="before")
    @classmethod
    def _sequences(cls, v: Any) -> Any:
        return none_as_empty(v, ())

    @field_validator("config", mode="before")
    @classmethod
    def _config(cls, v: Any) -> Any:
        return none_as_empty(v, {})


class ImageDeleteItem(Descriptor):
    """One entry of ``DELETE /images/{name}``: an untagged or deleted reference."""

    untagged: Optional[str] = Field(default=None, alias="Untagged")
    deleted: Optional[str] = Field(default=None, alias="Deleted")


class PullProgress(Descriptor):
    """One line of the newline-delimited JSON stream of an image pull.

    A line with ``error`` set means the pull failed even though the daemon
    already answered 200.
    """

    status: str = Field(default="", alias="status")
    id: Optional[str] = Field(default=None, alias="id")
    progress: Optional[str] = Field(default=None, alias="progress")
    error: Optional[str] = Field(default=None, alias="error")
    error_detail: Optional[dict[str, Any]] = Field(default=None, alias="errorDetail")
