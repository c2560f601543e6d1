"""Network descriptors."""

from typing import Any

from pydantic import Field, field_validator

from dockyard.models.base import Descriptor, none_as_empty


class CreatedNetwork(Descriptor):
    """Response of a successful network creation."""

    id: str = Field(alias="Id")
    warning: str = Field(default="", alias="Warning")

    @field_validator("warning", mode="before")
    @classmethod
    def _warning(cls, v: Any) -> Any:
        return none_as_empty(v, "")


class NetworkInfo(Descriptor):
    """A network as reported by ``GET /networks`` and ``GET /networks/{id}``."""

    id: str = Field(alias="Id")
    name: str = Field(default="", alias="Name")
    created: str = Field(default="", alias="Created")
    scope: str = Field(default="", alias="Scope")
    driver: str = Field(default="", alias="Driver")
    enable_ipv6: bool = Field(default=False, alias="EnableIPv6")
    internal: bool = Field(default=False, alias="Internal")
    attachable: bool = Field(default=False, alias="Attachable")
    ingress: bool = Field(default=False, alias="Ingress")
    ipam: dict[str, Any] = Field(default_factory=dict, alias="IPAM")
    containers: dict[str, Any] = Field(default_factory=dict, alias="Containers")
    options: dict[str, str] = Field(default_factory=dict, alias="Options")
    labels: dict[str, str] = Field(default_factory=dict, alias="Labels")

    @field_validator("ipam", "containers", "options", "labels", mode="before")
    @classmethod
    def _mappings(cls, v: Any) -> Any:
        return none_as_empty(v, {})
