"""Network creation payload, IPAM settings and their builders."""

from typing import Mapping, Optional

from pydantic import Field

from dockyard.builders.base import ConfigBuilder, FrozenDict, WireModel


class IPAMConfig(WireModel):
    """IP address management settings for a network."""

    driver: Optional[str] = Field(default=None, alias="Driver")
    config: Optional[tuple[FrozenDict[str, str], ...]] = Field(default=None, alias="Config")
    options: Optional[FrozenDict[str, str]] = Field(default=None, alias="Options")

    @classmethod
    def builder(cls) -> "IPAMConfigBuilder":
        return IPAMConfigBuilder()


class IPAMConfigBuilder(ConfigBuilder[IPAMConfig]):
    """Fluent builder for :class:`IPAMConfig`. No field is required."""

    config_class = IPAMConfig

    def driver(self, driver: str) -> "IPAMConfigBuilder":
        return self._set("driver", driver)

    def add_config(self, config: Mapping[str, str]) -> "IPAMConfigBuilder":
        """Add one pool, e.g. ``{"Subnet": "172.20.0.0/16", "Gateway": "172.20.0.1"}``."""
        return self._append("config", dict(config))

    def option(self, key: str, value: str) -> "IPAMConfigBuilder":
        return self._put("options", key, value)


class NetworkConfig(WireModel):
    """Validated payload for ``POST /networks/create``."""

    name: str = Field(alias="Name", min_length=1)
    check_duplicate: Optional[bool] = Field(default=None, alias="CheckDuplicate")
    driver: Optional[str] = Field(default=None, alias="Driver")
    internal: Optional[bool] = Field(default=None, alias="Internal")
    attachable: Optional[bool] = Field(default=None, alias="Attachable")
    ingress: Optional[bool] = Field(default=None, alias="Ingress")
    ipam: Optional[IPAMConfig] = Field(default=None, alias="IPAM")
    enable_ipv6: Optional[bool] = Field(default=None, alias="EnableIPv6")
    options: Optional[FrozenDict[str, str]] = Field(default=None, alias="Options")
    labels: Optional[FrozenDict[str, str]] = Field(default=None, alias="Labels")

    @classmethod
    def with_name(cls, name: str) -> "NetworkConfigBuilder":
        """Start a builder with the required network name already set."""
        return NetworkConfigBuilder().name(name)

    @classmethod
    def builder(cls) -> "NetworkConfigBuilder":
        return NetworkConfigBuilder()


class NetworkConfigBuilder(ConfigBuilder[NetworkConfig]):
    """Fluent builder for :class:`NetworkConfig`.

    ``options``/``labels`` replace; ``option``/``label`` add one entry.
    """

    config_class = NetworkConfig
    required_fields = ("name",)

    def name(self, name: str) -> "NetworkConfigBuilder":
        return self._set("name", name)

    def check_duplicate(self, enabled: bool = True) -> "NetworkConfigBuilder":
        return self._set("check_duplicate", enabled)

    def driver(self, driver: str) -> "NetworkConfigBuilder":
        """Network driver, e.g. ``bridge`` or ``overlay``."""
        return self._set("driver", driver)

    def internal(self, enabled: bool = True) -> "NetworkConfigBuilder":
        return self._set("internal", enabled)

    def attachable(self, enabled: bool = True) -> "NetworkConfigBuilder":
        return self._set("attachable", enabled)

    def ingress(self, enabled: bool = True) -> "NetworkConfigBuilder":
        return self._set("ingress", enabled)

    def ipam(self, ipam: Optional[IPAMConfig]) -> "NetworkConfigBuilder":
        return self._set("ipam", ipam)

    def enable_ipv6(self, enabled: bool = True) -> "NetworkConfigBuilder":
        return self._set("enable_ipv6", enabled)

    def options(self, options: Mapping[str, str]) -> "NetworkConfigBuilder":
        return self._set("options", dict(options))

    def option(self, key: str, value: str) -> "NetworkConfigBuilder":
        return self._put("options", key, value)

    def labels(self, labels: Mapping[str, str]) -> "NetworkConfigBuilder":
        return self._set("labels", dict(labels))

    def label(self, key: str, value: str) -> "NetworkConfigBuilder":
        return self._put("labels", key, value)
