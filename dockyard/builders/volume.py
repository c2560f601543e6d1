"""Volume creation payload and builder."""

from typing import Mapping, Optional

from pydantic import Field

from dockyard.builders.base import ConfigBuilder, FrozenDict, WireModel


class VolumeConfig(WireModel):
    """Validated payload for ``POST /volumes/create``.

    Every field is optional: the daemon generates a name when none is given.
    """

    name: Optional[str] = Field(default=None, alias="Name")
    driver: Optional[str] = Field(default=None, alias="Driver")
    driver_opts: Optional[FrozenDict[str, str]] = Field(default=None, alias="DriverOpts")
    labels: Optional[FrozenDict[str, str]] = Field(default=None, alias="Labels")

    @classmethod
    def builder(cls) -> "VolumeConfigBuilder":
        return VolumeConfigBuilder()


class VolumeConfigBuilder(ConfigBuilder[VolumeConfig]):
    """Fluent builder for :class:`VolumeConfig`."""

    config_class = VolumeConfig

    def name(self, name: str) -> "VolumeConfigBuilder":
        return self._set("name", name)

    def driver(self, driver: str) -> "VolumeConfigBuilder":
        return self._set("driver", driver)

    def driver_opts(self, opts: Mapping[str, str]) -> "VolumeConfigBuilder":
        """Replace all driver options."""
        return self._set("driver_opts", dict(opts))

    def driver_opt(self, key: str, value: str) -> "VolumeConfigBuilder":
        """Add one driver option."""
        return self._put("driver_opts", key, value)

    def labels(self, labels: Mapping[str, str]) -> "VolumeConfigBuilder":
        return self._set("labels", dict(labels))

    def label(self, key: str, value: str) -> "VolumeConfigBuilder":
        return self._put("labels", key, value)
