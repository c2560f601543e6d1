"""Host-side container configuration: port bindings, bind mounts, limits."""

from typing import Literal, Optional

from pydantic import Field

from dockyard.builders.base import ConfigBuilder, FrozenDict, WireModel


def normalize_port(port: int | str, protocol: str = "tcp") -> str:
    """Return Docker's ``<port>/<protocol>`` key for a container port."""
    port = str(port)
    if "/" in port:
        return port
    return f"{port}/{protocol}"


class PortBinding(WireModel):
    """A single host address a container port is published on."""

    host_ip: Optional[str] = Field(default=None, alias="HostIp")
    host_port: str = Field(alias="HostPort")


class RestartPolicy(WireModel):
    """Container restart behaviour."""

    name: Literal["", "no", "always", "unless-stopped", "on-failure"] = Field(
        alias="Name"
    )
    maximum_retry_count: Optional[int] = Field(
        default=None, ge=0, alias="MaximumRetryCount"
    )


class HostConfig(WireModel):
    """Docker ``HostConfig`` payload nested in a container config."""

    binds: Optional[tuple[str, ...]] = Field(default=None, alias="Binds")
    port_bindings: Optional[FrozenDict[str, tuple[PortBinding, ...]]] = Field(
        default=None, alias="PortBindings"
    )
    sysctls: Optional[FrozenDict[str, str]] = Field(default=None, alias="Sysctls")
    auto_remove: Optional[bool] = Field(default=None, alias="AutoRemove")
    network_mode: Optional[str] = Field(default=None, alias="NetworkMode")
    restart_policy: Optional[RestartPolicy] = Field(default=None, alias="RestartPolicy")
    memory: Optional[int] = Field(default=None, ge=0, alias="Memory")
    nano_cpus: Optional[int] = Field(default=None, ge=0, alias="NanoCpus")
    privileged: Optional[bool] = Field(default=None, alias="Privileged")

    @classmethod
    def builder(cls) -> "HostConfigBuilder":
        """Start an empty host config builder."""
        return HostConfigBuilder()


class HostConfigBuilder(ConfigBuilder[HostConfig]):
    """Fluent builder for :class:`HostConfig`. No field is required."""

    config_class = HostConfig

    def bind_port(
        self,
        container_port: int | str,
        host_port: int | str,
        host_ip: Optional[str] = None,
    ) -> "HostConfigBuilder":
        """Publish ``container_port`` on ``host_port`` (adds; repeated calls accumulate)."""
        key = normalize_port(container_port)
        bindings = dict(self._values.get("port_bindings") or {})
        bindings[key] = list(bindings.get(key, [])) + [
            {"host_ip": host_ip, "host_port": str(host_port)}
        ]
        return self._set("port_bindings", bindings)

    def binds(self, *binds: str) -> "HostConfigBuilder":
        """Replace all bind mounts with raw ``host:container[:mode]`` strings."""
        return self._set("binds", list(binds))

    def mount(
        self, host_path: str, container_path: str, read_only: bool = False
    ) -> "HostConfigBuilder":
        """Add a bind mount of ``host_path`` at ``container_path``."""
        bind = f"{host_path}:{container_path}"
        if read_only:
            bind += ":ro"
        return self._append("binds", bind)

    def sysctl(self, key: str, value: str) -> "HostConfigBuilder":
        """Set one kernel parameter (adds; same key overwrites)."""
        return self._put("sysctls", key, value)

    def auto_remove(self, enabled: bool = True) -> "HostConfigBuilder":
        return self._set("auto_remove", enabled)

    def network_mode(self, mode: str) -> "HostConfigBuilder":
        """Network mode: bridge, host, none, or container:<name|id>."""
        return self._set("network_mode", mode)

    def restart_policy(
        self, name: str, maximum_retry_count: Optional[int] = None
    ) -> "HostConfigBuilder":
        return self._set(
            "restart_policy",
            {"name": name, "maximum_retry_count": maximum_retry_count},
        )

    def memory(self, limit_bytes: int) -> "HostConfigBuilder":
        return self._set("memory", limit_bytes)

    def nano_cpus(self, nano_cpus: int) -> "HostConfigBuilder":
        """CPU quota in units of 1e-9 CPUs (1_000_000_000 == one core)."""
        return self._set("nano_cpus", nano_cpus)

    def privileged(self, enabled: bool = True) -> "HostConfigBuilder":
        return self._set("privileged", enabled)
