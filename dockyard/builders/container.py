"""Container creation payload and its fluent builder.

Usage:
    config = (
        ContainerConfig.with_image("alpine")
        .name("test")
        .cmd("sleep", "60")
        .add_env("MODE", "dev")
        .build()
    )

Collection setters come in two flavours. ``env``, ``cmd``, ``entrypoint``,
``ports``, ``volumes``, ``labels``, ``shell`` and ``on_build`` replace the
whole collection; their ``add_*``/``expose_port``/``label`` counterparts
append to it.
"""

from typing import Any, ClassVar, Iterable, Mapping, Optional

from pydantic import Field

from dockyard.builders.base import ConfigBuilder, FrozenDict, WireModel
from dockyard.builders.host import HostConfig, normalize_port

CONTAINER_NAME_PATTERN = r"^/?[a-zA-Z0-9][a-zA-Z0-9_.-]+$"


class HealthCheck(WireModel):
    """Container health check. Durations are in nanoseconds."""

    test: tuple[str, ...] = Field(alias="Test")
    interval: Optional[int] = Field(default=None, ge=0, alias="Interval")
    timeout: Optional[int] = Field(default=None, ge=0, alias="Timeout")
    retries: Optional[int] = Field(default=None, ge=0, alias="Retries")
    start_period: Optional[int] = Field(default=None, ge=0, alias="StartPeriod")


class ContainerConfig(WireModel):
    """Validated payload for ``POST /containers/create``.

    ``name`` and ``platform`` are sent as query parameters; everything else
    forms the JSON body.
    """

    QUERY_FIELDS: ClassVar[frozenset[str]] = frozenset({"name", "platform"})

    name: Optional[str] = Field(
        default=None, alias="name", pattern=CONTAINER_NAME_PATTERN
    )
    platform: Optional[str] = Field(default=None, alias="platform")

    image: str = Field(alias="Image", min_length=1)
    hostname: Optional[str] = Field(default=None, alias="Hostname")
    domain_name: Optional[str] = Field(default=None, alias="Domainname")
    user: Optional[str] = Field(default=None, alias="User")
    attach_stdin: Optional[bool] = Field(default=None, alias="AttachStdin")
    attach_stdout: Optional[bool] = Field(default=None, alias="AttachStdout")
    attach_stderr: Optional[bool] = Field(default=None, alias="AttachStderr")
    exposed_ports: Optional[FrozenDict[str, FrozenDict[str, Any]]] = Field(
        default=None, alias="ExposedPorts"
    )
    tty: Optional[bool] = Field(default=None, alias="Tty")
    open_stdin: Optional[bool] = Field(default=None, alias="OpenStdin")
    stdin_once: Optional[bool] = Field(default=None, alias="StdinOnce")
    env: Optional[tuple[str, ...]] = Field(default=None, alias="Env")
    cmd: Optional[tuple[str, ...]] = Field(default=None, alias="Cmd")
    health_check: Optional[HealthCheck] = Field(default=None, alias="Healthcheck")
    args_escaped: Optional[bool] = Field(default=None, alias="ArgsEscaped")
    volumes: Optional[FrozenDict[str, FrozenDict[str, Any]]] = Field(
        default=None, alias="Volumes"
    )
    working_dir: Optional[str] = Field(default=None, alias="WorkingDir")
    entrypoint: Optional[tuple[str, ...]] = Field(default=None, alias="Entrypoint")
    network_disabled: Optional[bool] = Field(default=None, alias="NetworkDisabled")
    mac_address: Optional[str] = Field(default=None, alias="MacAddress")
    on_build: Optional[tuple[str, ...]] = Field(default=None, alias="OnBuild")
    labels: Optional[FrozenDict[str, str]] = Field(default=None, alias="Labels")
    stop_signal: Optional[str] = Field(default=None, alias="StopSignal")
    stop_timeout: Optional[int] = Field(default=None, ge=0, alias="StopTimeout")
    shell: Optional[tuple[str, ...]] = Field(default=None, alias="Shell")
    host_config: Optional[HostConfig] = Field(default=None, alias="HostConfig")

    @classmethod
    def with_image(cls, image: str) -> "ContainerConfigBuilder":
        """Start a builder with the required image already set."""
        return ContainerConfigBuilder().image(image)

    @classmethod
    def builder(cls) -> "ContainerConfigBuilder":
        """Start an empty builder; ``image`` must be set before ``build()``."""
        return ContainerConfigBuilder()


class ContainerConfigBuilder(ConfigBuilder[ContainerConfig]):
    """Fluent builder for :class:`ContainerConfig`."""

    config_class = ContainerConfig
    required_fields = ("image",)

    def image(self, image: str) -> "ContainerConfigBuilder":
        return self._set("image", image)

    def name(self, name: str) -> "ContainerConfigBuilder":
        return self._set("name", name)

    def platform(self, platform: str) -> "ContainerConfigBuilder":
        """Target platform, e.g. ``linux/amd64``."""
        return self._set("platform", platform)

    def hostname(self, hostname: str) -> "ContainerConfigBuilder":
        return self._set("hostname", hostname)

    def domain_name(self, domain_name: str) -> "ContainerConfigBuilder":
        return self._set("domain_name", domain_name)

    def user(self, user: str) -> "ContainerConfigBuilder":
        return self._set("user", user)

    def attach_stdin(self, enabled: bool = True) -> "ContainerConfigBuilder":
        return self._set("attach_stdin", enabled)

    def attach_stdout(self, enabled: bool = True) -> "ContainerConfigBuilder":
        return self._set("attach_stdout", enabled)

    def attach_stderr(self, enabled: bool = True) -> "ContainerConfigBuilder":
        return self._set("attach_stderr", enabled)

    def tty(self, enabled: bool = True) -> "ContainerConfigBuilder":
        return self._set("tty", enabled)

    def open_stdin(self, enabled: bool = True) -> "ContainerConfigBuilder":
        return self._set("open_stdin", enabled)

    def stdin_once(self, enabled: bool = True) -> "ContainerConfigBuilder":
        return self._set("stdin_once", enabled)

    def ports(self, *ports: int | str) -> "ContainerConfigBuilder":
        """Replace exposed ports. Bare numbers default to ``/tcp``."""
        return self._set("exposed_ports", {normalize_port(p): {} for p in ports})

    def expose_port(self, port: int | str, protocol: str = "tcp") -> "ContainerConfigBuilder":
        """Add one exposed port."""
        return self._put("exposed_ports", normalize_port(port, protocol), {})

    def env(
        self, env: Mapping[str, str] | Iterable[str]
    ) -> "ContainerConfigBuilder":
        """Replace environment variables with a mapping or ``KEY=value`` strings."""
        if isinstance(env, Mapping):
            entries = [f"{key}={value}" for key, value in env.items()]
        else:
            entries = list(env)
        return self._set("env", entries)

    def add_env(self, key: str, value: str) -> "ContainerConfigBuilder":
        """Append one ``KEY=value`` entry."""
        return self._append("env", f"{key}={value}")

    def cmd(self, *args: str) -> "ContainerConfigBuilder":
        """Replace the command."""
        return self._set("cmd", list(args))

    def add_cmd(self, arg: str) -> "ContainerConfigBuilder":
        """Append one command argument."""
        return self._append("cmd", arg)

    def entrypoint(self, *args: str) -> "ContainerConfigBuilder":
        """Replace the entrypoint."""
        return self._set("entrypoint", list(args))

    def add_entrypoint(self, arg: str) -> "ContainerConfigBuilder":
        return self._append("entrypoint", arg)

    def health_check(self, health_check: Optional[HealthCheck]) -> "ContainerConfigBuilder":
        return self._set("health_check", health_check)

    def args_escaped(self, enabled: bool = True) -> "ContainerConfigBuilder":
        return self._set("args_escaped", enabled)

    def volumes(self, *paths: str) -> "ContainerConfigBuilder":
        """Replace anonymous volume mount points inside the container."""
        return self._set("volumes", {path: {} for path in paths})

    def add_volume(self, path: str) -> "ContainerConfigBuilder":
        return self._put("volumes", path, {})

    def working_dir(self, path: str) -> "ContainerConfigBuilder":
        return self._set("working_dir", path)

    def network_disabled(self, disabled: bool = True) -> "ContainerConfigBuilder":
        return self._set("network_disabled", disabled)

    def mac_address(self, mac_address: str) -> "ContainerConfigBuilder":
        return self._set("mac_address", mac_address)

    def on_build(self, *commands: str) -> "ContainerConfigBuilder":
        """Replace ONBUILD triggers."""
        return self._set("on_build", list(commands))

    def add_on_build(self, command: str) -> "ContainerConfigBuilder":
        return self._append("on_build", command)

    def labels(self, labels: Mapping[str, str]) -> "ContainerConfigBuilder":
        """Replace all labels."""
        return self._set("labels", dict(labels))

    def label(self, key: str, value: str) -> "ContainerConfigBuilder":
        """Add one label (same key overwrites)."""
        return self._put("labels", key, value)

    def stop_signal(self, signal: str) -> "ContainerConfigBuilder":
        return self._set("stop_signal", signal)

    def stop_timeout(self, seconds: Optional[int]) -> "ContainerConfigBuilder":
        return self._set("stop_timeout", seconds)

    def shell(self, *args: str) -> "ContainerConfigBuilder":
        """Replace the shell used for shell-form commands."""
        return self._set("shell", list(args))

    def add_shell(self, arg: str) -> "ContainerConfigBuilder":
        return self._append("shell", arg)

    def host_config(self, host_config: Optional[HostConfig]) -> "ContainerConfigBuilder":
        return self._set("host_config", host_config)
