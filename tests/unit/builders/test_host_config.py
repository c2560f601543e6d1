"""Unit tests for HostConfig and its builder."""

import pytest

from dockyard.builders import HostConfig
from dockyard.builders.host import normalize_port
from dockyard.exceptions import InvalidFieldError


class TestNormalizePort:
    """Test container port key normalization."""

    def test_bare_number_defaults_to_tcp(self):
        """Test an int port becomes <port>/tcp."""
        assert normalize_port(80) == "80/tcp"

    def test_explicit_protocol_kept(self):
        """Test a port that already names its protocol is unchanged."""
        assert normalize_port("53/udp") == "53/udp"

    def test_protocol_argument(self):
        """Test the protocol argument is used for bare ports."""
        assert normalize_port(53, "udp") == "53/udp"


class TestHostConfigBuilder:
    """Test the host config builder."""

    def test_empty_builder_builds(self):
        """Test that no field is required."""
        config = HostConfig.builder().build()

        assert config.to_body() == {}

    def test_bind_port_accumulates(self):
        """Test repeated bind_port calls add bindings for the same port."""
        config = (
            HostConfig.builder()
            .bind_port(80, 8080)
            .bind_port(80, 8081, host_ip="127.0.0.1")
            .build()
        )

        assert config.to_body()["PortBindings"] == {
            "80/tcp": [
                {"HostPort": "8080"},
                {"HostIp": "127.0.0.1", "HostPort": "8081"},
            ]
        }

    def test_mount_appends_bind_strings(self):
        """Test mount() appends host:container[:ro] strings."""
        config = (
            HostConfig.builder()
            .mount("/srv/data", "/data")
            .mount("/etc/conf", "/conf", read_only=True)
            .build()
        )

        assert config.binds == ("/srv/data:/data", "/etc/conf:/conf:ro")

    def test_binds_replaces(self):
        """Test binds() replaces earlier mounts."""
        config = HostConfig.builder().mount("/a", "/a").binds("/b:/b").build()

        assert config.binds == ("/b:/b",)

    def test_sysctl_and_flags(self):
        """Test sysctls and scalar flags serialize with Docker names."""
        config = (
            HostConfig.builder()
            .sysctl("net.ipv4.ip_forward", "1")
            .auto_remove()
            .privileged(False)
            .network_mode("host")
            .memory(256 * 1024 * 1024)
            .build()
        )

        assert config.to_body() == {
            "Sysctls": {"net.ipv4.ip_forward": "1"},
            "AutoRemove": True,
            "Privileged": False,
            "NetworkMode": "host",
            "Memory": 268435456,
        }

    def test_restart_policy(self):
        """Test the restart policy nested model."""
        config = HostConfig.builder().restart_policy("on-failure", 3).build()

        assert config.to_body()["RestartPolicy"] == {
            "Name": "on-failure",
            "MaximumRetryCount": 3,
        }

    def test_unknown_restart_policy_rejected(self):
        """Test an unsupported restart policy name fails validation."""
        with pytest.raises(InvalidFieldError):
            HostConfig.builder().restart_policy("sometimes").build()
