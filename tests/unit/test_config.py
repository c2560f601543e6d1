"""Unit tests for settings loading."""

import pytest
from pydantic import ValidationError

from dockyard.client.transport import parse_endpoint
from dockyard.config import (
    DEFAULT_DOCKER_HOST,
    Settings,
    get_settings,
    load_yaml_config,
    reset_settings,
)


class TestLoadYamlConfig:
    """Test YAML config flattening."""

    def test_missing_file(self, tmp_path):
        """Test a missing file yields no values."""
        assert load_yaml_config(tmp_path / "missing.yaml") == {}

    def test_sections_flattened(self, tmp_path):
        """Test docker and logging sections map onto settings fields."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "docker:\n"
            "  host: tcp://10.0.0.5:2375\n"
            "  api_version: 1.41\n"
            "  timeout_seconds: 5\n"
            "logging:\n"
            "  level: DEBUG\n"
            "  format: json\n"
        )

        assert load_yaml_config(path) == {
            "docker_host": "tcp://10.0.0.5:2375",
            "docker_api_version": "1.41",
            "docker_timeout_seconds": 5,
            "log_level": "DEBUG",
            "log_format": "json",
        }

    def test_invalid_yaml_warns(self, tmp_path):
        """Test unreadable YAML is reported and ignored."""
        path = tmp_path / "config.yaml"
        path.write_text("docker: [unclosed\n")

        with pytest.warns(UserWarning, match="Failed to load config"):
            assert load_yaml_config(path) == {}


class TestSettings:
    """Test the Settings model."""

    def test_defaults(self, tmp_path):
        """Test default values."""
        settings = get_settings(config_path=tmp_path / "missing.yaml")

        assert settings.docker_host == DEFAULT_DOCKER_HOST
        assert settings.docker_api_version == "1.40"
        assert settings.docker_timeout_seconds == 60.0

    @pytest.mark.parametrize(
        "host,socket_path",
        [
            ("unix:///var/run/docker.sock", "/var/run/docker.sock"),
            ("/tmp/docker.sock", "/tmp/docker.sock"),
            ("tcp://10.0.0.5:2375", None),
        ],
    )
    def test_endpoint_kept_raw_for_transport(self, host, socket_path):
        """Test settings store the host string as given and the transport parser decides the socket."""
        settings = Settings(docker_host=host)

        assert settings.docker_host == host
        assert parse_endpoint(settings.docker_host)[1] == socket_path
        assert not hasattr(settings, "is_unix_socket")

    def test_environment_overrides_yaml(self, tmp_path, monkeypatch):
        """Test DOCKER_HOST beats the YAML file."""
        path = tmp_path / "config.yaml"
        path.write_text("docker:\n  host: tcp://from-yaml:2375\n  api_version: '1.41'\n")
        monkeypatch.setenv("DOCKER_HOST", "tcp://from-env:2375")

        settings = get_settings(config_path=path, reload=True)

        assert settings.docker_host == "tcp://from-env:2375"
        assert settings.docker_api_version == "1.41"

    def test_api_version_strips_prefix(self):
        """Test a leading v is accepted."""
        assert Settings(docker_api_version="v1.43").docker_api_version == "1.43"

    @pytest.mark.parametrize("version", ["latest", "1", "1.40.1"])
    def test_invalid_api_version(self, version):
        """Test malformed API versions are rejected."""
        with pytest.raises(ValidationError):
            Settings(docker_api_version=version)

    def test_blank_host_rejected(self):
        """Test an empty endpoint is rejected."""
        with pytest.raises(ValidationError):
            Settings(docker_host="  ")

    def test_timeout_must_be_positive(self):
        """Test a zero timeout is rejected."""
        with pytest.raises(ValidationError):
            Settings(docker_timeout_seconds=0)

    def test_get_settings_caches(self, tmp_path):
        """Test the singleton is reused until reset."""
        first = get_settings(config_path=tmp_path / "missing.yaml")

        assert get_settings() is first

        reset_settings()
        assert get_settings(config_path=tmp_path / "missing.yaml") is not first
