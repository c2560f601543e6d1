"""Configuration management using pydantic-settings."""

import re
from pathlib import Path
from typing import Any, Literal, Tuple, Type

import yaml
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"
DEFAULT_API_VERSION = "1.40"
DEFAULT_TIMEOUT_SECONDS = 60.0


def load_yaml_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Priority:
    1. Explicitly provided config_path
    2. ~/.dockyard/config.yaml (default location)
    3. Empty dict if no file exists

    Args:
        config_path: Optional path to config file

    Returns:
        Dictionary of configuration values (flattened from nested YAML)
    """
    if config_path is None:
        config_path = Path.home() / ".dockyard" / "config.yaml"

    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            yaml_data = yaml.safe_load(f) or {}

        flattened = {}

        if "docker" in yaml_data:
            docker = yaml_data["docker"]
            if "host" in docker:
                flattened["docker_host"] = docker["host"]
            if "api_version" in docker:
                flattened["docker_api_version"] = str(docker["api_version"])
            if "timeout_seconds" in docker:
                flattened["docker_timeout_seconds"] = docker["timeout_seconds"]

        if "logging" in yaml_data:
            logging = yaml_data["logging"]
            if "level" in logging:
                flattened["log_level"] = logging["level"]
            if "format" in logging:
                flattened["log_format"] = logging["format"]

        return flattened

    except (OSError, yaml.YAMLError) as e:
        import warnings

        warnings.warn(f"Failed to load config from {config_path}: {e}")
        return {}


_config_path: Path | None = None


class YamlSettingsSource(PydanticBaseSettingsSource):
    """
    Custom settings source that loads configuration from YAML file.

    This allows YAML config to be loaded with proper priority in the settings chain.
    """

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        """Not used since we override __call__."""
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        return load_yaml_config(_config_path)


class Settings(BaseSettings):
    """
    Dockyard configuration settings.

    Configuration priority (highest to lowest):
    1. Environment variables (e.g., DOCKER_HOST=tcp://127.0.0.1:2375)
    2. YAML configuration file (~/.dockyard/config.yaml)
    3. Default values defined in this class
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    docker_host: str = Field(
        default=DEFAULT_DOCKER_HOST,
        description="Docker daemon endpoint (unix socket path or tcp://host:port)",
    )
    docker_api_version: str = Field(
        default=DEFAULT_API_VERSION,
        description="Docker Engine API version used as the path prefix",
    )
    docker_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Per-request timeout in seconds",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text", description="Log format"
    )

    @field_validator("docker_host")
    @classmethod
    def validate_docker_host(cls, v: str) -> str:
        """Reject blank endpoints."""
        v = v.strip()
        if not v:
            raise ValueError("docker_host must not be empty")
        return v

    @field_validator("docker_api_version")
    @classmethod
    def validate_api_version(cls, v: str) -> str:
        """Validate API version format and strip a leading 'v'."""
        v = v.strip().lstrip("v")
        if not re.fullmatch(r"\d+\.\d+", v):
            raise ValueError("docker_api_version must look like '1.40'")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.

        Priority order (highest to lowest):
        1. Explicit kwargs (init_settings) - for testing and programmatic config
        2. Environment variables
        3. YAML configuration file
        4. .env file
        5. Field defaults
        """
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls),
            dotenv_settings,
        )


_settings: Settings | None = None


def get_settings(config_path: Path | None = None, reload: bool = False) -> Settings:
    """
    Get global settings instance.

    Configuration loading order (highest to lowest priority):
    1. Environment variables (e.g., DOCKER_HOST=tcp://127.0.0.1:2375)
    2. YAML configuration file (~/.dockyard/config.yaml)
    3. .env file
    4. Default values defined in Settings class

    Args:
        config_path: Optional path to YAML config file (defaults to ~/.dockyard/config.yaml)
        reload: If True, force reload settings (useful for testing)

    Returns:
        Settings instance with merged configuration
    """
    global _settings, _config_path
    if _settings is None or reload:
        _config_path = config_path

        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings, _config_path
    _settings = None
    _config_path = None
