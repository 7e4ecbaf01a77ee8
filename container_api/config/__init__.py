"""Configuration management for the Container Control API.

This module provides a unified Settings class with flat environment-driven
fields and grouped views over them.

Usage:
    from container_api.config import settings

    # Access grouped settings
    settings.api.api_host
    settings.docker.container_name_prefix

    # Or use flat access
    settings.api_host
    settings.container_name_prefix
"""

from logging import getLevelName
import re
from typing import Any, Dict, List

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Import grouped configurations
from .api import APIConfig
from .docker import DockerConfig, default_docker_base_url
from .logging import LoggingConfig

# Docker names: [a-zA-Z0-9][a-zA-Z0-9_.-]*
CONTAINER_NAME_FRAGMENT = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$")

LOG_FORMATS = ("json", "console")


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, ge=1, le=65535)
    api_debug: bool = Field(default=False)
    api_reload: bool = Field(default=False)

    # Docker Runtime Configuration
    docker_base_url: str = Field(
        default_factory=default_docker_base_url,
        description="Docker daemon socket (unix://, npipe:// or tcp://)",
    )
    docker_api_version: str = Field(
        default="auto",
        description="Docker Engine API version, 'auto' negotiates with the daemon",
    )
    docker_timeout: int = Field(
        default=60,
        ge=1,
        le=3600,
        description="Socket timeout for Docker API calls (seconds)",
    )

    # Container Naming
    container_name_prefix: str = Field(
        default="container",
        min_length=1,
        description="Prefix of every container created and listed by this service",
    )
    default_image_tag: str = Field(
        default="latest",
        min_length=1,
        description="Tag appended to image references that carry none",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")
    enable_access_logs: bool = Field(default=True)

    # Development Configuration
    enable_cors: bool = Field(default=False)
    cors_origins: List[str] = Field(default_factory=list)
    enable_docs: bool = Field(default=True)

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @validator("container_name_prefix")
    def validate_container_name_prefix(cls, v):
        """Ensure the prefix can start a Docker container name."""
        if not CONTAINER_NAME_FRAGMENT.match(v):
            raise ValueError(
                "Container name prefix must start with an alphanumeric character "
                "and contain only alphanumerics, '_', '.' or '-'"
            )
        return v

    @validator("default_image_tag")
    def validate_default_image_tag(cls, v):
        """A tag cannot contain the reference delimiters."""
        if ":" in v or "/" in v:
            raise ValueError("Default image tag must not contain ':' or '/'")
        return v

    @validator("log_level")
    def validate_log_level(cls, v):
        """Accept only standard logging level names."""
        level = v.upper()
        if not isinstance(getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @validator("log_format")
    def validate_log_format(cls, v):
        """Restrict log output to the supported renderers."""
        fmt = v.lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"Log format must be one of {', '.join(LOG_FORMATS)}")
        return fmt

    # ========================================================================
    # GROUPED CONFIG ACCESS
    # ========================================================================

    @property
    def api(self) -> APIConfig:
        """Access API configuration group."""
        return APIConfig(
            api_host=self.api_host,
            api_port=self.api_port,
            api_debug=self.api_debug,
            api_reload=self.api_reload,
            enable_docs=self.enable_docs,
            enable_cors=self.enable_cors,
            cors_origins=self.cors_origins,
        )

    @property
    def docker(self) -> DockerConfig:
        """Access Docker runtime configuration group."""
        return DockerConfig(
            docker_base_url=self.docker_base_url,
            docker_api_version=self.docker_api_version,
            docker_timeout=self.docker_timeout,
            container_name_prefix=self.container_name_prefix,
            default_image_tag=self.default_image_tag,
        )

    @property
    def logging(self) -> LoggingConfig:
        """Access logging configuration group."""
        return LoggingConfig(
            log_level=self.log_level,
            log_format=self.log_format,
            enable_access_logs=self.enable_access_logs,
        )


def get_configuration_summary() -> Dict[str, Any]:
    """Non-sensitive configuration snapshot for the debug endpoint."""
    return {
        "api": {
            "host": settings.api_host,
            "port": settings.api_port,
            "debug": settings.api_debug,
            "docs_enabled": settings.enable_docs,
            "cors_enabled": settings.enable_cors,
        },
        "docker": {
            "base_url": settings.docker_base_url,
            "api_version": settings.docker_api_version,
            "timeout": settings.docker_timeout,
            "container_name_prefix": settings.container_name_prefix,
            "default_image_tag": settings.default_image_tag,
        },
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
            "access_logs": settings.enable_access_logs,
        },
    }


settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "APIConfig",
    "DockerConfig",
    "LoggingConfig",
    "get_configuration_summary",
]
