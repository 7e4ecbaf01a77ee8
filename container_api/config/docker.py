"""Docker runtime configuration."""

import sys

from pydantic import Field
from pydantic_settings import BaseSettings

WINDOWS_DOCKER_URL = "npipe:////./pipe/docker_engine"
UNIX_DOCKER_URL = "unix:///var/run/docker.sock"


def default_docker_base_url() -> str:
    """Daemon socket for the current platform."""
    if sys.platform.startswith("win"):
        return WINDOWS_DOCKER_URL
    return UNIX_DOCKER_URL


class DockerConfig(BaseSettings):
    """Docker Engine connection and container naming settings."""

    docker_base_url: str = Field(
        default_factory=default_docker_base_url, alias="docker_base_url"
    )
    docker_api_version: str = Field(default="auto", alias="docker_api_version")
    docker_timeout: int = Field(default=60, ge=1, le=3600, alias="docker_timeout")
    container_name_prefix: str = Field(
        default="container", min_length=1, alias="container_name_prefix"
    )
    default_image_tag: str = Field(
        default="latest", min_length=1, alias="default_image_tag"
    )

    class Config:
        env_prefix = ""
        extra = "ignore"
