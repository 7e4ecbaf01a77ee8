"""API server configuration."""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class APIConfig(BaseSettings):
    """HTTP server settings."""

    api_host: str = Field(default="0.0.0.0", alias="api_host")
    api_port: int = Field(default=8000, ge=1, le=65535, alias="api_port")
    api_debug: bool = Field(default=False, alias="api_debug")
    api_reload: bool = Field(default=False, alias="api_reload")
    enable_docs: bool = Field(default=True, alias="enable_docs")
    enable_cors: bool = Field(default=False, alias="enable_cors")
    cors_origins: List[str] = Field(default_factory=list, alias="cors_origins")

    class Config:
        env_prefix = ""
        extra = "ignore"
