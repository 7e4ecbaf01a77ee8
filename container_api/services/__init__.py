"""Services for the Container Control API."""

from .container import (
    ContainerLookup,
    ContainerManager,
    DockerRuntimeClient,
    ImageResolver,
)
from .health import HealthService, HealthStatus, HealthCheckResult
from .interfaces import RuntimeClientInterface

__all__ = [
    "ContainerLookup",
    "ContainerManager",
    "DockerRuntimeClient",
    "ImageResolver",
    "HealthService",
    "HealthStatus",
    "HealthCheckResult",
    "RuntimeClientInterface",
]
