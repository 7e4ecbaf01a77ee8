"""Service dependency injection for the Container Control API."""

# Standard library imports
from functools import lru_cache
import threading
from typing import Annotated

# Third-party imports
from fastapi import Depends
import structlog

# Local application imports
from ..services.container import (
    ContainerLookup,
    ContainerManager,
    DockerRuntimeClient,
    ImageResolver,
)
from ..services.health import HealthService
from ..services.interfaces import RuntimeClientInterface

logger = structlog.get_logger(__name__)


_runtime_client_lock = threading.Lock()


@lru_cache()
def _create_runtime_client() -> RuntimeClientInterface:
    client = DockerRuntimeClient()
    logger.info("Runtime client registered with dependency injection")
    return client


def get_runtime_client() -> RuntimeClientInterface:
    """Get the shared runtime client.

    Constructed once and reused by every request. Sync dependencies run in
    the thread pool, so construction is serialized to build a single client.
    A failed construction is not cached, so the next request retries the
    connection.
    """
    with _runtime_client_lock:
        return _create_runtime_client()


RuntimeClientDep = Annotated[RuntimeClientInterface, Depends(get_runtime_client)]


def get_image_resolver(runtime: RuntimeClientDep) -> ImageResolver:
    """Get image resolver bound to the shared runtime client."""
    return ImageResolver(runtime)


ImageResolverDep = Annotated[ImageResolver, Depends(get_image_resolver)]


def get_container_manager(
    runtime: RuntimeClientDep, resolver: ImageResolverDep
) -> ContainerManager:
    """Get container lifecycle manager."""
    return ContainerManager(runtime, resolver=resolver)


def get_container_lookup(runtime: RuntimeClientDep) -> ContainerLookup:
    """Get container lookup service."""
    return ContainerLookup(runtime)


def get_health_service(runtime: RuntimeClientDep) -> HealthService:
    """Get runtime health service."""
    return HealthService(runtime)


# Type aliases for dependency injection
ContainerManagerDep = Annotated[ContainerManager, Depends(get_container_manager)]
ContainerLookupDep = Annotated[ContainerLookup, Depends(get_container_lookup)]
HealthServiceDep = Annotated[HealthService, Depends(get_health_service)]
