"""Dependencies package for the Container Control API."""

from .services import (
    get_runtime_client,
    get_image_resolver,
    get_container_manager,
    get_container_lookup,
    get_health_service,
    RuntimeClientDep,
    ImageResolverDep,
    ContainerManagerDep,
    ContainerLookupDep,
    HealthServiceDep,
)

__all__ = [
    "get_runtime_client",
    "get_image_resolver",
    "get_container_manager",
    "get_container_lookup",
    "get_health_service",
    "RuntimeClientDep",
    "ImageResolverDep",
    "ContainerManagerDep",
    "ContainerLookupDep",
    "HealthServiceDep",
]
