"""Container management services.

This package provides Docker container management functionality split into:
- client.py: Docker client factory and runtime client
- images.py: Image resolution (normalize, look up, pull)
- naming.py: Container name generation
- manager.py: Container lifecycle management (create + start)
- lookup.py: Container lookup, listing and removal
- utils.py: Shared utilities for container operations
"""

from .client import DockerClientFactory, DockerRuntimeClient
from .images import ImageResolver
from .lookup import ContainerLookup
from .manager import ContainerManager
from .naming import generate_container_name, sanitize_image_reference
from .utils import run_in_executor

__all__ = [
    "DockerClientFactory",
    "DockerRuntimeClient",
    "ImageResolver",
    "ContainerLookup",
    "ContainerManager",
    "generate_container_name",
    "sanitize_image_reference",
    "run_in_executor",
]
