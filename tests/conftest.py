"""Pytest configuration and shared fixtures."""

import os
import threading
import uuid
from typing import Any, Dict, Iterator, List, Optional
from unittest.mock import MagicMock

import docker
import pytest

# Set test environment before importing config
# Use setdefault to allow environment variables to override defaults
os.environ.setdefault("CONTAINER_NAME_PREFIX", "container")
os.environ.setdefault("DEFAULT_IMAGE_TAG", "latest")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("LOG_FORMAT", "console")

from container_api.models.errors import (
    ResolutionFailedError,
    RuntimeOperationError,
    RuntimeUnavailableError,
)
from container_api.models.runtime import ContainerSpec, ManagedContainer
from container_api.services.container import (
    ContainerLookup,
    ContainerManager,
    DockerRuntimeClient,
    ImageResolver,
)
from container_api.services.interfaces import RuntimeClientInterface


class FakeRuntimeClient(RuntimeClientInterface):
    """In-memory container runtime speaking the Docker Engine listing shapes."""

    def __init__(
        self,
        images: Optional[List[str]] = None,
        containers: Optional[List[Dict[str, Any]]] = None,
    ):
        self.images = set(images or [])
        self.containers: List[Dict[str, Any]] = list(containers or [])
        self.pull_events: List[Dict[str, Any]] = [
            {"status": "Pulling from library/alpine", "id": "latest"},
            {"status": "Downloading", "id": "4abcf2066143", "progress": "[==>   ]"},
            {"status": "Pull complete", "id": "4abcf2066143"},
            {"status": "Status: Downloaded newer image"},
        ]
        self.created_specs: List[ContainerSpec] = []
        self.pulled: List[str] = []
        self.started: List[str] = []
        self.removed: List[str] = []
        self.image_queries: List[str] = []
        self.pull_error: Optional[str] = None
        self.create_error: Optional[str] = None
        self.start_error: Optional[str] = None
        self.unavailable = False
        self._lock = threading.Lock()

    def _check_available(self, operation: str) -> None:
        if self.unavailable:
            raise RuntimeUnavailableError(operation, details="Connection refused")

    def _get(self, container_id: str) -> Optional[Dict[str, Any]]:
        return next((c for c in self.containers if c["Id"] == container_id), None)

    def list_images_by_reference(self, reference: str) -> List[Dict[str, Any]]:
        self._check_available("list_images")
        self.image_queries.append(reference)
        if reference in self.images:
            return [{"Id": f"sha256:{uuid.uuid4().hex}", "RepoTags": [reference]}]
        return []

    def pull_image(self, reference: str) -> Iterator[Dict[str, Any]]:
        self._check_available("pull_image")
        self.pulled.append(reference)
        if self.pull_error:
            raise ResolutionFailedError(reference, details=self.pull_error)
        for event in self.pull_events:
            yield event
        self.images.add(reference)

    def create_container(self, spec: ContainerSpec) -> str:
        self._check_available("create_container")
        if self.create_error:
            raise RuntimeOperationError("create_container", spec.name, self.create_error)
        container_id = uuid.uuid4().hex + uuid.uuid4().hex
        with self._lock:
            self.created_specs.append(spec)
            self.containers.append(
                {
                    "Id": container_id,
                    "Names": [f"/{spec.name}"],
                    "Image": spec.image,
                    "State": "created",
                    "Status": "Created",
                }
            )
        return container_id

    def start_container(self, container_id: str) -> None:
        self._check_available("start_container")
        if self.start_error:
            raise RuntimeOperationError("start_container", container_id, self.start_error)
        container = self._get(container_id)
        if container is None:
            raise RuntimeOperationError(
                "start_container", container_id, f"No such container: {container_id}"
            )
        container["State"] = "running"
        container["Status"] = "Up Less than a second"
        self.started.append(container_id)

    def list_containers(self, include_stopped: bool = True) -> List[ManagedContainer]:
        self._check_available("list_containers")
        with self._lock:
            entries = [
                c for c in self.containers if include_stopped or c["State"] == "running"
            ]
            return [ManagedContainer.from_api(c) for c in entries]

    def remove_container(self, container_id: str, force: bool = True) -> None:
        self._check_available("remove_container")
        container = self._get(container_id)
        if container is None:
            raise RuntimeOperationError(
                "remove_container", container_id, f"No such container: {container_id}"
            )
        if container["State"] == "running" and not force:
            raise RuntimeOperationError(
                "remove_container", container_id, "cannot remove a running container"
            )
        with self._lock:
            self.containers.remove(container)
        self.removed.append(container_id)

    def ping(self) -> bool:
        return not self.unavailable

    def version(self) -> Dict[str, Any]:
        self._check_available("version")
        return {"Version": "27.0.3", "ApiVersion": "1.46", "Os": "linux", "Arch": "amd64"}


def make_container_entry(
    name: str,
    state: str = "running",
    image: str = "alpine:latest",
    container_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Docker ``/containers/json`` entry for fixtures."""
    return {
        "Id": container_id or uuid.uuid4().hex + uuid.uuid4().hex,
        "Names": [f"/{name}"],
        "Image": image,
        "State": state,
        "Status": "Up 5 minutes" if state == "running" else "Exited (0) 2 hours ago",
    }


@pytest.fixture
def fake_runtime():
    """Empty in-memory runtime."""
    return FakeRuntimeClient()


@pytest.fixture
def mixed_containers():
    """Managed and unmanaged containers, running and stopped."""
    return [
        make_container_entry("container-alpine-latest-1111", container_id="a" * 64),
        make_container_entry("postgres", container_id="b" * 64),
        make_container_entry(
            "container-nginx-1.25-2222", state="exited", container_id="c" * 64
        ),
        make_container_entry("my-container-app", container_id="d" * 64),
        make_container_entry("containerized", state="exited", container_id="e" * 64),
    ]


@pytest.fixture
def populated_runtime(mixed_containers):
    """Runtime holding the mixed container fixture set."""
    return FakeRuntimeClient(images=["alpine:latest"], containers=mixed_containers)


@pytest.fixture
def image_resolver(fake_runtime):
    return ImageResolver(fake_runtime, default_tag="latest")


@pytest.fixture
def container_manager(fake_runtime, image_resolver):
    return ContainerManager(fake_runtime, resolver=image_resolver, name_prefix="container")


@pytest.fixture
def container_lookup(fake_runtime):
    return ContainerLookup(fake_runtime, name_prefix="container")


@pytest.fixture
def mock_docker_api():
    """Mock low-level Docker API client."""
    api = MagicMock(spec=docker.APIClient)
    api.images.return_value = []
    api.pull.return_value = iter([])
    api.create_host_config.return_value = {"AutoRemove": False}
    api.create_container.return_value = {"Id": "f" * 64, "Warnings": []}
    api.start.return_value = None
    api.containers.return_value = []
    api.remove_container.return_value = None
    api.ping.return_value = True
    api.version.return_value = {"Version": "27.0.3", "ApiVersion": "1.46"}
    return api


@pytest.fixture
def docker_runtime(mock_docker_api):
    """DockerRuntimeClient over the mocked API client."""
    return DockerRuntimeClient(api_client=mock_docker_api)


# ============================================================================
# Integration Test Fixtures
# ============================================================================


@pytest.fixture
def client(fake_runtime):
    """FastAPI test client wired to the in-memory runtime."""
    from fastapi.testclient import TestClient
    from container_api.dependencies.services import get_runtime_client
    from container_api.main import app

    app.dependency_overrides[get_runtime_client] = lambda: fake_runtime
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def container_entry():
    """Factory for Docker listing entries."""
    return make_container_entry
