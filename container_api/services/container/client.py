"""Docker Engine runtime client.

Wraps the low-level ``docker.APIClient`` so that the Engine API's own
shapes (``Names`` with a leading slash, ``reference`` image filters,
streamed pull progress) are available to the core, and translates docker
SDK failures into the service's error taxonomy.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import docker
import requests
import structlog
from docker.errors import APIError, DockerException

from ...config import settings
from ...models.errors import (
    ResolutionFailedError,
    RuntimeOperationError,
    RuntimeUnavailableError,
)
from ...models.runtime import ContainerSpec, ManagedContainer
from ..interfaces import RuntimeClientInterface

logger = structlog.get_logger(__name__)


def _explain(exc: Exception) -> str:
    """Best human-readable text for a docker SDK failure."""
    explanation = getattr(exc, "explanation", None)
    if explanation:
        if isinstance(explanation, bytes):
            return explanation.decode("utf-8", errors="replace")
        return str(explanation)
    return str(exc)


class DockerClientFactory:
    """Creates ``docker.APIClient`` instances from settings."""

    @staticmethod
    def create(
        base_url: Optional[str] = None,
        version: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> docker.APIClient:
        """Connect to the Docker daemon.

        Raises:
            RuntimeUnavailableError: daemon unreachable or version negotiation failed
        """
        docker_config = settings.docker
        base_url = base_url or docker_config.docker_base_url
        try:
            client = docker.APIClient(
                base_url=base_url,
                version=version or docker_config.docker_api_version,
                timeout=timeout or docker_config.docker_timeout,
            )
        except DockerException as e:
            logger.error(
                "Docker client initialization failed",
                base_url=base_url,
                error=str(e),
            )
            raise RuntimeUnavailableError("connect", details=str(e)) from e

        logger.info(
            "Docker client initialized",
            base_url=base_url,
            api_version=client.api_version,
        )
        return client


class DockerRuntimeClient(RuntimeClientInterface):
    """Runtime client backed by the Docker Engine API."""

    def __init__(self, api_client: Optional[docker.APIClient] = None):
        self._api = api_client if api_client is not None else DockerClientFactory.create()

    @property
    def api(self) -> docker.APIClient:
        """Get the underlying low-level client."""
        return self._api

    @contextmanager
    def _runtime_errors(self, operation: str, target: Optional[str] = None):
        try:
            yield
        except APIError as e:
            raise RuntimeOperationError(operation, target, details=_explain(e)) from e
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            raise RuntimeUnavailableError(operation, details=str(e)) from e
        except DockerException as e:
            raise RuntimeUnavailableError(operation, details=str(e)) from e

    @contextmanager
    def _image_errors(self, operation: str, reference: str):
        try:
            yield
        except APIError as e:
            raise ResolutionFailedError(reference, details=_explain(e)) from e
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            raise RuntimeUnavailableError(operation, details=str(e)) from e
        except DockerException as e:
            raise RuntimeUnavailableError(operation, details=str(e)) from e

    def list_images_by_reference(self, reference: str) -> List[Dict[str, Any]]:
        with self._image_errors("list_images", reference):
            return self._api.images(filters={"reference": reference}) or []

    def pull_image(self, reference: str) -> Iterator[Dict[str, Any]]:
        with self._image_errors("pull_image", reference):
            for event in self._api.pull(reference, stream=True, decode=True):
                # Registry failures arrive as an error entry inside the stream
                if "error" in event:
                    raise ResolutionFailedError(reference, details=str(event["error"]))
                yield event

    def create_container(self, spec: ContainerSpec) -> str:
        with self._runtime_errors("create_container", spec.name):
            host_config = self._api.create_host_config(auto_remove=spec.auto_remove)
            response = self._api.create_container(
                image=spec.image,
                name=spec.name,
                environment=spec.environment,
                host_config=host_config,
            )

        for warning in response.get("Warnings") or []:
            logger.warning(
                "Runtime warning on container creation",
                container_name=spec.name,
                warning=warning,
            )
        return response["Id"]

    def start_container(self, container_id: str) -> None:
        with self._runtime_errors("start_container", container_id):
            self._api.start(container_id)

    def list_containers(self, include_stopped: bool = True) -> List[ManagedContainer]:
        with self._runtime_errors("list_containers"):
            raw = self._api.containers(all=include_stopped)
        return [ManagedContainer.from_api(entry) for entry in raw or []]

    def remove_container(self, container_id: str, force: bool = True) -> None:
        with self._runtime_errors("remove_container", container_id):
            self._api.remove_container(container_id, force=force)

    def ping(self) -> bool:
        try:
            return bool(self._api.ping())
        except (DockerException, requests.exceptions.RequestException) as e:
            logger.warning("Docker ping failed", error=str(e))
            return False

    def version(self) -> Dict[str, Any]:
        with self._runtime_errors("version"):
            return self._api.version()
