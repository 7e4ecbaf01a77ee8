"""Service interfaces for the Container Control API."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List

from ..models.runtime import ContainerSpec, ManagedContainer


class RuntimeClientInterface(ABC):
    """Capabilities the core needs from a container runtime.

    Implementations are shared by all in-flight requests and must be safe
    for concurrent use. Every method blocks on runtime I/O; callers run
    them in an executor.
    """

    @abstractmethod
    def list_images_by_reference(self, reference: str) -> List[Dict[str, Any]]:
        """Local images matching ``reference`` exactly (empty if none)."""

    @abstractmethod
    def pull_image(self, reference: str) -> Iterator[Dict[str, Any]]:
        """Pull an image, yielding decoded progress events until complete."""

    @abstractmethod
    def create_container(self, spec: ContainerSpec) -> str:
        """Create a container and return its runtime identifier."""

    @abstractmethod
    def start_container(self, container_id: str) -> None:
        """Start a created container."""

    @abstractmethod
    def list_containers(self, include_stopped: bool = True) -> List[ManagedContainer]:
        """All containers known to the runtime, in runtime order."""

    @abstractmethod
    def remove_container(self, container_id: str, force: bool = True) -> None:
        """Remove a container, stopping it first when ``force`` is set."""

    @abstractmethod
    def ping(self) -> bool:
        """True when the runtime answers."""

    @abstractmethod
    def version(self) -> Dict[str, Any]:
        """Runtime version information."""
