"""Container lookup, listing and removal."""

import time
from typing import List, Optional

import structlog

from ...config import settings
from ...models.runtime import ManagedContainer
from ..interfaces import RuntimeClientInterface
from .utils import elapsed_ms, run_in_executor

logger = structlog.get_logger(__name__)


class ContainerLookup:
    """Finds, lists and removes containers by scanning the runtime listing.

    Nothing is cached: the runtime is the source of truth and every call
    reads a fresh listing.
    """

    def __init__(
        self,
        runtime: RuntimeClientInterface,
        name_prefix: Optional[str] = None,
    ):
        self._runtime = runtime
        self._name_prefix = name_prefix or settings.container_name_prefix

    async def _list_all(self) -> List[ManagedContainer]:
        return await run_in_executor(self._runtime.list_containers, True)

    async def find(self, name_or_id: str) -> Optional[ManagedContainer]:
        """Find a container by exact id or name.

        Returns:
            The first matching container in runtime order, or None
        """
        logger.info("Searching container", target=name_or_id)
        start = time.perf_counter()
        containers = await self._list_all()
        match = next((c for c in containers if c.matches(name_or_id)), None)
        logger.info(
            "Search finished",
            target=name_or_id,
            found=match is not None,
            duration_ms=elapsed_ms(start),
        )
        return match

    async def list_managed(self) -> List[ManagedContainer]:
        """All containers, stopped included, whose name carries the prefix."""
        containers = await self._list_all()
        managed = [c for c in containers if c.has_name_prefix(self._name_prefix)]
        logger.debug(
            "Listed managed containers",
            total=len(containers),
            managed=len(managed),
        )
        return managed

    async def remove(self, name_or_id: str) -> bool:
        """Force-remove a container.

        Returns:
            True if the container was removed, False if it was not found
            (no removal is attempted in that case)
        """
        container = await self.find(name_or_id)
        if container is None:
            logger.info("Container not found", target=name_or_id)
            return False

        logger.info("Deleting container", target=name_or_id, container_id=container.id[:12])
        start = time.perf_counter()
        await run_in_executor(self._runtime.remove_container, container.id, True)
        logger.info(
            "Container deleted",
            target=name_or_id,
            container_id=container.id[:12],
            duration_ms=elapsed_ms(start),
        )
        return True
