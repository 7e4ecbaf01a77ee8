"""Container lifecycle management: create and start as one unit of work."""

import time
from typing import Mapping, Optional

import structlog

from ...config import settings
from ...models.errors import RuntimeOperationError
from ...models.runtime import ContainerSpec, CreatedContainer, flatten_environment
from ..interfaces import RuntimeClientInterface
from .images import ImageResolver
from .naming import generate_container_name
from .utils import elapsed_ms, run_in_executor

logger = structlog.get_logger(__name__)


class ContainerManager:
    """Creates and starts containers on the runtime.

    Containers are created with auto-remove disabled; they only go away
    through an explicit removal.
    """

    def __init__(
        self,
        runtime: RuntimeClientInterface,
        resolver: Optional[ImageResolver] = None,
        name_prefix: Optional[str] = None,
    ):
        self._runtime = runtime
        self._resolver = resolver or ImageResolver(runtime)
        self._name_prefix = name_prefix or settings.container_name_prefix

    @property
    def name_prefix(self) -> str:
        return self._name_prefix

    async def create_and_start(
        self,
        image_name: str,
        env_variables: Optional[Mapping[str, str]] = None,
    ) -> CreatedContainer:
        """Resolve the image, then create and start a new container.

        No rollback is attempted: if creation succeeds and start fails, the
        container is left in the created state for the caller to inspect or
        delete.

        Args:
            image_name: Raw image reference
            env_variables: Environment mapping, ``None`` is treated as empty

        Returns:
            CreatedContainer with the runtime id and generated name
        """
        resolved = await self._resolver.ensure_image_available(image_name)
        name = generate_container_name(resolved, self._name_prefix)

        spec = ContainerSpec(
            image=resolved,
            name=name,
            environment=flatten_environment(env_variables),
            auto_remove=False,
        )

        logger.info("Creating container", container_name=name, image=resolved)
        start = time.perf_counter()
        container_id = await run_in_executor(self._runtime.create_container, spec)
        logger.info(
            "Container created",
            container_name=name,
            container_id=container_id[:12],
            duration_ms=elapsed_ms(start),
        )

        logger.info("Starting container", container_name=name)
        start = time.perf_counter()
        try:
            await run_in_executor(self._runtime.start_container, container_id)
        except RuntimeOperationError as e:
            logger.warning(
                "Container created but failed to start",
                container_name=name,
                container_id=container_id[:12],
                error=e.details,
            )
            raise
        logger.info(
            "Container started",
            container_name=name,
            container_id=container_id[:12],
            duration_ms=elapsed_ms(start),
        )

        return CreatedContainer(id=container_id, name=name)
