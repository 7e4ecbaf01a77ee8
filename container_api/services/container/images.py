"""Image resolution: make sure a requested image is present locally."""

import time
from typing import Optional

import structlog

from ...config import settings
from ...models.errors import ValidationError
from ...models.runtime import normalize_image_reference
from ..interfaces import RuntimeClientInterface
from .utils import elapsed_ms, run_in_executor

logger = structlog.get_logger(__name__)


class ImageResolver:
    """Resolves image references to images available on the runtime host.

    Concurrent requests for the same missing image may each trigger a pull;
    pulls are idempotent on the runtime side so this is not coordinated.
    """

    def __init__(
        self,
        runtime: RuntimeClientInterface,
        default_tag: Optional[str] = None,
    ):
        self._runtime = runtime
        self._default_tag = default_tag or settings.default_image_tag

    def normalize(self, reference: str) -> str:
        """Append the default tag when the reference has none."""
        return normalize_image_reference(reference, self._default_tag)

    async def ensure_image_available(self, reference: str) -> str:
        """Return the normalized reference, pulling the image if absent.

        Args:
            reference: Raw image reference, optionally tagged

        Returns:
            Normalized reference (``name:tag``)

        Raises:
            ValidationError: empty reference
            ResolutionFailedError: registry or reference failure
            RuntimeUnavailableError: runtime unreachable
        """
        if not reference:
            raise ValidationError("Image reference must not be empty")

        resolved = self.normalize(reference)
        logger.info("Searching image", image=resolved)

        images = await run_in_executor(self._runtime.list_images_by_reference, resolved)
        if images:
            logger.info("Image found locally", image=resolved)
            return resolved

        logger.info("Image not found locally, pulling", image=resolved)
        start = time.perf_counter()
        events = await run_in_executor(self._pull, resolved)
        logger.info(
            "Image pulled",
            image=resolved,
            progress_events=events,
            duration_ms=elapsed_ms(start),
        )
        return resolved

    def _pull(self, reference: str) -> int:
        """Consume the pull stream to completion, logging progress."""
        events = 0
        for event in self._runtime.pull_image(reference):
            events += 1
            status = event.get("status")
            if status:
                logger.debug(
                    "Pull progress",
                    image=reference,
                    status=status,
                    layer=event.get("id"),
                    progress=event.get("progress"),
                )
        return events
