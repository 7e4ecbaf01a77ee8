"""Health checks for the container runtime."""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

import structlog

from ..models.errors import ContainerAPIException
from .container.utils import elapsed_ms, run_in_executor
from .interfaces import RuntimeClientInterface

logger = structlog.get_logger(__name__)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheckResult:
    """Outcome of a single dependency check."""

    service: str
    status: HealthStatus
    response_time_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "service": self.service,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.response_time_ms is not None:
            result["response_time_ms"] = self.response_time_ms
        if self.details:
            result["details"] = self.details
        if self.error:
            result["error"] = self.error
        return result


class HealthService:
    """Checks that the Docker daemon answers."""

    def __init__(self, runtime: RuntimeClientInterface):
        self._runtime = runtime

    async def check_docker(self) -> HealthCheckResult:
        start = time.perf_counter()
        reachable = await run_in_executor(self._runtime.ping)
        if not reachable:
            return HealthCheckResult(
                service="docker",
                status=HealthStatus.UNHEALTHY,
                response_time_ms=elapsed_ms(start),
                error="Docker daemon did not answer ping",
            )

        details: Dict[str, Any] = {}
        try:
            version = await run_in_executor(self._runtime.version)
            details = {
                "version": version.get("Version"),
                "api_version": version.get("ApiVersion"),
                "os": version.get("Os"),
                "arch": version.get("Arch"),
            }
        except ContainerAPIException as e:
            logger.warning("Docker version lookup failed", error=e.details)

        return HealthCheckResult(
            service="docker",
            status=HealthStatus.HEALTHY,
            response_time_ms=elapsed_ms(start),
            details=details,
        )
