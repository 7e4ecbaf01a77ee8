"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from .. import __version__
from ..config import settings
from ..dependencies.services import HealthServiceDep
from ..models.errors import ContainerAPIException
from ..services.health import HealthStatus

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/health", summary="Basic health check")
async def basic_health_check():
    """Liveness check that does not touch the container runtime."""
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "container-api",
    }


@router.get("/health/docker", summary="Docker daemon health check")
async def docker_health_check(health_service: HealthServiceDep):
    """Check Docker daemon connectivity."""
    try:
        result = await health_service.check_docker()

        if result.status == HealthStatus.UNHEALTHY:
            return JSONResponse(status_code=503, content=result.to_dict())
        else:
            return JSONResponse(status_code=200, content=result.to_dict())

    except ContainerAPIException as e:
        logger.error("Docker health check failed", error=e.message, details=e.details)
        return JSONResponse(
            status_code=503,
            content={
                "service": "docker",
                "status": "unhealthy",
                "error": e.details if settings.api_debug else "Docker check failed",
            },
        )
