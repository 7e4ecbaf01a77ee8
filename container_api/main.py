"""Main FastAPI application for the Container Control API."""

# Standard library imports
from contextlib import asynccontextmanager

# Third-party imports
import structlog
import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

# Local application imports
from . import __version__
from .api import containers, health
from .config import settings, get_configuration_summary
from .dependencies.services import get_health_service, get_runtime_client
from .middleware.logging import RequestLoggingMiddleware
from .models.errors import ContainerAPIException
from .utils.error_handlers import (
    container_api_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler,
)
from .utils.logging import setup_logging

# Setup logging
setup_logging()
logger = structlog.get_logger()


async def _startup_runtime_client() -> None:
    """Connect to the container runtime and run an initial health check."""
    try:
        runtime = get_runtime_client()
    except ContainerAPIException as e:
        logger.error(
            "Failed to connect to container runtime",
            error=e.message,
            details=e.details,
        )
        return

    result = await get_health_service(runtime).check_docker()
    if result.status.value == "healthy":
        logger.info(
            "Container runtime healthy",
            response_time_ms=result.response_time_ms,
            **result.details,
        )
    else:
        logger.warning(
            "Container runtime health check failed",
            status=result.status.value,
            error=result.error,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Container Control API", version=__version__)

    if settings.api_debug:
        logger.warning("Debug mode is enabled - disable in production")

    await _startup_runtime_client()

    logger.info("Container Control API startup completed")

    yield

    logger.info("Container Control API shutdown completed")


app = FastAPI(
    title="Container Control API",
    description="Create, inspect and remove Docker containers over HTTP",
    version=__version__,
    docs_url="/docs" if settings.enable_docs else None,
    redoc_url="/redoc" if settings.enable_docs else None,
    debug=settings.api_debug,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# Add CORS middleware (conditionally)
if settings.enable_cors:
    origins = settings.cors_origins if settings.cors_origins else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Request-ID"],
    )
    logger.info("CORS enabled", origins=origins)

# Register global error handlers
app.add_exception_handler(ContainerAPIException, container_api_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)


@app.get("/config")
async def config_info():
    """Configuration information endpoint (non-sensitive data only)."""
    if not settings.api_debug:
        raise HTTPException(status_code=404, detail="Not found")

    return get_configuration_summary()


app.include_router(containers.router, tags=["containers"])

app.include_router(health.router, tags=["health"])


def run_server():
    logger.info("Starting HTTP server", host=settings.api_host, port=settings.api_port)
    uvicorn.run(
        "container_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
        access_log=settings.enable_access_logs,
        timeout_keep_alive=120,
    )


if __name__ == "__main__":
    run_server()
