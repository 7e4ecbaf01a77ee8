"""Request logging middleware for the Container Control API."""

# Standard library imports
import time
from typing import Callable

# Third-party imports
import structlog
from fastapi import Request

# Local application imports
from ..config import settings
from ..utils.id_generator import REQUEST_ID_HEADER, generate_request_id
from ..utils.request_helpers import get_client_ip

logger = structlog.get_logger(__name__)


class RequestLoggingMiddleware:
    """Logs every request and binds a request id to the log context."""

    def __init__(self, app: Callable):
        self.app = app
        self.health_logged = False

    async def __call__(self, scope: dict, receive: Callable, send: Callable):
        """Log request information."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        start_time = time.time()
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        # Exception handlers outside this middleware read it from request.state
        scope.setdefault("state", {})["request_id"] = request_id

        # Skip repeated health check logging
        skip_logging = not settings.enable_access_logs or (
            request.url.path == "/health" and self.health_logged
        )
        if request.url.path == "/health" and not self.health_logged:
            self.health_logged = True

        response_status = None

        async def send_wrapper(message):
            nonlocal response_status
            if message["type"] == "http.response.start":
                response_status = message["status"]
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER.lower().encode(), request_id.encode()))
                message = {**message, "headers": headers}
            await send(message)

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise
        finally:
            if not skip_logging:
                duration = time.time() - start_time
                log_kwargs = dict(
                    method=request.method,
                    path=request.url.path,
                    status=response_status,
                    duration_ms=round(duration * 1000, 2),
                    client_ip=get_client_ip(request),
                )
                # No status means the app raised before responding
                if response_status is None or response_status >= 500:
                    logger.error("Request failed", **log_kwargs)
                elif response_status and response_status >= 400:
                    logger.warning("Request error", **log_kwargs)
                else:
                    logger.info("Request processed", **log_kwargs)
            structlog.contextvars.unbind_contextvars("request_id")
