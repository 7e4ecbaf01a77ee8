"""Identifier generation helpers."""

import uuid
from typing import Optional

import structlog
from fastapi import Request

REQUEST_ID_LENGTH = 12
REQUEST_ID_HEADER = "X-Request-ID"


def generate_request_id() -> str:
    """Short random identifier used to correlate logs with error responses."""
    return uuid.uuid4().hex[:REQUEST_ID_LENGTH]


def current_request_id(request: Optional[Request] = None) -> str:
    """Request id stored by the logging middleware, or a fresh one.

    The id is read from ``request.state`` first. Handlers for unexpected
    exceptions run after the middleware has unbound its log context, so the
    contextvars lookup alone is not enough there.
    """
    if request is not None:
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            return request_id
    return structlog.contextvars.get_contextvars().get("request_id") or generate_request_id()
