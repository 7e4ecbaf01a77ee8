"""Middleware package for the Container Control API."""

from .logging import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
]
