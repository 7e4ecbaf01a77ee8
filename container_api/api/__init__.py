"""API endpoints for the Container Control API."""

from . import containers, health

__all__ = ["containers", "health"]
