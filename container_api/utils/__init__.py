"""Utility modules for the Container Control API."""

from .logging import setup_logging
from .id_generator import generate_request_id, current_request_id
from .request_helpers import get_client_ip

__all__ = [
    "setup_logging",
    "generate_request_id",
    "current_request_id",
    "get_client_ip",
]
