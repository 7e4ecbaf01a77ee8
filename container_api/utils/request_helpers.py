"""Shared request helper utilities.

These utilities consolidate request handling patterns used by the
middleware and the error handlers.
"""

from fastapi import Request


def get_client_ip(request: Request) -> str:
    """Get client IP address from request.

    Checks in order:
    1. X-Forwarded-For header (first IP in list)
    2. X-Real-IP header
    3. Direct client host

    Args:
        request: FastAPI Request object

    Returns:
        Client IP address string, or "unknown" if not determinable
    """
    # Check X-Forwarded-For header (common in reverse proxy setups)
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        # Take the first IP in the chain (client IP)
        return forwarded_for.split(",")[0].strip()

    # Check X-Real-IP header
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    # Fall back to direct client connection
    if request.client:
        return request.client.host

    return "unknown"
