"""Functional test fixtures for live API testing.

These tests run against a real API endpoint backed by a Docker daemon.
Configure via environment variables:
    API_BASE: Base URL (default: http://localhost:8000)
    API_TIMEOUT: Request timeout in seconds (default: 300, pulls can be slow)
    TEST_IMAGE: Small image used for lifecycle tests (default: alpine)

Example:
    API_BASE="http://localhost:8000" pytest tests/functional/ -v

Every test is skipped when the API does not answer.
"""

import os
from typing import AsyncGenerator, List

import httpx
import pytest
import pytest_asyncio

# Configuration from environment
API_BASE = os.environ.get("API_BASE", "http://localhost:8000")
API_TIMEOUT = int(os.environ.get("API_TIMEOUT", "300"))
TEST_IMAGE = os.environ.get("TEST_IMAGE", "alpine")


def _api_reachable(base_url: str) -> bool:
    try:
        return httpx.get(f"{base_url}/health", timeout=2).status_code == 200
    except httpx.HTTPError:
        return False


def pytest_collection_modifyitems(config, items):
    """Mark functional tests and skip them when no API is running."""
    functional = [item for item in items if "functional" in str(item.path)]
    if not functional:
        return

    skip = None
    if not _api_reachable(API_BASE.rstrip("/")):
        skip = pytest.mark.skip(reason=f"API not reachable at {API_BASE}")

    for item in functional:
        item.add_marker(pytest.mark.functional)
        if skip:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def api_base() -> str:
    """API base URL."""
    return API_BASE.rstrip("/")


@pytest.fixture(scope="session")
def test_image() -> str:
    return TEST_IMAGE


@pytest_asyncio.fixture
async def async_client(api_base: str) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client for functional tests."""
    client = httpx.AsyncClient(base_url=api_base, timeout=API_TIMEOUT)
    try:
        yield client
    finally:
        try:
            await client.aclose()
        except RuntimeError:
            # Ignore "Event loop is closed" errors during teardown
            pass


@pytest_asyncio.fixture
async def created_containers(
    async_client: httpx.AsyncClient,
) -> AsyncGenerator[List[str], None]:
    """Container ids to force-remove after the test."""
    ids: List[str] = []
    yield ids
    for container_id in ids:
        await async_client.delete(f"/container/{container_id}")
