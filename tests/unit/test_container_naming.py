"""Unit tests for container name generation."""

import re

import pytest

from container_api.services.container.naming import (
    generate_container_name,
    sanitize_image_reference,
)

UUID_PATTERN = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
DOCKER_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_.-]+$")


class TestGenerateContainerName:
    """Test the <prefix>-<reference>-<token> format."""

    def test_name_format(self):
        """Test the name is prefix, sanitized reference and uuid token."""
        name = generate_container_name("alpine:latest", "container")
        assert re.fullmatch(rf"container-alpine-latest-{UUID_PATTERN}", name)

    @pytest.mark.parametrize(
        "reference",
        ["alpine:latest", "alpine:3.18", "registry.local:5000/team/app:1.2"],
    )
    def test_name_starts_with_prefix_and_has_no_colon(self, reference):
        """Test generated names carry the prefix and never a colon."""
        name = generate_container_name(reference, "container")
        assert name.startswith("container-")
        assert ":" not in name

    def test_names_are_unique(self):
        """Test two names for the same reference differ."""
        names = {generate_container_name("alpine:latest") for _ in range(100)}
        assert len(names) == 100

    def test_custom_prefix(self):
        """Test a configured prefix is used."""
        name = generate_container_name("redis:7", "worker")
        assert name.startswith("worker-redis-7-")

    def test_registry_references_yield_valid_docker_names(self):
        """Test slashes and digests are replaced by the separator."""
        name = generate_container_name(
            "ghcr.io/org/app@sha256:0123abcd", "container"
        )
        assert DOCKER_NAME_PATTERN.match(name)
        assert "/" not in name and "@" not in name


class TestSanitizeImageReference:
    """Test reference sanitization."""

    def test_colons_replaced(self):
        assert sanitize_image_reference("alpine:3.18") == "alpine-3.18"

    def test_legal_characters_kept(self):
        assert sanitize_image_reference("my_image.v2-x") == "my_image.v2-x"
