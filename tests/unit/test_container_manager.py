"""Unit tests for ContainerManager."""

import re

import pytest

from container_api.models.errors import ResolutionFailedError, RuntimeOperationError
from container_api.services.container import ContainerManager

TOKEN = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"


class TestCreateAndStart:
    """Test the create + start unit of work."""

    @pytest.mark.asyncio
    async def test_create_untagged_image(self, fake_runtime, container_manager):
        """Test alpine resolves to alpine:latest, is pulled, created and started."""
        created = await container_manager.create_and_start("alpine")

        assert fake_runtime.pulled == ["alpine:latest"]
        assert re.fullmatch(rf"container-alpine-latest-{TOKEN}", created.name)
        assert created.id
        assert fake_runtime.started == [created.id]

        spec = fake_runtime.created_specs[0]
        assert spec.image == "alpine:latest"
        assert spec.name == created.name

    @pytest.mark.asyncio
    async def test_environment_is_flattened(self, fake_runtime, container_manager):
        """Test env mapping becomes KEY=VALUE entries."""
        await container_manager.create_and_start("alpine:3.18", {"FOO": "bar"})

        assert fake_runtime.created_specs[0].environment == ["FOO=bar"]

    @pytest.mark.asyncio
    async def test_environment_keeps_mapping_order(
        self, fake_runtime, container_manager
    ):
        """Test entries follow the mapping's iteration order."""
        env = {"B": "2", "A": "1", "C": "x=y"}

        await container_manager.create_and_start("alpine", env)

        assert fake_runtime.created_specs[0].environment == ["B=2", "A=1", "C=x=y"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("env", [None, {}])
    async def test_missing_environment_is_empty(
        self, fake_runtime, container_manager, env
    ):
        """Test absent and empty env are treated the same."""
        await container_manager.create_and_start("alpine", env)

        assert fake_runtime.created_specs[0].environment == []

    @pytest.mark.asyncio
    async def test_auto_remove_disabled(self, fake_runtime, container_manager):
        """Test containers are never created with auto-remove."""
        await container_manager.create_and_start("alpine")

        assert fake_runtime.created_specs[0].auto_remove is False

    @pytest.mark.asyncio
    async def test_local_image_not_pulled(self, fake_runtime, container_manager):
        """Test a locally present image goes straight to creation."""
        fake_runtime.images.add("alpine:3.18")

        await container_manager.create_and_start("alpine:3.18")

        assert fake_runtime.pulled == []
        assert len(fake_runtime.created_specs) == 1

    @pytest.mark.asyncio
    async def test_custom_prefix(self, fake_runtime):
        """Test the manager applies its configured name prefix."""
        manager = ContainerManager(fake_runtime, name_prefix="job")

        created = await manager.create_and_start("busybox")

        assert created.name.startswith("job-busybox-latest-")


class TestCreateAndStartFailures:
    """Test failure propagation without rollback or retry."""

    @pytest.mark.asyncio
    async def test_resolution_failure_skips_creation(
        self, fake_runtime, container_manager
    ):
        """Test a failed pull stops the request before creation."""
        fake_runtime.pull_error = "manifest unknown"

        with pytest.raises(ResolutionFailedError):
            await container_manager.create_and_start("alpine:nope")

        assert fake_runtime.created_specs == []

    @pytest.mark.asyncio
    async def test_create_failure_skips_start(self, fake_runtime, container_manager):
        """Test a rejected creation carries the runtime text and never starts."""
        fake_runtime.create_error = "Conflict. The container name is already in use"

        with pytest.raises(RuntimeOperationError) as exc_info:
            await container_manager.create_and_start("alpine")

        assert "already in use" in exc_info.value.details
        assert fake_runtime.started == []

    @pytest.mark.asyncio
    async def test_start_failure_leaves_container_created(
        self, fake_runtime, container_manager
    ):
        """Test a failed start is reported and the container is kept."""
        fake_runtime.start_error = "OCI runtime create failed"

        with pytest.raises(RuntimeOperationError) as exc_info:
            await container_manager.create_and_start("alpine")

        assert exc_info.value.operation == "start_container"
        assert len(fake_runtime.containers) == 1
        assert fake_runtime.containers[0]["State"] == "created"
        assert fake_runtime.removed == []
