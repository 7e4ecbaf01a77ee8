"""Container lifecycle endpoints."""

from typing import List

import structlog
from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from ..dependencies.services import ContainerLookupDep, ContainerManagerDep
from ..models.containers import (
    ContainerStatusResponse,
    ContainerSummary,
    CreateContainerRequest,
    CreateContainerResponse,
    MessageResponse,
)
from ..models.errors import ErrorResponse

logger = structlog.get_logger(__name__)
router = APIRouter()

ERROR_RESPONSES = {
    500: {"model": ErrorResponse, "description": "Runtime operation failed"},
    503: {"model": ErrorResponse, "description": "Container runtime unavailable"},
}


def _not_found(container_name_or_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=MessageResponse(
            message=f"Container '{container_name_or_id}' not found."
        ).model_dump(),
    )


@router.post(
    "/container",
    name="start_container",
    summary="Create and start a container",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateContainerResponse,
    responses=ERROR_RESPONSES,
)
async def start_container(
    body: CreateContainerRequest,
    request: Request,
    response: Response,
    manager: ContainerManagerDep,
):
    """Resolve the image (pulling it if needed), then create and start a container."""
    created = await manager.create_and_start(body.image_name, body.env_variables)

    response.headers["Location"] = str(
        request.url_for("container_status", container_name_or_id=created.id)
    )
    return CreateContainerResponse.from_created(created)


@router.get(
    "/container/{container_name_or_id}",
    name="container_status",
    summary="Get container status",
    response_model=ContainerStatusResponse,
    responses={404: {"model": MessageResponse}, **ERROR_RESPONSES},
)
async def container_status(container_name_or_id: str, lookup: ContainerLookupDep):
    """Status of a container addressed by name or id."""
    container = await lookup.find(container_name_or_id)
    if container is None:
        return _not_found(container_name_or_id)

    return ContainerStatusResponse.from_container(container)


@router.delete(
    "/container/{container_name_or_id}",
    name="delete_container",
    summary="Force-remove a container",
    response_model=MessageResponse,
    responses={404: {"model": MessageResponse}, **ERROR_RESPONSES},
)
async def delete_container(container_name_or_id: str, lookup: ContainerLookupDep):
    """Stop (if running) and remove a container addressed by name or id."""
    removed = await lookup.remove(container_name_or_id)
    if not removed:
        return _not_found(container_name_or_id)

    return MessageResponse(
        message=f"Container '{container_name_or_id}' successfully deleted."
    )


@router.get(
    "/container",
    name="list_containers",
    summary="List managed containers",
    response_model=List[ContainerSummary],
    responses=ERROR_RESPONSES,
)
async def list_containers(lookup: ContainerLookupDep):
    """All containers created by this service, stopped ones included."""
    containers = await lookup.list_managed()
    return [ContainerSummary.from_container(c) for c in containers]
