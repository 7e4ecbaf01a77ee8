"""Container endpoint data models for the Container Control API."""

# Standard library imports
from typing import Dict, List, Optional

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field

# Local application imports
from .runtime import CreatedContainer, ManagedContainer


class CreateContainerRequest(BaseModel):
    """Request model for creating and starting a container."""

    model_config = ConfigDict(populate_by_name=True)

    image_name: str = Field(
        ...,
        alias="imageName",
        min_length=1,
        pattern=r"^\S+$",
        description="Image reference, optionally tagged (name:tag)",
    )
    env_variables: Optional[Dict[str, str]] = Field(
        default=None,
        alias="envVariables",
        description="Environment variables passed to the container",
    )


class CreateContainerResponse(BaseModel):
    """Response model for a created and started container."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(default="Container successfully created and started.")
    container_name: str = Field(..., alias="containerName")
    container_id: str = Field(..., alias="containerId")

    @classmethod
    def from_created(cls, created: CreatedContainer) -> "CreateContainerResponse":
        return cls(container_name=created.name, container_id=created.id)


class ContainerStatusResponse(BaseModel):
    """Status of a single container."""

    model_config = ConfigDict(populate_by_name=True)

    container_name: List[str] = Field(
        ..., alias="containerName", description="Runtime names of the container"
    )
    container_id: str = Field(..., alias="containerId")
    state: str
    status: str
    image: str

    @classmethod
    def from_container(cls, container: ManagedContainer) -> "ContainerStatusResponse":
        return cls(
            container_name=container.names,
            container_id=container.id,
            state=container.state,
            status=container.status,
            image=container.image,
        )


class ContainerSummary(BaseModel):
    """Entry of the managed container listing."""

    id: str
    image: str
    names: List[str]
    state: str
    status: str

    @classmethod
    def from_container(cls, container: ManagedContainer) -> "ContainerSummary":
        return cls(
            id=container.id,
            image=container.image,
            names=container.names,
            state=container.state,
            status=container.status,
        )


class MessageResponse(BaseModel):
    """Plain message body (deletion, not found)."""

    message: str
