"""Data models for the Container Control API."""

from .containers import (
    CreateContainerRequest,
    CreateContainerResponse,
    ContainerStatusResponse,
    ContainerSummary,
    MessageResponse,
)
from .errors import (
    ErrorType,
    ErrorDetail,
    ErrorResponse,
    ContainerAPIException,
    ValidationError,
    ResolutionFailedError,
    RuntimeOperationError,
    RuntimeUnavailableError,
)
from .runtime import (
    ContainerSpec,
    CreatedContainer,
    ManagedContainer,
    flatten_environment,
    normalize_image_reference,
)

__all__ = [
    # Container endpoint models
    "CreateContainerRequest",
    "CreateContainerResponse",
    "ContainerStatusResponse",
    "ContainerSummary",
    "MessageResponse",
    # Error models
    "ErrorType",
    "ErrorDetail",
    "ErrorResponse",
    "ContainerAPIException",
    "ValidationError",
    "ResolutionFailedError",
    "RuntimeOperationError",
    "RuntimeUnavailableError",
    # Runtime models
    "ContainerSpec",
    "CreatedContainer",
    "ManagedContainer",
    "flatten_environment",
    "normalize_image_reference",
]
