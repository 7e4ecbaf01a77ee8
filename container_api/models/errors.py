"""Error models and exception classes for the Container Control API."""

import time
from typing import Optional, List
from pydantic import BaseModel, Field
from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration."""

    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    RESOLUTION_FAILED = "resolution_failed"
    RUNTIME_OPERATION_FAILED = "runtime_operation_failed"
    RUNTIME_UNAVAILABLE = "runtime_unavailable"
    INTERNAL_SERVER = "internal_server"


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: Optional[str] = Field(None, description="Field name for validation errors")
    message: str = Field(..., description="Human-readable error message")
    code: Optional[str] = Field(None, description="Machine-readable error code")


class ErrorResponse(BaseModel):
    """Standardized error response model."""

    message: str = Field(..., description="Short error message")
    details: Optional[str] = Field(
        None, description="Underlying failure reported by the runtime"
    )
    error_type: ErrorType = Field(..., description="Error category")
    errors: Optional[List[ErrorDetail]] = Field(
        None, description="Per-field validation errors"
    )
    request_id: Optional[str] = Field(
        None, description="Request identifier for tracking"
    )
    timestamp: float = Field(default_factory=time.time, description="Error timestamp")

    class Config:
        use_enum_values = True


# Custom Exception Classes


class ContainerAPIException(Exception):
    """Base exception for the Container Control API."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.INTERNAL_SERVER,
        status_code: int = 500,
        details: Optional[str] = None,
        request_id: Optional[str] = None,
    ):
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        self.details = details
        self.request_id = request_id
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert exception to error response model."""
        return ErrorResponse(
            message=self.message,
            details=self.details,
            error_type=self.error_type,
            request_id=self.request_id,
        )


class ValidationError(ContainerAPIException):
    """Request validation errors."""

    def __init__(self, message: str = "Validation failed", **kwargs):
        super().__init__(
            message=message, error_type=ErrorType.VALIDATION, status_code=400, **kwargs
        )


class ResolutionFailedError(ContainerAPIException):
    """An image reference could not be resolved or pulled."""

    def __init__(self, reference: str, details: Optional[str] = None, **kwargs):
        self.reference = reference
        super().__init__(
            message=f"Failed to resolve image '{reference}'",
            error_type=ErrorType.RESOLUTION_FAILED,
            status_code=500,
            details=details,
            **kwargs,
        )


class RuntimeOperationError(ContainerAPIException):
    """The runtime rejected or failed a container operation."""

    def __init__(
        self,
        operation: str,
        target: Optional[str] = None,
        details: Optional[str] = None,
        **kwargs,
    ):
        self.operation = operation
        self.target = target
        message = f"Runtime operation '{operation}' failed"
        if target:
            message = f"{message} for '{target}'"
        super().__init__(
            message=message,
            error_type=ErrorType.RUNTIME_OPERATION_FAILED,
            status_code=500,
            details=details,
            **kwargs,
        )


class RuntimeUnavailableError(ContainerAPIException):
    """The container runtime could not be reached."""

    def __init__(
        self,
        operation: str,
        details: Optional[str] = None,
        **kwargs,
    ):
        self.operation = operation
        super().__init__(
            message=f"Container runtime unavailable during '{operation}'",
            error_type=ErrorType.RUNTIME_UNAVAILABLE,
            status_code=503,
            details=details,
            **kwargs,
        )
