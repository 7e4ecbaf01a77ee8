"""Global error handlers for the Container Control API."""

# Standard library imports
import traceback
from typing import Union

# Third-party imports
import structlog
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

# Local application imports
from ..models.errors import (
    ContainerAPIException,
    ErrorResponse,
    ErrorType,
    ErrorDetail,
)
from .id_generator import REQUEST_ID_HEADER, current_request_id
from .request_helpers import get_client_ip

logger = structlog.get_logger(__name__)


async def container_api_exception_handler(
    request: Request, exc: ContainerAPIException
) -> JSONResponse:
    """Handle custom ContainerAPIException instances."""

    # Generate request ID if not present
    if not exc.request_id:
        exc.request_id = current_request_id(request)

    log_data = {
        "error_type": exc.error_type.value,
        "status_code": exc.status_code,
        "message": exc.message,
        "details": exc.details,
        "request_id": exc.request_id,
        "path": request.url.path,
        "method": request.method,
        "client_ip": get_client_ip(request),
    }

    # Log with appropriate level based on error type
    if exc.status_code >= 500:
        logger.error("Server error occurred", **log_data)
    elif exc.status_code >= 400:
        logger.warning("Client error occurred", **log_data)
    else:
        logger.info("Error handled", **log_data)

    error_response = exc.to_response()
    return JSONResponse(
        status_code=exc.status_code, content=error_response.model_dump()
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException instances."""

    request_id = current_request_id(request)

    # Map HTTP status codes to error types
    error_type_mapping = {
        400: ErrorType.VALIDATION,
        404: ErrorType.RESOURCE_NOT_FOUND,
        405: ErrorType.VALIDATION,
        415: ErrorType.VALIDATION,
        422: ErrorType.VALIDATION,
        500: ErrorType.INTERNAL_SERVER,
        502: ErrorType.RUNTIME_OPERATION_FAILED,
        503: ErrorType.RUNTIME_UNAVAILABLE,
    }

    error_type = error_type_mapping.get(exc.status_code, ErrorType.INTERNAL_SERVER)

    logger.warning(
        "HTTP exception occurred",
        status_code=exc.status_code,
        detail=exc.detail,
        request_id=request_id,
        path=request.url.path,
        method=request.method,
        client_ip=get_client_ip(request),
    )

    error_response = ErrorResponse(
        message=str(exc.detail), error_type=error_type, request_id=request_id
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, PydanticValidationError]
) -> JSONResponse:
    """Handle request validation errors."""

    request_id = current_request_id(request)

    # Extract validation error details
    errors = []
    for error in exc.errors():
        field_path = " -> ".join(str(loc) for loc in error["loc"])
        errors.append(
            ErrorDetail(field=field_path, message=error["msg"], code=error["type"])
        )

    logger.warning(
        "Validation error occurred",
        request_id=request_id,
        path=request.url.path,
        method=request.method,
        validation_errors=[
            {"field": d.field, "message": d.message, "code": d.code} for d in errors
        ],
        client_ip=get_client_ip(request),
    )

    error_response = ErrorResponse(
        message="Request validation failed",
        details="; ".join(f"{d.field}: {d.message}" for d in errors) or None,
        error_type=ErrorType.VALIDATION,
        errors=errors,
        request_id=request_id,
    )

    return JSONResponse(status_code=422, content=error_response.model_dump())


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""

    request_id = current_request_id(request)

    # Log the full exception with traceback
    logger.error(
        "Unexpected exception occurred",
        request_id=request_id,
        path=request.url.path,
        method=request.method,
        exception_type=type(exc).__name__,
        exception_message=str(exc),
        traceback=traceback.format_exc(),
        client_ip=get_client_ip(request),
    )

    # Exception text only, the traceback stays in the logs
    error_response = ErrorResponse(
        message="An unexpected error occurred",
        details=str(exc) or type(exc).__name__,
        error_type=ErrorType.INTERNAL_SERVER,
        request_id=request_id,
    )

    # Runs outside the logging middleware, so the id header is set here
    return JSONResponse(
        status_code=500,
        content=error_response.model_dump(),
        headers={REQUEST_ID_HEADER: request_id},
    )
