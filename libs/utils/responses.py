"""Standardized response utilities."""

import uuid
from typing import Optional

from libs.contracts.error import MAX_MESSAGE_LENGTH, ErrorResponse, ServiceError, truncate
from libs.utils.exceptions import APIException


def error_response(
    exc: APIException, service: str, request_id: Optional[str] = None
) -> dict:
    """Create standardized error response."""
    body = ErrorResponse(
        error=ServiceError(
            error_id=uuid.uuid4(),
            error_type=type(exc).__name__,
            error_code=exc.error_code,
            message=truncate(exc.message, MAX_MESSAGE_LENGTH) or exc.error_code.value,
            details=exc.details,
            service=service,
            request_id=request_id,
        ),
        validation_errors=exc.validation_errors,
    )
    return body.model_dump(mode="json")
