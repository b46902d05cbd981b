"""Custom exceptions for the feature flags platform."""

from typing import Any, Dict, List, Optional

from libs.contracts.error import ErrorCode, ValidationErrorDetail


class APIException(Exception):
    """Base API exception."""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        validation_errors: Optional[List[ValidationErrorDetail]] = None,
    ):
        self.message = message
        self.details = details or {}
        self.validation_errors = validation_errors or []
        super().__init__(message)


class ValidationError(APIException):
    """Validation error exception."""

    error_code = ErrorCode.VALIDATION_ERROR
    status_code = 422


class NotFoundError(APIException):
    """Resource not found."""

    error_code = ErrorCode.NOT_FOUND
    status_code = 404


class ConflictError(APIException):
    """Resource already exists."""

    error_code = ErrorCode.CONFLICT
    status_code = 409


class ConfigurationError(APIException):
    """Stored configuration cannot be served."""

    error_code = ErrorCode.CONFIGURATION_ERROR
    status_code = 500
