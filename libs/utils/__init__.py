"""Utility modules for the feature flags platform."""

from libs.utils.exceptions import (
    APIException,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from libs.utils.responses import error_response
from libs.utils.middleware import RequestLoggingMiddleware
from libs.utils.logging_config import configure_structured_logging, get_logger

__all__ = [
    "APIException",
    "ConfigurationError",
    "ConflictError",
    "NotFoundError",
    "ValidationError",
    "error_response",
    "RequestLoggingMiddleware",
    "configure_structured_logging",
    "get_logger",
]
