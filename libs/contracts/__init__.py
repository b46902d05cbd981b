"""Strict contracts for all service boundaries."""

from libs.contracts.error import ErrorCode, ErrorResponse, ServiceError, ValidationErrorDetail
from libs.contracts.flag_spec import (
    EvaluationRequest,
    EvaluationResponse,
    Flag,
    FlagCreate,
    FlagUpdate,
)

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "ServiceError",
    "ValidationErrorDetail",
    "EvaluationRequest",
    "EvaluationResponse",
    "Flag",
    "FlagCreate",
    "FlagUpdate",
]
