"""Error envelope returned by every failing API call."""

from typing import Any, Dict, List, Optional, Literal
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime, timezone
from uuid import UUID

MAX_MESSAGE_LENGTH = 2000
MAX_FIELD_LENGTH = 255


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorCode(str, Enum):
    """Machine-readable error codes, one per HTTP failure class."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ValidationErrorDetail(BaseModel):
    """One rejected request field."""

    model_config = ConfigDict(extra="forbid")

    field: str = Field(..., min_length=1, max_length=MAX_FIELD_LENGTH, description="Dotted path to the field")
    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH, description="Why it was rejected")
    value: Any = Field(None, description="Rejected scalar value, if any")


class ServiceError(BaseModel):
    model_config = ConfigDict(extra="forbid")

    error_id: UUID
    error_type: str = Field(..., min_length=1, description="Exception class name")
    error_code: ErrorCode
    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)
    details: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=_utcnow)
    service: str = Field(..., min_length=1)
    request_id: Optional[UUID] = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    success: Literal[False] = False
    error: ServiceError
    validation_errors: List[ValidationErrorDetail] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)


def truncate(text: str, limit: int) -> str:
    """Clip ``text`` to ``limit`` characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
