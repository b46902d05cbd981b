"""Unit tests for contract validation."""

import uuid

import pytest
from pydantic import ValidationError

from libs.contracts.error import (
    MAX_MESSAGE_LENGTH,
    ErrorCode,
    ErrorResponse,
    ServiceError,
    ValidationErrorDetail,
    truncate,
)
from libs.contracts.flag_spec import EvaluationRequest, EvaluationResponse, FlagCreate, FlagUpdate
from libs.utils.exceptions import ConfigurationError, ConflictError, NotFoundError
from libs.utils.responses import error_response


class TestFlagContracts:
    """Test flag contract validation."""

    def test_flag_create_valid(self):
        """Test valid flag create."""
        flag = FlagCreate(key="new-homepage", enabled=True, variants={"a": 50, "b": 50}, rollout=50)
        assert flag.key == "new-homepage"
        assert flag.variants == {"a": 50, "b": 50}

    def test_flag_create_defaults(self):
        flag = FlagCreate(key="k", enabled=False)
        assert flag.rollout == 100
        assert flag.variants == {}

    @pytest.mark.parametrize("rollout", [-1, 101])
    def test_flag_create_rollout_out_of_range(self, rollout):
        with pytest.raises(ValidationError):
            FlagCreate(key="k", enabled=True, rollout=rollout)

    def test_flag_create_empty_key(self):
        with pytest.raises(ValidationError):
            FlagCreate(key="", enabled=True)

    @pytest.mark.parametrize("variants", [{"a": 0}, {"a": -3}, {"": 1}])
    def test_flag_create_invalid_variants(self, variants):
        with pytest.raises(ValidationError):
            FlagCreate(key="k", enabled=True, variants=variants)

    def test_flag_create_forbids_extra_fields(self):
        with pytest.raises(ValidationError):
            FlagCreate(key="k", enabled=True, owner="me")

    def test_flag_update_all_optional(self):
        patch = FlagUpdate()
        assert patch.enabled is None
        assert patch.variants is None
        assert patch.rollout is None

    def test_flag_update_validates_rollout(self):
        with pytest.raises(ValidationError):
            FlagUpdate(rollout=250)

    def test_evaluation_request_requires_user(self):
        with pytest.raises(ValidationError):
            EvaluationRequest(key="k")

    def test_evaluation_request_key_length(self):
        assert EvaluationRequest(key="k" * 255, user_id="1").key == "k" * 255
        with pytest.raises(ValidationError):
            EvaluationRequest(key="k" * 256, user_id="1")

    def test_evaluation_response_variant_optional(self):
        assert EvaluationResponse(key="k", matched=False).variant is None


class TestErrorContracts:
    """Test error contract validation."""

    def test_error_response_valid(self):
        response = ErrorResponse(
            error=ServiceError(
                error_id=uuid.uuid4(),
                error_type="NotFoundError",
                error_code=ErrorCode.NOT_FOUND,
                message="flag not found: k",
                service="feature-flags-service",
            )
        )
        assert response.success is False
        assert response.validation_errors == []

    def test_service_error_forbids_extra_fields(self):
        with pytest.raises(ValidationError):
            ServiceError(
                error_id=uuid.uuid4(),
                error_type="X",
                error_code=ErrorCode.INTERNAL_ERROR,
                message="m",
                service="s",
                extra_field="nope",
            )


class TestErrorResponses:
    """Test exception to envelope rendering."""

    @pytest.mark.parametrize(
        "exc,status,code",
        [
            (NotFoundError("missing"), 404, "NOT_FOUND"),
            (ConflictError("taken"), 409, "CONFLICT"),
            (ConfigurationError("bad weights"), 500, "CONFIGURATION_ERROR"),
        ],
    )
    def test_error_response_shape(self, exc, status, code):
        request_id = str(uuid.uuid4())
        body = error_response(exc, "feature-flags-service", request_id)
        assert exc.status_code == status
        assert body["success"] is False
        assert body["error"]["error_code"] == code
        assert body["error"]["error_type"] == type(exc).__name__
        assert body["error"]["message"] == exc.message
        assert body["error"]["request_id"] == request_id
        assert body["error"]["service"] == "feature-flags-service"

    def test_error_response_carries_validation_errors(self):
        exc = NotFoundError(
            "missing",
            details={"key": "k"},
            validation_errors=[ValidationErrorDetail(field="key", message="unknown", value="k")],
        )
        body = error_response(exc, "svc")
        assert body["error"]["details"] == {"key": "k"}
        assert body["validation_errors"][0]["field"] == "key"
        assert body["error"]["request_id"] is None

    def test_long_message_is_clipped(self):
        """Test oversized messages still render an envelope."""
        key = "k" * 5000
        body = error_response(NotFoundError(f"flag not found: {key}", details={"key": key}), "svc")
        assert body["error"]["error_code"] == "NOT_FOUND"
        assert len(body["error"]["message"]) == MAX_MESSAGE_LENGTH
        assert body["error"]["message"].startswith("flag not found: kkk")
        assert body["error"]["message"].endswith("...")
        assert body["error"]["details"] == {"key": key}

    def test_truncate(self):
        assert truncate("short", 10) == "short"
        assert truncate("abcdefghij", 10) == "abcdefghij"
        assert truncate("abcdefghijk", 10) == "abcdefg..."
