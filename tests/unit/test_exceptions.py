"""Tests for RotationError and its helper constructors."""

import pytest

from workforce_rotation.common.exceptions import (
    ErrorCode,
    RotationError,
    authentication_error,
    configuration_error,
    connection_error,
    fetch_error,
    malformed_payload_error,
    resource_not_found_error,
    timeout_error,
    validation_error,
)


class TestRotationError:

    def test_str_includes_code_and_cause(self):
        cause = ValueError("bad value")
        error = RotationError("Something failed", ErrorCode.COMPUTATION_ERROR, cause=cause)
        assert str(error) == "[COMPUTATION_001] Something failed (caused by: ValueError: bad value)"

    def test_to_dict(self):
        error = validation_error("Month must be between 1 and 12", field="month", value=13)
        assert error.to_dict() == {
            "type": "RotationError",
            "message": "Month must be between 1 and 12",
            "error_code": "VALIDATION_002",
            "error_name": "INVALID_ARGUMENT",
            "details": {"field": "month", "value": "13"},
            "is_retryable": False,
        }

    @pytest.mark.parametrize(
        "code, retryable",
        [
            (ErrorCode.TIMEOUT_ERROR, True),
            (ErrorCode.RETRYABLE_ERROR, True),
            (ErrorCode.CONFIG_MISSING, False),
        ],
    )
    def test_from_error_code_retryability(self, code, retryable):
        assert RotationError.from_error_code(code, "msg").is_retryable is retryable

    def test_from_error_code_explicit_override(self):
        error = RotationError.from_error_code(ErrorCode.TIMEOUT_ERROR, "msg", is_retryable=False)
        assert not error.is_retryable


class TestHelpers:

    @pytest.mark.parametrize(
        "factory, code, retryable",
        [
            (lambda: configuration_error("x", config_key="SAP_URLS"), ErrorCode.CONFIG_ERROR, False),
            (lambda: fetch_error("x", reference_date="2025-09-01"), ErrorCode.SNAPSHOT_FETCH_ERROR, False),
            (lambda: connection_error("x", host="sap"), ErrorCode.CONNECTION_ERROR, True),
            (lambda: authentication_error("x", status_code=401), ErrorCode.AUTH_ERROR, False),
            (lambda: timeout_error("x", timeout_seconds=5), ErrorCode.TIMEOUT_ERROR, True),
            (lambda: resource_not_found_error("x", resource_name="url"), ErrorCode.RESOURCE_NOT_FOUND, False),
            (lambda: malformed_payload_error("x", payload_type="list"), ErrorCode.MALFORMED_PAYLOAD, False),
        ],
    )
    def test_codes(self, factory, code, retryable):
        error = factory()
        assert error.error_code == code
        assert error.is_retryable is retryable

    def test_details_are_merged(self):
        error = fetch_error("x", status_code=503, details={"url": "u"}, is_retryable=True)
        assert error.details == {"url": "u", "status_code": 503}
        assert error.is_retryable

    def test_none_details_are_dropped(self):
        assert fetch_error("x").details == {}
