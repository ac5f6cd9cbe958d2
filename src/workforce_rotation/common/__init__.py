"""Common exceptions for the workforce rotation engine.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions are RotationError
    instances carrying structured error information.

Error Taxonomy:
    - Invalid parameters (INVALID_ARGUMENT): rejected before any fetch
    - Fetch failures (SNAPSHOT_FETCH_ERROR, CONNECTION_ERROR, AUTH_ERROR,
      TIMEOUT_ERROR, MALFORMED_PAYLOAD): degrade a single month inside an
      annual computation, fatal for a single-month request
    - Unparsable dates are never errors; the date normalizer absorbs them
"""

from workforce_rotation.common.exceptions import (
    RotationError,
    ErrorCode,
    # Helper functions
    configuration_error,
    validation_error,
    fetch_error,
    connection_error,
    authentication_error,
    timeout_error,
    resource_not_found_error,
    malformed_payload_error,
)

__all__ = [
    # Base Exception and Error Codes
    "RotationError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "validation_error",
    "fetch_error",
    "connection_error",
    "authentication_error",
    "timeout_error",
    "resource_not_found_error",
    "malformed_payload_error",
]
