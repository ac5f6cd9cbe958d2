from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for rotation engine operations.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.
    Each category has a specific prefix for easy identification.

    Attributes:
        CONFIG_*: Configuration-related errors
        VALIDATION_*: Input validation errors
        CONNECTION_*: Network, authorization and timeout errors
        SOURCE_*: Errors reported by or about the snapshot source
        COMPUTATION_*: Indicator computation errors
        RETRY_*: Transient/retryable errors
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"
    CONFIG_MISSING = "CONFIG_002"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_001"
    INVALID_ARGUMENT = "VALIDATION_002"

    # Connection errors
    CONNECTION_ERROR = "CONNECTION_001"
    AUTH_ERROR = "CONNECTION_002"
    TIMEOUT_ERROR = "CONNECTION_003"

    # Source errors
    SNAPSHOT_FETCH_ERROR = "SOURCE_001"
    RESOURCE_NOT_FOUND = "SOURCE_002"
    MALFORMED_PAYLOAD = "SOURCE_003"

    # Computation errors
    COMPUTATION_ERROR = "COMPUTATION_001"

    # Retry/Transient errors
    RETRYABLE_ERROR = "RETRY_001"


class RotationError(Exception):
    """Base exception for all rotation engine errors.

    A single exception class that uses error codes for categorization
    instead of a deep hierarchy of exception types.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
        is_retryable: Whether the error is transient and can be retried
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.COMPUTATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        is_retryable: bool = False
    ):
        """Initialize rotation error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
            is_retryable: Whether error is transient
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause
        self.is_retryable = is_retryable

        # Lazy import to avoid circular dependency
        from workforce_rotation.logging import get_logger
        logger = get_logger(__name__)
        logger.debug(
            message,
            extra={
                "error_code": error_code.value,
                "error_details": self.details,
                "is_retryable": is_retryable,
            },
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
            "is_retryable": self.is_retryable
        }

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        message: str,
        **kwargs
    ) -> "RotationError":
        """Create exception from error code.

        Args:
            error_code: Error code
            message: Error message
            **kwargs: Additional arguments for RotationError

        Returns:
            RotationError instance
        """
        # Transient by nature unless the caller says otherwise
        if error_code in [
            ErrorCode.TIMEOUT_ERROR,
            ErrorCode.RETRYABLE_ERROR,
        ]:
            kwargs.setdefault('is_retryable', True)

        return cls(message=message, error_code=error_code, **kwargs)


def _merge_details(kwargs: Dict[str, Any], **extra: Any) -> Dict[str, Any]:
    details = dict(kwargs.pop('details', None) or {})
    details.update({k: v for k, v in extra.items() if v is not None})
    return details


# Helper functions for common error scenarios
def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> RotationError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        RotationError with CONFIG_ERROR code
    """
    details = _merge_details(kwargs, config_key=config_key)
    return RotationError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **kwargs
    )


def validation_error(
    message: str,
    field: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> RotationError:
    """Create an invalid-argument error.

    Raised for caller-supplied parameters (year, month) that fall outside
    the supported range. These are raised before any snapshot is fetched.

    Args:
        message: Error message
        field: Parameter that failed validation
        value: Invalid value
        **kwargs: Additional error details

    Returns:
        RotationError with INVALID_ARGUMENT code
    """
    details = _merge_details(
        kwargs,
        field=field,
        value=str(value) if value is not None else None,
    )
    return RotationError(
        message=message,
        error_code=ErrorCode.INVALID_ARGUMENT,
        details=details,
        **kwargs
    )


def fetch_error(
    message: str,
    reference_date: Optional[Any] = None,
    status_code: Optional[int] = None,
    **kwargs
) -> RotationError:
    """Create a snapshot fetch error.

    Args:
        message: Error message
        reference_date: Reference date of the snapshot being fetched
        status_code: HTTP status code, when the source answered
        **kwargs: Additional error details

    Returns:
        RotationError with SNAPSHOT_FETCH_ERROR code
    """
    details = _merge_details(
        kwargs,
        reference_date=str(reference_date) if reference_date is not None else None,
        status_code=status_code,
    )
    return RotationError(
        message=message,
        error_code=ErrorCode.SNAPSHOT_FETCH_ERROR,
        details=details,
        **kwargs
    )


def connection_error(
    message: str,
    host: Optional[str] = None,
    **kwargs
) -> RotationError:
    """Create a retryable connection error.

    Args:
        message: Error message
        host: Host/endpoint that failed
        **kwargs: Additional error details

    Returns:
        RotationError with CONNECTION_ERROR code and is_retryable=True
    """
    details = _merge_details(kwargs, host=host)
    kwargs.setdefault('is_retryable', True)
    return RotationError(
        message=message,
        error_code=ErrorCode.CONNECTION_ERROR,
        details=details,
        **kwargs
    )


def authentication_error(
    message: str,
    status_code: Optional[int] = None,
    **kwargs
) -> RotationError:
    """Create an authentication/authorization error.

    Args:
        message: Error message
        status_code: HTTP status code returned by the source
        **kwargs: Additional error details

    Returns:
        RotationError with AUTH_ERROR code
    """
    details = _merge_details(kwargs, status_code=status_code)
    return RotationError(
        message=message,
        error_code=ErrorCode.AUTH_ERROR,
        details=details,
        **kwargs
    )


def timeout_error(
    message: str,
    timeout_seconds: Optional[float] = None,
    **kwargs
) -> RotationError:
    """Create a timeout error.

    Args:
        message: Error message
        timeout_seconds: Timeout that elapsed
        **kwargs: Additional error details

    Returns:
        RotationError with TIMEOUT_ERROR code and is_retryable=True
    """
    details = _merge_details(kwargs, timeout_seconds=timeout_seconds)
    kwargs.setdefault('is_retryable', True)
    return RotationError(
        message=message,
        error_code=ErrorCode.TIMEOUT_ERROR,
        details=details,
        **kwargs
    )


def resource_not_found_error(
    message: str,
    resource_name: Optional[str] = None,
    **kwargs
) -> RotationError:
    """Create a resource not found error.

    Args:
        message: Error message
        resource_name: URL or name of the missing resource
        **kwargs: Additional error details

    Returns:
        RotationError with RESOURCE_NOT_FOUND code
    """
    details = _merge_details(kwargs, resource_name=resource_name)
    return RotationError(
        message=message,
        error_code=ErrorCode.RESOURCE_NOT_FOUND,
        details=details,
        **kwargs
    )


def malformed_payload_error(
    message: str,
    payload_type: Optional[str] = None,
    **kwargs
) -> RotationError:
    """Create a malformed upstream payload error.

    Args:
        message: Error message
        payload_type: Python type name of the payload that was received
        **kwargs: Additional error details

    Returns:
        RotationError with MALFORMED_PAYLOAD code
    """
    details = _merge_details(kwargs, payload_type=payload_type)
    return RotationError(
        message=message,
        error_code=ErrorCode.MALFORMED_PAYLOAD,
        details=details,
        **kwargs
    )
