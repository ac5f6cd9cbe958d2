import asyncio
import functools
import time
from typing import Any, Callable, Dict, Optional, TypeVar

from opentelemetry.trace import Status, StatusCode

from workforce_rotation.telemetry import get_tracer


F = TypeVar('F', bound=Callable[..., Any])
T = TypeVar('T')

logger = None


def _get_logger():
    """Get logger instance lazily."""
    global logger
    if logger is None:
        from workforce_rotation.logging import get_logger
        logger = get_logger(__name__)
    return logger


def traced(
    span_name: Optional[str] = None,
    *,
    attribute_getter: Optional[Callable[..., Optional[Dict[str, Any]]]] = None,
) -> Callable[[F], F]:
    """Instrument a function with an OpenTelemetry span.

    Args:
        span_name: Optional explicit span name. Defaults to module-qualified function name.
        attribute_getter: Called with the function's arguments; returns span
            attributes. ``None`` values are skipped.
    """

    def decorator(func: F) -> F:
        name = span_name or f"{func.__module__}.{func.__qualname__}"

        def _collect_attributes(args: tuple, kwargs: dict) -> Dict[str, Any]:
            if attribute_getter is None:
                return {}
            collected = attribute_getter(*args, **kwargs) or {}
            return {k: v for k, v in collected.items() if v is not None}

        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with get_tracer(func.__module__).start_as_current_span(name) as span:
                    for key, value in _collect_attributes(args, kwargs).items():
                        span.set_attribute(key, value)

                    try:
                        return await func(*args, **kwargs)
                    except Exception as exc:
                        span.record_exception(exc)
                        span.set_status(Status(StatusCode.ERROR, str(exc)))
                        raise

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer(func.__module__).start_as_current_span(name) as span:
                for key, value in _collect_attributes(args, kwargs).items():
                    span.set_attribute(key, value)

                try:
                    return func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise

        return sync_wrapper  # type: ignore[return-value]

    return decorator


def retry_with_backoff(
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    retry_condition: Optional[Callable[[Exception], bool]] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator for retrying blocking operations with exponential backoff.

    The delay between retries follows
    ``delay = min(initial_delay * (exponential_base ** attempt), max_delay)``.

    The rotation engine itself never retries; this decorator belongs to the
    snapshot source adapters, which own transport-level resilience.

    Args:
        max_retries: Maximum number of retry attempts. Default is 3.
        initial_delay: Initial delay in seconds between retries. Default is 1.0.
        max_delay: Maximum delay in seconds (caps exponential growth). Default is 60.0.
        exponential_base: Base for exponential backoff calculation. Default is 2.0.
        retry_condition: Optional function that takes an exception and returns True
            if the operation should be retried. If None, every exception is retried.

    Raises:
        The last exception encountered if all retry attempts fail.

    Example:
        >>> @retry_with_backoff(
        ...     max_retries=2,
        ...     retry_condition=lambda exc: getattr(exc, "is_retryable", False),
        ... )
        ... def get_snapshot_page(url):
        ...     return session.get(url)

    Notes:
        - Retry attempts are logged at WARNING level
        - Final failure is logged at ERROR level
        - Total attempts = max_retries + 1 (initial attempt + retries)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            delay = initial_delay

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    retryable = retry_condition is None or retry_condition(e)
                    if retryable and attempt < max_retries:
                        _get_logger().warning(
                            f"Attempt {attempt + 1} failed for {func.__name__}: {e}. "
                            f"Retrying in {delay} seconds..."
                        )
                        time.sleep(delay)
                        delay = min(delay * exponential_base, max_delay)
                    else:
                        if attempt == max_retries and max_retries > 0:
                            _get_logger().error(
                                f"All {max_retries + 1} attempts failed for {func.__name__}"
                            )
                        raise
            raise AssertionError("unreachable")

        return wrapper

    return decorator
