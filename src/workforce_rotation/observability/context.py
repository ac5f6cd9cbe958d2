"""Shared observability context utilities."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional

from opentelemetry.trace import Status, StatusCode
from pydantic import ConfigDict, Field

from workforce_rotation.logging import get_logger
from workforce_rotation.logging.filters import request_id_var, user_id_var
from workforce_rotation.telemetry import get_tracer
from workforce_rotation.types.base import RotationBaseModel


class ExecutionRequestContext(RotationBaseModel):
    """Observability context propagated across a rotation request."""

    model_config = ConfigDict(frozen=False)

    request_id: str
    user_id: Optional[str] = None
    correlation_id: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)
    telemetry_base: Dict[str, str] = Field(default_factory=dict, exclude=True)

    @classmethod
    def generate(cls, **kwargs: Any) -> "ExecutionRequestContext":
        """Generate a new context with a unique request id."""
        ctx = cls(request_id=str(uuid.uuid4()), **kwargs)
        ctx.telemetry_base = ctx.to_telemetry_dict()
        return ctx

    @staticmethod
    def _stringify(value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)

    def to_telemetry_dict(self) -> Dict[str, str]:
        payload: Dict[str, str] = {"request_id": self.request_id}
        if self.user_id:
            payload["user_id"] = self.user_id
        if self.correlation_id:
            payload["correlation_id"] = self.correlation_id
        for key, value in (self.attributes or {}).items():
            sanitized = self._stringify(value)
            if sanitized is not None:
                payload[f"ctx.{key}"] = sanitized
        return payload


@contextmanager
def execution_request_scope(
    ctx: ExecutionRequestContext,
    *,
    operation: Optional[str] = None,
) -> Iterator[None]:
    """Apply logging + tracing scope for a request/operation.

    The previous context variable values are restored on exit, so scopes
    can nest (an API call wrapping an aggregator call) without clearing
    the outer request id.
    """
    ctx.telemetry_base = ctx.to_telemetry_dict()

    request_token = request_id_var.set(ctx.request_id)
    user_token = user_id_var.set(ctx.user_id)

    tracer = get_tracer()
    span_name = operation or "workforce_rotation.request"
    span_attributes = {f"workforce_rotation.{key}": value for key, value in ctx.telemetry_base.items()}
    if operation:
        span_attributes["workforce_rotation.operation.name"] = operation

    with tracer.start_as_current_span(span_name) as span:
        for key, value in span_attributes.items():
            span.set_attribute(key, value)

        try:
            yield
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR))
            get_logger(__name__).error(
                "Rotation request failed",
                extra={**ctx.telemetry_base, "operation.name": span_name},
                exc_info=True,
            )
            raise
        finally:
            user_id_var.reset(user_token)
            request_id_var.reset(request_token)


def resolve_request_context(ctx: Optional[Any]) -> ExecutionRequestContext:
    """Normalize inbound context data into an ExecutionRequestContext."""
    if isinstance(ctx, ExecutionRequestContext):
        if not ctx.telemetry_base:
            ctx.telemetry_base = ctx.to_telemetry_dict()
        return ctx

    if ctx is None:
        return ExecutionRequestContext.generate()

    if isinstance(ctx, str):
        ctx_obj = ExecutionRequestContext(request_id=ctx)
        ctx_obj.telemetry_base = ctx_obj.to_telemetry_dict()
        return ctx_obj

    data: Dict[str, Any] = {}

    if isinstance(ctx, Mapping):
        data = dict(ctx)
    else:
        # Web frameworks hand us request/session objects
        for key in ("request_id", "id"):
            if hasattr(ctx, key):
                data["request_id"] = getattr(ctx, key)
                break
        for key in ("user_id", "correlation_id", "attributes"):
            if hasattr(ctx, key):
                data[key] = getattr(ctx, key)

    request_id = data.get("request_id") or data.get("id")
    request_id = str(request_id) if request_id else str(uuid.uuid4())

    attributes = data.get("attributes") or {}
    if not isinstance(attributes, dict):
        attributes = {"value": str(attributes)}

    ctx_obj = ExecutionRequestContext(
        request_id=request_id,
        user_id=data.get("user_id"),
        correlation_id=data.get("correlation_id"),
        attributes=attributes,
    )
    ctx_obj.telemetry_base = ctx_obj.to_telemetry_dict()
    return ctx_obj


def sanitize_extras(
    extra: Optional[Dict[str, Any]],
    *,
    prefix: Optional[str] = None,
) -> Dict[str, str]:
    """Sanitize arbitrary telemetry extras into a JSON-safe dict."""
    if not extra:
        return {}

    result: Dict[str, str] = {}
    for key, value in extra.items():
        sanitized = ExecutionRequestContext._stringify(value)
        if sanitized is None:
            continue
        field = f"{prefix}{key}" if prefix else str(key)
        result[field] = sanitized
    return result

