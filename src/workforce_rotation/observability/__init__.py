"""Observability utilities for the workforce rotation engine."""

from .context import (
    ExecutionRequestContext,
    execution_request_scope,
    resolve_request_context,
    sanitize_extras,
)

__all__ = [
    "ExecutionRequestContext",
    "execution_request_scope",
    "resolve_request_context",
    "sanitize_extras",
]
