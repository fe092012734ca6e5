"""Observabilidade: correlation_id para logs estruturados."""

from app.observability.correlation import (
    correlation_scope,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

__all__ = [
    "correlation_scope",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
