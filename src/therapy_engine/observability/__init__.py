"""Observabilidade: logging JSON, correlation_id e operação corrente."""

from therapy_engine.observability.context import (
    correlation_scope,
    get_correlation_id,
    get_operation,
    operation_scope,
)
from therapy_engine.observability.logging import (
    CLINICAL_FIELDS,
    EngineContextFilter,
    configure_logging,
    get_logger,
    log_rejection,
)

__all__ = [
    "CLINICAL_FIELDS",
    "EngineContextFilter",
    "configure_logging",
    "correlation_scope",
    "get_correlation_id",
    "get_logger",
    "get_operation",
    "log_rejection",
    "operation_scope",
]
