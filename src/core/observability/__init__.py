"""Observabilidad: correlation id por request y logging JSON estructurado."""

from core.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from core.observability.log_setup import (
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    log_fallback,
)

__all__ = [
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "generate_correlation_id",
    "get_correlation_id",
    "log_fallback",
    "reset_correlation_id",
    "set_correlation_id",
]
