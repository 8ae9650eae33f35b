"""Observabilidade — correlação de sequências e métricas.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_activity_outcome
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    get_invocation_context,
    reset_correlation_id,
    reset_invocation_context,
    set_correlation_id,
    set_invocation_context,
)
from app.observability.metrics import (
    record_activity_outcome,
    record_latency,
)

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "get_invocation_context",
    "record_activity_outcome",
    "record_latency",
    "reset_correlation_id",
    "reset_invocation_context",
    "set_correlation_id",
    "set_invocation_context",
]
