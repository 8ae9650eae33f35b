"""Registro de métricas via structured logging.

Métricas suportadas:
- Latência: duração total de uma sequência de invocação
- Outcome: estado terminal e número de tentativas da sequência

Uso:
    start = time.perf_counter()
    # ... sequência ...
    record_latency("activity_executor", "execute", (time.perf_counter() - start) * 1000)
    record_activity_outcome("SUCCEEDED", attempts=2, context="UserInteraction")
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "activity_executor")
        operation: Nome da operação (ex: "execute")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (usa o do contexto se None)
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_activity_outcome(
    state: str,
    attempts: int,
    context: str,
) -> None:
    """Registra o estado terminal de uma sequência.

    Args:
        state: Estado terminal (SUCCEEDED, GIVEN_UP, ABORTED)
        attempts: Quantidade de envios realizados
        context: Contexto de invocação
    """
    logger.info(
        "metric_activity_outcome",
        extra={
            "metric_type": "activity_outcome",
            "terminal_state": state,
            "attempts": attempts,
            "invocation_context": context,
        },
    )
