"""Filters de logging para injeção de contexto.

Campos injetados:
- correlation_id: ID da sequência de invocação em andamento
- invocation_context: motivo da invocação (UserInteraction/AutoRefresh)
- service: nome do serviço
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id, invocation_context e service em cada record.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
        invocation_context_getter: Função que retorna o contexto de invocação atual.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        invocation_context_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")
        self._get_invocation_context = invocation_context_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record sem nunca descartá-lo.

        Valores passados explicitamente via `extra` são preservados.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        context = getattr(record, "invocation_context", None)
        record.invocation_context = context if context else self._get_invocation_context()
        record.service = self._service_name
        return True
