"""Protocolo dos hooks do applet.

Cada hook é um ponto de decisão síncrono e retorna um resultado
explícito (Allow/Veto, Retry/Abort) em vez de bool ou número.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.actions import ExecuteAction, InvocationContext
    from app.domain.activity import ActivityRequest, ActivityResponse
    from app.domain.decisions import GateDecision, RetryDecision


class AppletHooksProtocol(Protocol):
    """Estratégia de customização do applet."""

    def prepare_request(
        self,
        action: ExecuteAction,
        request: ActivityRequest,
    ) -> GateDecision:
        """Pode ajustar a requisição; Veto impede o envio."""
        ...

    def card_changing(self, payload: dict[str, Any]) -> GateDecision:
        """Veto cancela a troca de card sem erro."""
        ...

    def card_changed(self) -> None: ...

    def request_completed(self, response: ActivityResponse) -> RetryDecision:
        """Chamado em respostas de falha: decide retry e delay."""
        ...

    def create_progress_overlay(self, context: InvocationContext) -> Any | None:
        """Overlay customizado; None usa o spinner padrão do host."""
        ...
