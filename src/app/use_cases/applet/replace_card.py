"""Troca do card exibido pelo applet.

Fluxo:
1. Resolve template e dados vinculados (`$data`) do payload
2. Expande o template quando há dados
3. Parseia e valida appId
4. Consulta o hook card_changing (Veto cancela sem erro)
5. Renderiza, troca a sessão e substitui a saída visual
6. Conecta as ações do card ao executor e dispara auto-refresh
7. Notifica card_changed

Nenhuma exceção escapa de replace(). Falhas até o passo 4 voltam como
CardReplacementResult.failed e o card anterior continua exibido; depois
do commit da sessão a troca vale, e falhas de saída visual, auto-refresh
ou card_changed voltam em post_swap_errors.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.actions import ExecuteAction, InvocationContext
from app.domain.card import ADAPTIVE_CARD_TYPE
from app.domain.decisions import Veto
from app.domain.session import AppletSession
from utils.errors import TemplateExpansionError, ValidationError

if TYPE_CHECKING:
    from app.domain.card import AppletCard
    from app.protocols.card_parser import CardParserProtocol
    from app.protocols.hooks import AppletHooksProtocol
    from app.protocols.render_host import RenderHostProtocol
    from app.protocols.template_engine import TemplateEngineProtocol

logger = logging.getLogger(__name__)

DATA_KEY = "$data"

InvocationStarter = Callable[[str, ExecuteAction, InvocationContext], Any]
SessionCommitter = Callable[[AppletSession], None]


@dataclass(frozen=True, slots=True)
class CardReplacementResult:
    """
    Resultado de uma troca de card.

    Attributes:
        success: Se a troca foi aplicada (nova sessão commitada)
        session: Nova sessão (se success=True)
        vetoed: Se o hook card_changing cancelou a troca
        error: Falha que impediu a troca (se houver)
        post_swap_errors: Falhas depois da troca já aplicada (saída visual,
            auto-refresh, card_changed); não desfazem a troca
    """

    success: bool
    session: AppletSession | None = None
    vetoed: bool = False
    error: Exception | None = None
    post_swap_errors: tuple[Exception, ...] = ()

    def __post_init__(self) -> None:
        if self.success and self.session is None:
            raise ValueError("Troca bem-sucedida deve incluir session")
        if not self.success and not self.vetoed and self.error is None:
            raise ValueError("Troca falha deve incluir error")

    @classmethod
    def replaced(
        cls,
        session: AppletSession,
        post_swap_errors: tuple[Exception, ...] = (),
    ) -> CardReplacementResult:
        return cls(success=True, session=session, post_swap_errors=post_swap_errors)

    @classmethod
    def cancelled(cls) -> CardReplacementResult:
        return cls(success=False, vetoed=True)

    @classmethod
    def failed(cls, error: Exception) -> CardReplacementResult:
        return cls(success=False, error=error)


class CardReplacer:
    """Aplica um novo payload de card e troca a saída renderizada."""

    def __init__(
        self,
        host: RenderHostProtocol,
        parser: CardParserProtocol,
        hooks: AppletHooksProtocol,
        start_invocation: InvocationStarter,
        commit: SessionCommitter,
        template_engine: TemplateEngineProtocol | None = None,
    ) -> None:
        self._host = host
        self._parser = parser
        self._hooks = hooks
        self._start_invocation = start_invocation
        self._commit = commit
        self._template_engine = template_engine

    def replace(self, current: AppletSession, payload: Any) -> CardReplacementResult:
        """Troca o card atual pelo descrito em payload.

        Args:
            current: Sessão exibida no momento
            payload: Payload de card (com `$data` opcional) ou, para um
                objeto que não é card, novos dados para o template atual

        Returns:
            CardReplacementResult (nunca levanta)
        """
        try:
            return self._replace(current, payload)
        except Exception as exc:
            return CardReplacementResult.failed(exc)

    def _replace(self, current: AppletSession, payload: Any) -> CardReplacementResult:
        template, data = self._resolve_template(current, payload)
        card = self._parser.parse(self._expand(template, data))

        if not card.is_valid:
            raise ValidationError("Invalid card payload. The appId property is missing.")

        decision = self._hooks.card_changing(template)
        if isinstance(decision, Veto):
            logger.info("card_swap_vetoed", extra={"reason": decision.reason})
            return CardReplacementResult.cancelled()

        rendered = self._host.render_card(card)

        # A partir do commit a troca está feita: falhas seguintes só são reportadas
        session = AppletSession(card=card, payload=template, data=data)
        self._commit(session)
        self._wire_actions(card)
        errors: list[Exception] = []

        if not self._after_swap("card_output_swap_failed", card, errors, self._host.clear):
            return CardReplacementResult.replaced(session, tuple(errors))
        if rendered is None:
            logger.warning("card_render_empty", extra={"app_id": card.app_id})
            return CardReplacementResult.replaced(session)
        if not self._after_swap(
            "card_output_swap_failed",
            card,
            errors,
            lambda: self._host.append(rendered),
        ):
            return CardReplacementResult.replaced(session, tuple(errors))

        if card.auto_refresh is not None:
            logger.info(
                "card_auto_refresh_started",
                extra={"app_id": card.app_id, "verb": card.auto_refresh.action.verb},
            )
            self._after_swap(
                "card_auto_refresh_failed",
                card,
                errors,
                lambda: self._start_invocation(
                    card.app_id,
                    card.auto_refresh.action,
                    InvocationContext.AUTO_REFRESH,
                ),
            )

        self._after_swap("card_changed_hook_failed", card, errors, self._hooks.card_changed)
        return CardReplacementResult.replaced(session, tuple(errors))

    @staticmethod
    def _after_swap(
        event: str,
        card: AppletCard,
        errors: list[Exception],
        step: Callable[[], Any],
    ) -> bool:
        """Executa um passo posterior ao commit, registrando a falha em errors."""
        try:
            step()
        except Exception as exc:
            logger.error(
                event,
                extra={"app_id": card.app_id, "error_type": type(exc).__name__},
                exc_info=exc,
            )
            errors.append(exc)
            return False
        return True

    def _resolve_template(
        self,
        current: AppletSession,
        payload: Any,
    ) -> tuple[dict[str, Any], Any]:
        if not isinstance(payload, dict):
            raise ValidationError(
                f"Card payload must be an object, got {type(payload).__name__}"
            )

        if payload.get("type") == ADAPTIVE_CARD_TYPE:
            template = {key: value for key, value in payload.items() if key != DATA_KEY}
            return template, payload.get(DATA_KEY)

        # Objeto que não é card: novos dados para o template exibido
        if current.payload is None:
            raise ValidationError("No card template to bind data to.")
        return current.payload, payload

    def _expand(self, template: dict[str, Any], data: Any) -> dict[str, Any]:
        if data is None:
            return template
        if self._template_engine is None:
            raise TemplateExpansionError("Card has bound data but no template engine is set.")
        try:
            return self._template_engine.expand(template, data)
        except Exception as exc:
            raise TemplateExpansionError(f"Template expansion failed: {exc}") from exc

    def _wire_actions(self, card: AppletCard) -> None:
        app_id = card.app_id

        def _on_execute_action(action: ExecuteAction) -> Any:
            return self._start_invocation(app_id, action, InvocationContext.USER_INTERACTION)

        card.on_execute_action = _on_execute_action
