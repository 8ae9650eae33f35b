"""Implementações de AppletHooksProtocol.

DefaultAppletHooks permite tudo e repete falhas após o delay padrão.
CallbackHooks adapta callbacks no estilo `on_*`, com as convenções
bool (False veta) e número (negativo aborta o retry).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from app.domain.decisions import Abort, Allow, GateDecision, Retry, RetryDecision, Veto
from config.settings.applet import DEFAULT_TIME_BETWEEN_ATTEMPTS_MS

if TYPE_CHECKING:
    from app.domain.actions import ExecuteAction, InvocationContext
    from app.domain.activity import ActivityRequest, ActivityResponse


class DefaultAppletHooks:
    """Hooks neutros: nenhum veto, retry com delay fixo, spinner padrão."""

    def __init__(self, default_delay_ms: int = DEFAULT_TIME_BETWEEN_ATTEMPTS_MS) -> None:
        self._default_delay_ms = default_delay_ms

    def prepare_request(
        self,
        action: ExecuteAction,
        request: ActivityRequest,
    ) -> GateDecision:
        return Allow()

    def card_changing(self, payload: dict[str, Any]) -> GateDecision:
        return Allow()

    def card_changed(self) -> None:
        return None

    def request_completed(self, response: ActivityResponse) -> RetryDecision:
        return Retry(self._default_delay_ms)

    def create_progress_overlay(self, context: InvocationContext) -> Any | None:
        return None


class CallbackHooks(DefaultAppletHooks):
    """Hooks montados a partir de callbacks opcionais.

    Callbacks ausentes caem no comportamento de DefaultAppletHooks.
    """

    def __init__(
        self,
        *,
        on_prepare_activity_request: Callable[[ExecuteAction, ActivityRequest], bool] | None = None,
        on_card_changing: Callable[[dict[str, Any]], bool] | None = None,
        on_card_changed: Callable[[], None] | None = None,
        on_activity_request_completed: Callable[[ActivityResponse], float] | None = None,
        on_create_progress_overlay: Callable[[InvocationContext], Any | None] | None = None,
        default_delay_ms: int = DEFAULT_TIME_BETWEEN_ATTEMPTS_MS,
    ) -> None:
        super().__init__(default_delay_ms)
        self._on_prepare_activity_request = on_prepare_activity_request
        self._on_card_changing = on_card_changing
        self._on_card_changed = on_card_changed
        self._on_activity_request_completed = on_activity_request_completed
        self._on_create_progress_overlay = on_create_progress_overlay

    def prepare_request(
        self,
        action: ExecuteAction,
        request: ActivityRequest,
    ) -> GateDecision:
        if self._on_prepare_activity_request is None:
            return super().prepare_request(action, request)
        if self._on_prepare_activity_request(action, request):
            return Allow()
        return Veto("prepare_request_callback")

    def card_changing(self, payload: dict[str, Any]) -> GateDecision:
        if self._on_card_changing is None:
            return super().card_changing(payload)
        return Allow() if self._on_card_changing(payload) else Veto("card_changing_callback")

    def card_changed(self) -> None:
        if self._on_card_changed is not None:
            self._on_card_changed()

    def request_completed(self, response: ActivityResponse) -> RetryDecision:
        if self._on_activity_request_completed is None:
            return super().request_completed(response)
        delay_ms = self._on_activity_request_completed(response)
        if delay_ms < 0:
            return Abort("negative_retry_delay")
        return Retry(int(delay_ms))

    def create_progress_overlay(self, context: InvocationContext) -> Any | None:
        if self._on_create_progress_overlay is None:
            return None
        return self._on_create_progress_overlay(context)
