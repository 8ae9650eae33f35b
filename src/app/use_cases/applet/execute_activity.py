"""Executor de activities: sequência de envio com retry e backoff.

Conduz a ActivityStateMachine (SENDING → SUCCEEDED | RETRYING | GIVEN_UP |
ABORTED) e é dono do overlay de progresso, adquirido uma vez antes do
primeiro envio e liberado uma vez em qualquer saída da sequência.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.domain.actions import ExecuteAction, InvocationContext
from app.domain.decisions import Retry
from app.observability import (
    get_correlation_id,
    record_activity_outcome,
    record_latency,
    reset_correlation_id,
    reset_invocation_context,
    set_correlation_id,
    set_invocation_context,
)
from app.use_cases.applet.build_activity_request import build_activity_request
from app.use_cases.applet.classify_response import (
    CardResult,
    ClassifiedResponse,
    MessageResult,
    UnauthorizedResult,
    classify_response,
)
from config.settings.applet import (
    DEFAULT_MAXIMUM_REQUEST_ATTEMPTS,
)
from fsm import (
    ActivityState,
    ActivityStateMachine,
    StateTransition,
    create_activity_fsm,
    resolve_failure_transition,
)
from utils.errors import (
    ChannelNotConfiguredError,
    TransportError,
    UnsupportedActionError,
)

if TYPE_CHECKING:
    from app.domain.activity import ActivityRequest, ActivityResponse
    from app.protocols.channel_adapter import ChannelAdapterProtocol
    from app.protocols.hooks import AppletHooksProtocol
    from app.protocols.render_host import RenderHostProtocol
    from app.use_cases.applet.handle_auth_challenge import AuthChallengeHandler

logger = logging.getLogger(__name__)

TRANSPORT_ERROR_PREFIX = "Something went wrong: "

CardHandler = Callable[[dict[str, Any]], Any]
Sleeper = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class ActivityOutcome:
    """
    Resultado terminal de uma sequência de invocação.

    Attributes:
        state: Estado terminal (SUCCEEDED, GIVEN_UP, ABORTED)
        attempts: Quantidade de envios realizados
        response: Última resposta recebida (None em ABORTED)
        result: Resultado classificado (apenas SUCCEEDED)
        error: Falha de transporte (apenas ABORTED)
        history: Transições percorridas pela sequência
    """

    state: ActivityState
    attempts: int
    response: ActivityResponse | None = None
    result: ClassifiedResponse | None = None
    error: TransportError | None = None
    history: tuple[StateTransition, ...] = field(default_factory=tuple)
    alert_message: str | None = None


class ActivityExecutor:
    """Executa uma Action.Execute contra o channel adapter."""

    def __init__(
        self,
        channel: ChannelAdapterProtocol | None,
        host: RenderHostProtocol,
        hooks: AppletHooksProtocol,
        auth_handler: AuthChallengeHandler,
        on_card: CardHandler,
        maximum_request_attempts: int = DEFAULT_MAXIMUM_REQUEST_ATTEMPTS,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self._channel = channel
        self._host = host
        self._hooks = hooks
        self._auth_handler = auth_handler
        self._on_card = on_card
        self._maximum_request_attempts = maximum_request_attempts
        self._sleep = sleep

    async def execute(
        self,
        app_id: str,
        action: Any,
        context: InvocationContext,
    ) -> ActivityOutcome | None:
        """Executa a sequência completa de uma ação.

        Args:
            app_id: appId do card dono da ação
            action: Ação acionada (apenas Action.Execute é executável)
            context: Motivo da invocação

        Returns:
            ActivityOutcome, ou None se o hook prepare_request vetou o envio

        Raises:
            UnsupportedActionError: Ação não é Action.Execute
            ChannelNotConfiguredError: Nenhum channel adapter definido
            UnsupportedResultTypeError: Resultado de sucesso com tipo desconhecido
            ValidationError: loginUrl malformada em desafio de autenticação
        """
        if not isinstance(action, ExecuteAction):
            raise UnsupportedActionError(
                f"Only Action.Execute can be executed, got {type(action).__name__}"
            )
        if self._channel is None:
            raise ChannelNotConfiguredError("No channel adapter set.")

        request = build_activity_request(app_id, action, context, self._hooks)
        if request is None:
            return None

        correlation_token = set_correlation_id()
        context_token = set_invocation_context(context)
        started_at = time.perf_counter()
        try:
            machine = create_activity_fsm(get_correlation_id(), self._maximum_request_attempts)
            with self._progress_overlay(context):
                outcome = await self._run(machine, request)
            # Alertas de falha só depois de liberar o overlay
            if outcome.alert_message is not None:
                self._host.alert(outcome.alert_message)
            record_activity_outcome(outcome.state.name, outcome.attempts, str(context))
            return outcome
        finally:
            record_latency(
                "activity_executor",
                "execute",
                (time.perf_counter() - started_at) * 1000,
            )
            reset_invocation_context(context_token)
            reset_correlation_id(correlation_token)

    @contextmanager
    def _progress_overlay(self, context: InvocationContext) -> Iterator[Any]:
        overlay = self._hooks.create_progress_overlay(context)
        if overlay is None:
            overlay = self._host.create_default_overlay()
        self._host.attach_overlay(overlay)
        try:
            yield overlay
        finally:
            self._host.detach_overlay(overlay)

    async def _run(
        self,
        machine: ActivityStateMachine,
        request: ActivityRequest,
    ) -> ActivityOutcome:
        while True:
            logger.info(
                "activity_attempt_sent",
                extra={
                    "attempt": request.attempt_number + 1,
                    "verb": request.activity.value.action.verb,
                },
            )
            try:
                response = await self._channel.send(request)
            except Exception as exc:
                return self._abort(machine, request, exc)

            if response.is_success:
                return self._succeed(machine, request, response)

            decision = self._hooks.request_completed(response)
            target = resolve_failure_transition(
                isinstance(decision, Retry),
                request.attempt_number,
                machine.maximum_attempts,
            )

            if target is ActivityState.GIVEN_UP:
                self._transition(machine, ActivityState.GIVEN_UP, "response_failure", request)
                logger.warning(
                    "activity_given_up",
                    extra={
                        "attempts": request.attempt_number + 1,
                        "status": str(response.status),
                        "transitions": machine.get_history_summary(),
                    },
                )
                return self._outcome(
                    machine,
                    request,
                    response=response,
                    alert_message=response.content,
                )

            self._transition(
                machine,
                ActivityState.RETRYING,
                "response_failure",
                request,
                {"delay_ms": decision.delay_ms},
            )
            request.increment_attempt()
            logger.info(
                "activity_retry_scheduled",
                extra={
                    "delay_ms": decision.delay_ms,
                    "next_attempt": request.attempt_number + 1,
                },
            )
            await self._sleep(decision.delay_ms / 1000)
            self._transition(machine, ActivityState.SENDING, "backoff_elapsed", request)

    def _succeed(
        self,
        machine: ActivityStateMachine,
        request: ActivityRequest,
        response: ActivityResponse,
    ) -> ActivityOutcome:
        self._transition(machine, ActivityState.SUCCEEDED, "response_success", request)
        logger.info(
            "activity_succeeded",
            extra={"attempts": request.attempt_number + 1},
        )
        result = classify_response(response.content)
        self._dispatch(result)
        return self._outcome(machine, request, response=response, result=result)

    def _abort(
        self,
        machine: ActivityStateMachine,
        request: ActivityRequest,
        exc: Exception,
    ) -> ActivityOutcome:
        error = exc if isinstance(exc, TransportError) else TransportError(str(exc))
        if error is not exc:
            error.__cause__ = exc
        self._transition(
            machine,
            ActivityState.ABORTED,
            "transport_error",
            request,
            {"error_type": type(exc).__name__},
        )
        logger.error(
            "activity_aborted",
            extra={
                "attempts": request.attempt_number + 1,
                "error_type": type(exc).__name__,
                "transitions": machine.get_history_summary(),
            },
        )
        return self._outcome(
            machine,
            request,
            error=error,
            alert_message=f"{TRANSPORT_ERROR_PREFIX}{exc}",
        )

    def _dispatch(self, result: ClassifiedResponse) -> None:
        if isinstance(result, MessageResult):
            self._host.alert(result.text)
        elif isinstance(result, CardResult):
            self._on_card(result.payload)
        elif isinstance(result, UnauthorizedResult):
            self._auth_handler.handle(result.login_url)

    @staticmethod
    def _transition(
        machine: ActivityStateMachine,
        target: ActivityState,
        trigger: str,
        request: ActivityRequest,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        result = machine.transition(
            target,
            trigger,
            attempt_number=request.attempt_number,
            metadata=metadata,
        )
        if not result.success:
            # Grafo e guards já foram consultados; falha aqui é bug
            raise RuntimeError(result.error_reason)

    @staticmethod
    def _outcome(
        machine: ActivityStateMachine,
        request: ActivityRequest,
        **kwargs: Any,
    ) -> ActivityOutcome:
        return ActivityOutcome(
            state=machine.current_state,
            attempts=request.attempt_number + 1,
            history=tuple(machine.history),
            **kwargs,
        )
