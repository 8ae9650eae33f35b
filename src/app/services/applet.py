"""AdaptiveApplet: dono da sessão exibida e ponto de entrada das invocações.

Conecta CardReplacer e ActivityExecutor: trocas de card registram o
callback de ações do card, e ações/auto-refresh viram tasks asyncio
serializadas por applet (uma sequência por vez, em ordem FIFO).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from app.domain.actions import ExecuteAction, InvocationContext
from app.domain.session import EMPTY_SESSION, AppletSession
from app.services.hooks import DefaultAppletHooks
from app.use_cases.applet import (
    ActivityExecutor,
    ActivityOutcome,
    AuthChallengeHandler,
    CardReplacementResult,
    CardReplacer,
)
from config.settings.applet import AppletSettings
from utils.errors import ValidationError

if TYPE_CHECKING:
    from app.domain.card import AppletCard
    from app.protocols.card_parser import CardParserProtocol
    from app.protocols.channel_adapter import ChannelAdapterProtocol
    from app.protocols.hooks import AppletHooksProtocol
    from app.protocols.render_host import RenderHostProtocol
    from app.protocols.template_engine import TemplateEngineProtocol

logger = logging.getLogger(__name__)


class AdaptiveApplet:
    """Applet que exibe um card e executa suas Action.Execute num canal."""

    def __init__(
        self,
        host: RenderHostProtocol,
        parser: CardParserProtocol,
        *,
        channel_adapter: ChannelAdapterProtocol | None = None,
        hooks: AppletHooksProtocol | None = None,
        template_engine: TemplateEngineProtocol | None = None,
        settings: AppletSettings | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._settings = settings or AppletSettings()
        self._host = host
        self._hooks = hooks or DefaultAppletHooks(self._settings.default_time_between_attempts_ms)
        self._sleep = sleep
        self._session: AppletSession = EMPTY_SESSION
        self._invocation_lock = asyncio.Lock()
        self._active_tasks: set[asyncio.Task[Any]] = set()
        self.channel_adapter = channel_adapter

        self._auth_handler = AuthChallengeHandler(
            host,
            self._settings.auth_prompt_width,
            self._settings.auth_prompt_height,
        )
        self._replacer = CardReplacer(
            host=host,
            parser=parser,
            hooks=self._hooks,
            start_invocation=self.start_invocation,
            commit=self._commit_session,
            template_engine=template_engine,
        )

    @property
    def card(self) -> AppletCard | None:
        return self._session.card

    @property
    def session(self) -> AppletSession:
        return self._session

    @property
    def host(self) -> RenderHostProtocol:
        return self._host

    @property
    def pending_invocations(self) -> int:
        return len(self._active_tasks)

    def set_card(self, payload: Any) -> CardReplacementResult:
        """Exibe um novo card (ou novos dados para o template atual).

        Falhas antes da troca são registradas em log e o card anterior
        continua exibido. Falhas depois da troca (auto-refresh sem loop
        rodando, hook card_changed) não desfazem a troca e voltam em
        result.post_swap_errors.
        """
        result = self._replacer.replace(self._session, payload)
        if result.success:
            logger.info(
                "card_swapped",
                extra={
                    "app_id": self._session.card.app_id,
                    "post_swap_error_count": len(result.post_swap_errors),
                },
            )
        elif result.vetoed:
            logger.info("card_swap_cancelled")
        else:
            logger.error(
                "card_swap_failed",
                extra={"error_type": type(result.error).__name__},
                exc_info=result.error,
            )
        return result

    async def execute_action(
        self,
        action: ExecuteAction,
        context: InvocationContext = InvocationContext.USER_INTERACTION,
        *,
        app_id: str | None = None,
    ) -> ActivityOutcome | None:
        """Executa uma ação e aguarda o fim da sequência.

        Args:
            action: Action.Execute a executar
            context: Motivo da invocação
            app_id: appId explícito (usa o do card exibido se None)

        Raises:
            ValidationError: Nenhum appId disponível
        """
        target_app_id = app_id or (self.card.app_id if self.card is not None else None)
        if not target_app_id:
            raise ValidationError("No card with an appId is displayed.")

        async with self._invocation_lock:
            executor = ActivityExecutor(
                channel=self.channel_adapter,
                host=self._host,
                hooks=self._hooks,
                auth_handler=self._auth_handler,
                on_card=self.set_card,
                maximum_request_attempts=self._settings.maximum_request_attempts,
                sleep=self._sleep,
            )
            return await executor.execute(target_app_id, action, context)

    def start_invocation(
        self,
        app_id: str,
        action: ExecuteAction,
        context: InvocationContext,
    ) -> asyncio.Task[ActivityOutcome | None]:
        """Agenda uma sequência de invocação sem bloquear quem chamou.

        Usado pelo callback de ações do card e pelo auto-refresh.
        """
        task = asyncio.get_running_loop().create_task(
            self.execute_action(action, context, app_id=app_id)
        )
        self._active_tasks.add(task)
        task.add_done_callback(self._on_invocation_done)
        logger.info(
            "applet_invocation_scheduled",
            extra={
                "invocation_context": str(context),
                "active_tasks": len(self._active_tasks),
            },
        )
        return task

    async def drain_invocations(self, timeout_seconds: float | None = None) -> None:
        """Aguarda as invocações pendentes (inclusive as que elas disparam).

        timeout_seconds vale para o drain inteiro; ao expirar, todas as
        tasks ainda ativas são canceladas.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout_seconds is None else loop.time() + timeout_seconds
        while self._active_tasks:
            remaining = None if deadline is None else max(deadline - loop.time(), 0.0)
            _, pending = await asyncio.wait(list(self._active_tasks), timeout=remaining)
            if pending:
                await self._cancel_invocations()
                return

    async def _cancel_invocations(self) -> None:
        cancelled = 0
        while self._active_tasks:
            doomed = list(self._active_tasks)
            for task in doomed:
                task.cancel()
            await asyncio.gather(*doomed, return_exceptions=True)
            cancelled += len(doomed)
        logger.warning(
            "applet_invocations_cancelled",
            extra={"cancelled_tasks": cancelled},
        )

    def _commit_session(self, session: AppletSession) -> None:
        self._session = session

    def _on_invocation_done(self, task: asyncio.Task[Any]) -> None:
        self._active_tasks.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "applet_invocation_failed",
                    extra={
                        "error_type": type(exc).__name__,
                        "active_tasks": len(self._active_tasks),
                    },
                    exc_info=exc,
                )
