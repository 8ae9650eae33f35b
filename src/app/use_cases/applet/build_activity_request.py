"""Montagem da requisição de invoke a partir de uma Action.Execute."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from app.domain.activity import (
    ActionReference,
    ActivityRequest,
    InvokeActivity,
    InvokeValue,
)
from app.domain.decisions import Veto

if TYPE_CHECKING:
    from app.domain.actions import ExecuteAction, InvocationContext
    from app.protocols.hooks import AppletHooksProtocol

logger = logging.getLogger(__name__)


def build_activity_request(
    app_id: str,
    action: ExecuteAction,
    context: InvocationContext,
    hooks: AppletHooksProtocol,
    now: datetime | None = None,
) -> ActivityRequest | None:
    """Cria a ActivityRequest (attempt_number=0) e consulta o hook de preparo.

    O hook pode ajustar a requisição antes do envio; um Veto faz a
    função retornar None e nada é enviado.

    Args:
        app_id: appId do card que originou a ação
        action: Action.Execute acionada
        context: Motivo da invocação
        hooks: Estratégia com prepare_request
        now: Relógio para localTimestamp (usa hora local se None)

    Returns:
        ActivityRequest pronta para envio, ou None se vetada
    """
    moment = now or datetime.now()
    if moment.tzinfo is None:
        moment = moment.astimezone()

    request = ActivityRequest(
        context=context,
        activity=InvokeActivity(
            app_id=app_id,
            local_timezone=moment.tzname() or "",
            local_timestamp=moment.isoformat(),
            value=InvokeValue(
                action=ActionReference(
                    id=action.id,
                    verb=action.verb,
                    data=action.data,
                ),
            ),
        ),
        attempt_number=0,
    )

    decision = hooks.prepare_request(action, request)
    if isinstance(decision, Veto):
        logger.info(
            "activity_request_vetoed",
            extra={"verb": action.verb, "reason": decision.reason},
        )
        return None

    return request
