"""Protocolo do channel adapter (transporte plugável até o backend)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.activity import ActivityRequest, ActivityResponse


class ChannelAdapterProtocol(Protocol):
    """Contrato mínimo: enviar requisição e devolver resposta.

    Qualquer exceção levantada por send é tratada como falha de
    transporte e encerra a sequência sem retry.
    """

    async def send(self, request: ActivityRequest) -> ActivityResponse: ...
