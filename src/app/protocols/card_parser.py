"""Protocolo do parser de cards (colaborador externo)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.card import AppletCard


class CardParserProtocol(Protocol):
    """Converte payload em AppletCard; falha em violação de schema."""

    def parse(self, payload: dict[str, Any]) -> AppletCard: ...
