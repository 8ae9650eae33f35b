"""Estado de sessão do applet: card exibido, payload bruto e dados vinculados."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.domain.card import AppletCard


@dataclass(frozen=True, slots=True)
class AppletSession:
    """Sessão imutável, substituída por inteiro a cada troca de card.

    Attributes:
        card: Card parseado atualmente exibido
        payload: Payload bruto (template) do card, sem `$data`
        data: Dados vinculados usados na expansão do template
    """

    card: AppletCard | None = None
    payload: dict[str, Any] | None = None
    data: Any = None

    @property
    def has_card(self) -> bool:
        return self.card is not None


EMPTY_SESSION = AppletSession()
