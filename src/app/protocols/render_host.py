"""Protocolo do host de renderização.

O host é a superfície visual do applet: recebe o card renderizado,
exibe overlays de progresso, alertas e o popup de login.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.card import AppletCard
    from app.domain.geometry import PopupGeometry, WindowGeometry


class RenderHostProtocol(Protocol):
    """Contrato mínimo do host visual."""

    def clear(self) -> None:
        """Remove todos os filhos renderizados."""
        ...

    def render_card(self, card: AppletCard) -> Any | None:
        """Renderiza o card; None quando não há saída visual."""
        ...

    def append(self, element: Any) -> None: ...

    def create_default_overlay(self) -> Any:
        """Cria o spinner padrão de progresso."""
        ...

    def attach_overlay(self, overlay: Any) -> None: ...

    def detach_overlay(self, overlay: Any) -> None: ...

    def alert(self, message: str) -> None: ...

    def window_geometry(self) -> WindowGeometry: ...

    def open_popup(self, url: str, name: str, geometry: PopupGeometry) -> None: ...
