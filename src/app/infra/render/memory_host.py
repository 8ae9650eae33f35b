"""Host de renderização em memória para execução headless e testes.

Registra filhos, overlays, alertas e popups em listas inspecionáveis
em vez de desenhar algo na tela.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.domain.geometry import PopupGeometry, WindowGeometry

if TYPE_CHECKING:
    from app.domain.card import AppletCard

DEFAULT_WINDOW = WindowGeometry(screen_x=0, screen_y=0, outer_width=1280, outer_height=800)


@dataclass(frozen=True, slots=True)
class RenderedCard:
    """Saída "renderizada" de um card: o modelo e seu JSON normalizado."""

    card: AppletCard
    document: dict[str, Any]


@dataclass(frozen=True, slots=True)
class DefaultSpinner:
    css_class: str = "aaf-progress-overlay"
    size_px: int = 28


@dataclass(frozen=True, slots=True)
class OpenedPopup:
    url: str
    name: str
    geometry: PopupGeometry


@dataclass
class InMemoryRenderHost:
    """Implementação de RenderHostProtocol sem saída visual."""

    window: WindowGeometry = DEFAULT_WINDOW
    children: list[Any] = field(default_factory=list)
    overlays: list[Any] = field(default_factory=list)
    alerts: list[str] = field(default_factory=list)
    popups: list[OpenedPopup] = field(default_factory=list)
    overlay_attach_count: int = 0
    overlay_detach_count: int = 0
    render_count: int = 0

    def clear(self) -> None:
        self.children.clear()

    def render_card(self, card: AppletCard) -> RenderedCard:
        self.render_count += 1
        return RenderedCard(
            card=card,
            document=card.model_dump(by_alias=True, exclude_none=True),
        )

    def append(self, element: Any) -> None:
        self.children.append(element)

    def create_default_overlay(self) -> DefaultSpinner:
        return DefaultSpinner()

    def attach_overlay(self, overlay: Any) -> None:
        self.overlays.append(overlay)
        self.overlay_attach_count += 1

    def detach_overlay(self, overlay: Any) -> None:
        """Remove o overlay; como no DOM, remover algo ausente é erro."""
        for index, attached in enumerate(self.overlays):
            if attached is overlay:
                del self.overlays[index]
                self.overlay_detach_count += 1
                return
        raise ValueError("overlay is not attached")

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def window_geometry(self) -> WindowGeometry:
        return self.window

    def open_popup(self, url: str, name: str, geometry: PopupGeometry) -> None:
        self.popups.append(OpenedPopup(url=url, name=name, geometry=geometry))

    @property
    def displayed_card(self) -> AppletCard | None:
        """Card do último filho renderizado, se houver."""
        for child in reversed(self.children):
            if isinstance(child, RenderedCard):
                return child.card
        return None

    def click(self, action_id: str) -> Any:
        """Simula o usuário acionando a Action.Execute com o id informado."""
        card = self.displayed_card
        if card is None:
            raise LookupError("no card is displayed")
        action = card.find_action(action_id)
        if action is None:
            raise LookupError(f"action {action_id!r} not found")
        return card.execute_action(action)
