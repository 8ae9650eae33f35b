"""Geometria de janela usada para posicionar o prompt de login."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WindowGeometry:
    """Posição e tamanho externos da janela hospedeira."""

    screen_x: float
    screen_y: float
    outer_width: float
    outer_height: float


@dataclass(frozen=True, slots=True)
class PopupGeometry:
    left: float
    top: float
    width: int
    height: int

    @classmethod
    def centered_in(cls, window: WindowGeometry, width: int, height: int) -> PopupGeometry:
        """Centraliza um popup width x height sobre a janela."""
        return cls(
            left=window.screen_x + (window.outer_width - width) / 2,
            top=window.screen_y + (window.outer_height - height) / 2,
            width=width,
            height=height,
        )

    def to_features(self) -> str:
        """Formata no padrão `width=..,height=..,left=..,top=..` de window.open."""
        return (
            f"width={self.width},height={self.height},"
            f"left={self.left:g},top={self.top:g}"
        )
