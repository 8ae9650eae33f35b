"""Decisões explícitas retornadas pelos hooks do applet.

Substituem as convenções de bool/número dos callbacks: um gate devolve
Allow ou Veto, o hook de conclusão devolve Retry(ms) ou Abort.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Allow:
    """Permite a operação."""


@dataclass(frozen=True, slots=True)
class Veto:
    """Cancela a operação sem erro."""

    reason: str = ""


@dataclass(frozen=True, slots=True)
class Retry:
    """Agenda nova tentativa após delay_ms milissegundos."""

    delay_ms: int

    def __post_init__(self) -> None:
        if self.delay_ms < 0:
            raise ValueError(f"delay_ms não pode ser negativo, recebido: {self.delay_ms}")


@dataclass(frozen=True, slots=True)
class Abort:
    """Encerra a sequência sem novas tentativas."""

    reason: str = ""


GateDecision = Allow | Veto
RetryDecision = Retry | Abort
