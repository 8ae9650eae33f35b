"""
Guards e invariantes para transições da sequência de invocação.

Guards recebem o contexto de tentativas e podem bloquear uma
transição estruturalmente válida (ex: retry sem orçamento).
"""

from dataclasses import dataclass
from typing import Protocol

from fsm.states.activity import TERMINAL_STATES, ActivityState


class TransitionContext(Protocol):
    """Contexto de tentativas necessário para avaliar guards."""

    @property
    def attempt_number(self) -> int:
        """Índice (base 0) da tentativa atual."""
        ...

    @property
    def maximum_attempts(self) -> int:
        """Número máximo de envios na sequência."""
        ...


@dataclass(frozen=True, slots=True)
class AttemptContext:
    """Implementação simples de TransitionContext."""

    attempt_number: int
    maximum_attempts: int


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a transição é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        """Cria resultado permitindo a transição."""
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        """Cria resultado negando a transição."""
        return cls(allowed=False, reason=reason)


def guard_valid_state(
    from_state: ActivityState,
    to_state: ActivityState,
    context: TransitionContext | None,
) -> GuardResult:
    """Guard: ambos os estados pertencem ao enum."""
    if not isinstance(from_state, ActivityState):
        return GuardResult.deny(f"Estado de origem inválido: {from_state}")
    if not isinstance(to_state, ActivityState):
        return GuardResult.deny(f"Estado de destino inválido: {to_state}")
    return GuardResult.allow()


def guard_terminal_state(
    from_state: ActivityState,
    to_state: ActivityState,
    context: TransitionContext | None,
) -> GuardResult:
    """Guard: estados terminais não permitem saída."""
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(
            f"Estado {from_state.name} é terminal, não permite transição"
        )
    return GuardResult.allow()


def guard_retry_budget(
    from_state: ActivityState,
    to_state: ActivityState,
    context: TransitionContext | None,
) -> GuardResult:
    """
    Guard: RETRYING só é permitido se a próxima tentativa cabe no limite.

    A tentativa attempt_number + 1 (base 0) precisa ser menor que
    maximum_attempts; sem contexto o retry é negado.
    """
    if to_state != ActivityState.RETRYING:
        return GuardResult.allow()
    if context is None:
        return GuardResult.deny("Retry exige contexto de tentativas")
    if context.attempt_number + 1 >= context.maximum_attempts:
        return GuardResult.deny(
            f"Limite de tentativas atingido ({context.maximum_attempts})"
        )
    return GuardResult.allow()


# Todos devem retornar allow() para a transição prosseguir
DEFAULT_GUARDS = [
    guard_valid_state,
    guard_terminal_state,
    guard_retry_budget,
]


def evaluate_guards(
    from_state: ActivityState,
    to_state: ActivityState,
    context: TransitionContext | None = None,
    guards: list | None = None,
) -> GuardResult:
    """
    Avalia todos os guards para uma transição.

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state, context)
        if not result.allowed:
            return result

    return GuardResult.allow()
