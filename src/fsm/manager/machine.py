"""
Máquina de estados (ActivityStateMachine) de uma sequência de invocação.

Controla o estado atual da sequência, valida transições contra o grafo
e os guards, e mantém histórico rastreável.
"""

from typing import Any

from fsm.rules.guards import AttemptContext, GuardResult, evaluate_guards
from fsm.states.activity import (
    DEFAULT_INITIAL_STATE,
    ActivityState,
    is_terminal,
)
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult


class ActivityStateMachine:
    """
    Máquina de estados de uma sequência de invocação.

    Attributes:
        current_state: Estado atual da sequência
        history: Histórico de transições realizadas
    """

    __slots__ = ("_current_state", "_history", "_maximum_attempts", "_sequence_id")

    def __init__(
        self,
        maximum_attempts: int,
        sequence_id: str = "",
        initial_state: ActivityState | None = None,
    ) -> None:
        """
        Inicializa a máquina de estados.

        Args:
            maximum_attempts: Limite de envios da sequência (>= 1)
            sequence_id: Identificador da sequência para logs
            initial_state: Estado inicial (usa DEFAULT_INITIAL_STATE se None)
        """
        if maximum_attempts < 1:
            raise ValueError("maximum_attempts deve ser >= 1")
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._maximum_attempts = maximum_attempts
        self._sequence_id = sequence_id

    @property
    def current_state(self) -> ActivityState:
        """Estado atual da máquina."""
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def sequence_id(self) -> str:
        return self._sequence_id

    @property
    def maximum_attempts(self) -> int:
        return self._maximum_attempts

    @property
    def is_terminal(self) -> bool:
        """Verifica se está em estado terminal."""
        return is_terminal(self._current_state)

    def can_transition_to(self, target: ActivityState, attempt_number: int = 0) -> bool:
        """Verifica se pode transitar para o estado alvo."""
        if not is_transition_valid(self._current_state, target):
            return False
        context = AttemptContext(attempt_number, self._maximum_attempts)
        return evaluate_guards(self._current_state, target, context).allowed

    def get_valid_targets(self) -> frozenset[ActivityState]:
        """Retorna estados de destino válidos a partir do estado atual."""
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: ActivityState,
        trigger: str,
        attempt_number: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho (ex: 'response_failure')
            attempt_number: Tentativa (base 0) corrente na sequência
            metadata: Dados adicionais para auditoria

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        context = AttemptContext(attempt_number, self._maximum_attempts)
        guard_result: GuardResult = evaluate_guards(self._current_state, target, context)
        if not guard_result.allowed:
            return TransitionResult(
                success=False,
                error_reason=guard_result.reason,
            )

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            attempt_number=attempt_number,
            metadata=metadata or {},
        )

        self._current_state = target
        self._history.append(transition)

        return TransitionResult(success=True, transition=transition)

    def get_history_summary(self) -> list[dict[str, Any]]:
        """Retorna histórico em formato seguro para logs."""
        return [t.to_log_dict() for t in self._history]


def create_activity_fsm(
    sequence_id: str,
    maximum_attempts: int,
) -> ActivityStateMachine:
    """
    Factory function para criar a FSM de uma sequência.

    Args:
        sequence_id: Identificador da sequência (correlation_id)
        maximum_attempts: Limite de envios

    Returns:
        ActivityStateMachine em SENDING
    """
    return ActivityStateMachine(
        maximum_attempts=maximum_attempts,
        sequence_id=sequence_id,
    )
