"""
Regras de transição válidas entre estados da sequência de invocação.

Grafo:
    SENDING  → SUCCEEDED | RETRYING | GIVEN_UP | ABORTED
    RETRYING → SENDING
"""

from fsm.rules.guards import AttemptContext, guard_retry_budget
from fsm.states.activity import TERMINAL_STATES, ActivityState

TransitionMap = dict[ActivityState, frozenset[ActivityState]]

VALID_TRANSITIONS: TransitionMap = {
    ActivityState.SENDING: frozenset({
        ActivityState.SUCCEEDED,
        ActivityState.RETRYING,
        ActivityState.GIVEN_UP,
        ActivityState.ABORTED,
    }),
    ActivityState.RETRYING: frozenset({
        ActivityState.SENDING,
    }),

    # Estados terminais
    ActivityState.SUCCEEDED: frozenset(),
    ActivityState.GIVEN_UP: frozenset(),
    ActivityState.ABORTED: frozenset(),
}


def get_valid_targets(state: ActivityState) -> frozenset[ActivityState]:
    """Retorna os estados de destino válidos (vazio se terminal)."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: ActivityState, to_state: ActivityState) -> bool:
    """Verifica se a transição existe no grafo."""
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def resolve_failure_transition(
    retry_requested: bool,
    attempt_number: int,
    maximum_attempts: int,
) -> ActivityState:
    """
    Decide o destino após uma resposta de falha.

    Função pura, sem timers nem rede: RETRYING quando o hook pediu
    retry e ainda há orçamento, GIVEN_UP caso contrário.

    Args:
        retry_requested: Se o hook de conclusão pediu nova tentativa
        attempt_number: Índice (base 0) da tentativa que falhou
        maximum_attempts: Número máximo de envios na sequência

    Returns:
        ActivityState.RETRYING ou ActivityState.GIVEN_UP
    """
    if not retry_requested:
        return ActivityState.GIVEN_UP

    budget = guard_retry_budget(
        ActivityState.SENDING,
        ActivityState.RETRYING,
        AttemptContext(attempt_number, maximum_attempts),
    )
    return ActivityState.RETRYING if budget.allowed else ActivityState.GIVEN_UP


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in ActivityState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Estado terminal {state.name} não deveria ter transições: {targets}"
            )

    for from_state, targets in VALID_TRANSITIONS.items():
        for target in targets:
            if not isinstance(target, ActivityState):
                errors.append(
                    f"Transição {from_state.name} → {target}: destino inválido"
                )

    return errors
