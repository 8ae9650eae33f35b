"""
Módulo FSM — Máquina de estados da sequência de invocação de activities.

Estrutura:
    - states/: Estados (ActivityState enum)
    - transitions/: Grafo de transições e decisão pós-falha
    - rules/: Guards (estado terminal, orçamento de tentativas)
    - manager/: Máquina de estados (ActivityStateMachine)
    - types/: Tipos de dados (StateTransition, TransitionResult)
"""

from fsm.manager import (
    ActivityStateMachine,
    create_activity_fsm,
)
from fsm.rules import (
    AttemptContext,
    GuardResult,
    evaluate_guards,
)
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    ActivityState,
    is_terminal,
    is_valid_state,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    resolve_failure_transition,
    validate_transition_map,
)
from fsm.types import (
    StateTransition,
    TransitionResult,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "ActivityState",
    "ActivityStateMachine",
    "AttemptContext",
    "GuardResult",
    "StateTransition",
    "TransitionResult",
    "create_activity_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "is_valid_state",
    "resolve_failure_transition",
    "validate_transition_map",
]
