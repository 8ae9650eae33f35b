"""
Exports públicos do módulo fsm/states.

Estados de uma sequência de invocação de activity.
"""

from fsm.states.activity import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    ActivityState,
    is_terminal,
    is_valid_state,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "ActivityState",
    "is_terminal",
    "is_valid_state",
]
