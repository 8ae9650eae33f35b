"""
Exports públicos do módulo fsm/manager.

Máquina de estados (ActivityStateMachine) da sequência de invocação.
"""

from fsm.manager.machine import (
    ActivityStateMachine,
    create_activity_fsm,
)

__all__ = [
    "ActivityStateMachine",
    "create_activity_fsm",
]
