"""
Estados de uma sequência de invocação de activity.

Uma sequência começa em SENDING e termina em exatamente um estado
terminal. RETRYING sempre volta para SENDING após o backoff.
"""

from enum import StrEnum


class ActivityState(StrEnum):
    """
    Estados da sequência de envio de uma Action.Execute ao canal.

    Estados não-terminais:
        - SENDING: Requisição em trânsito pelo channel adapter
        - RETRYING: Aguardando backoff antes da próxima tentativa

    Estados terminais:
        - SUCCEEDED: Canal respondeu com sucesso (resultado classificado)
        - GIVEN_UP: Falhas esgotaram tentativas ou o hook abortou o retry
        - ABORTED: Channel adapter falhou no transporte
    """

    SENDING = "SENDING"
    RETRYING = "RETRYING"

    SUCCEEDED = "SUCCEEDED"
    GIVEN_UP = "GIVEN_UP"
    ABORTED = "ABORTED"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[ActivityState] = frozenset({
    ActivityState.SUCCEEDED,
    ActivityState.GIVEN_UP,
    ActivityState.ABORTED,
})

DEFAULT_INITIAL_STATE: ActivityState = ActivityState.SENDING


def is_terminal(state: ActivityState) -> bool:
    """Verifica se o estado encerra a sequência."""
    return state in TERMINAL_STATES


def is_valid_state(state: ActivityState) -> bool:
    """Verifica se o valor é um ActivityState válido."""
    return isinstance(state, ActivityState)
