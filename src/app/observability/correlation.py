"""Contexto de correlação de cada sequência de invocação.

Cada sequência roda em sua própria task asyncio, que copia o contexto
no momento da criação; definir os ContextVars dentro da task isola os
valores de sequências concorrentes.

Uso:
    token = set_correlation_id()
    try:
        # executar sequência
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_invocation_context: ContextVar[str] = ContextVar("invocation_context", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def get_invocation_context() -> str:
    """Retorna o contexto de invocação atual (UserInteraction/AutoRefresh)."""
    return _invocation_context.get()


def set_invocation_context(context: str) -> Token[str]:
    return _invocation_context.set(str(context))


def reset_invocation_context(token: Token[str]) -> None:
    _invocation_context.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())
