"""Classificação do conteúdo de respostas de sucesso do canal."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from utils.errors import UnsupportedResultTypeError

RESULT_TYPE_CARD = "AdaptiveCard"
RESULT_TYPE_UNAUTHORIZED = "Activity.InvocationError.Unauthorized"


@dataclass(frozen=True, slots=True)
class MessageResult:
    """Texto simples a ser exibido ao usuário."""

    text: str


@dataclass(frozen=True, slots=True)
class CardResult:
    """Novo card que substitui o atual."""

    payload: dict[str, Any]


@dataclass(frozen=True, slots=True)
class UnauthorizedResult:
    """Canal exige login antes de executar a ação."""

    login_url: Any


ClassifiedResponse = MessageResult | CardResult | UnauthorizedResult


def classify_response(content: str) -> ClassifiedResponse:
    """Interpreta o conteúdo de uma resposta Success.

    Conteúdo que não é JSON válido é tratado como texto simples.

    Raises:
        UnsupportedResultTypeError: Objeto com `type` desconhecido ou
            qualquer outro formato de valor (número, lista, null).
    """
    try:
        parsed: Any = json.loads(content)
    except (json.JSONDecodeError, TypeError):
        parsed = content

    if isinstance(parsed, str):
        return MessageResult(text=parsed)

    if isinstance(parsed, dict):
        result_type = parsed.get("type")
        if result_type == RESULT_TYPE_CARD:
            return CardResult(payload=parsed)
        if result_type == RESULT_TYPE_UNAUTHORIZED:
            return UnauthorizedResult(login_url=parsed.get("loginUrl"))
        raise UnsupportedResultTypeError(str(result_type))

    raise UnsupportedResultTypeError(type(parsed).__name__)
