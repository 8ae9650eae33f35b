"""Use cases do applet: requisição, execução, classificação, login e troca de card."""

from .build_activity_request import build_activity_request
from .classify_response import (
    CardResult,
    ClassifiedResponse,
    MessageResult,
    UnauthorizedResult,
    classify_response,
)
from .execute_activity import ActivityExecutor, ActivityOutcome
from .handle_auth_challenge import AuthChallengeHandler, parse_login_url
from .replace_card import CardReplacementResult, CardReplacer

__all__ = [
    "ActivityExecutor",
    "ActivityOutcome",
    "AuthChallengeHandler",
    "CardReplacementResult",
    "CardReplacer",
    "CardResult",
    "ClassifiedResponse",
    "MessageResult",
    "UnauthorizedResult",
    "build_activity_request",
    "classify_response",
    "parse_login_url",
]
