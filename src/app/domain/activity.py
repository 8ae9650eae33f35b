"""Activities trocadas com o canal: requisição de invoke e resposta.

O formato serializado usa camelCase (appId, localTimezone, attemptNumber)
via alias_generator; internamente os campos seguem snake_case.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.actions import EXECUTE_ACTION_TYPE, InvocationContext

INVOKE_ACTIVITY_TYPE = "invoke"
INVOKE_ACTIVITY_NAME = "adaptiveCard/action"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


class ActionReference(_WireModel):
    """Cópia da Action.Execute enviada dentro da activity."""

    type: str = EXECUTE_ACTION_TYPE
    id: str | None = None
    verb: str = ""
    data: Any = None


class InvokeValue(_WireModel):
    action: ActionReference


class InvokeActivity(_WireModel):
    """Activity de invoke `adaptiveCard/action`."""

    type: Literal["invoke"] = INVOKE_ACTIVITY_TYPE
    name: Literal["adaptiveCard/action"] = INVOKE_ACTIVITY_NAME
    app_id: str
    local_timezone: str = ""
    local_timestamp: str = ""
    value: InvokeValue


class ActivityRequest(_WireModel):
    """Requisição de invocação de uma Action.Execute.

    Durante uma sequência apenas attempt_number muda, sempre +1 por retry.
    """

    context: InvocationContext
    activity: InvokeActivity
    attempt_number: int = Field(default=0, ge=0)

    def increment_attempt(self) -> int:
        """Avança para a próxima tentativa e retorna o novo número."""
        self.attempt_number += 1
        return self.attempt_number

    def to_wire(self) -> dict[str, Any]:
        """Serializa no formato esperado pelo canal (camelCase)."""
        return self.model_dump(by_alias=True, mode="json")


class ActivityStatus(StrEnum):
    SUCCESS = "Success"
    FAILURE = "Failure"


class ActivityResponse(BaseModel):
    """Resposta do canal, imutável após o recebimento.

    Status não reconhecidos são preservados como string e tratados
    como falha pelo executor.
    """

    model_config = ConfigDict(frozen=True)

    status: ActivityStatus | str
    content: str = ""

    @property
    def is_success(self) -> bool:
        return self.status == ActivityStatus.SUCCESS
