"""Ações de card relevantes para o executor.

Apenas Action.Execute é executável pelo applet; outras variantes
(Action.Submit, Action.OpenUrl, ...) ficam a cargo do renderer.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, PrivateAttr

EXECUTE_ACTION_TYPE = "Action.Execute"


class InvocationContext(StrEnum):
    """Motivo pelo qual uma sequência de invocação foi iniciada."""

    USER_INTERACTION = "UserInteraction"
    AUTO_REFRESH = "AutoRefresh"


class ExecuteAction(BaseModel):
    """Action.Execute: identificador, verbo livre e payload opaco."""

    model_config = ConfigDict(extra="allow")

    type: Literal["Action.Execute"] = EXECUTE_ACTION_TYPE
    id: str | None = None
    verb: str = ""
    data: Any = None
    title: str | None = None

    _parent: Any = PrivateAttr(default=None)

    @property
    def parent(self) -> Any:
        """Elemento que delimita o escopo da ação (o card dono)."""
        return self._parent

    def set_parent(self, parent: Any) -> None:
        self._parent = parent


def is_execute_action(value: object) -> bool:
    """Retorna True para ExecuteAction ou dict com type Action.Execute."""
    if isinstance(value, ExecuteAction):
        return True
    return isinstance(value, dict) and value.get("type") == EXECUTE_ACTION_TYPE
