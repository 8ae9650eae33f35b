"""AppletCard: card parseado com appId obrigatório e autoRefresh opcional.

O schema completo de Adaptive Cards é responsabilidade do parser/renderer
externo; aqui só os campos que o applet consome são tipados e o resto
é preservado como extra.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from pydantic.alias_generators import to_camel

from app.domain.actions import EXECUTE_ACTION_TYPE, ExecuteAction

ADAPTIVE_CARD_TYPE = "AdaptiveCard"


class AutoRefreshDefinition(BaseModel):
    """Política de auto-refresh declarada pelo card."""

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    user_ids: list[str] = Field(default_factory=list)
    display_current_card_while_refreshing: bool = True
    action: ExecuteAction

    _parent: Any = PrivateAttr(default=None)

    @field_validator("action", mode="before")
    @classmethod
    def _require_execute_action(cls, value: Any) -> Any:
        if isinstance(value, ExecuteAction):
            return value
        if not isinstance(value, dict) or value.get("type") != EXECUTE_ACTION_TYPE:
            raise ValueError(
                '"autoRefresh" must have its "action" property defined as an '
                "Action.Execute object"
            )
        return value

    @property
    def parent(self) -> Any:
        return self._parent

    def set_parent(self, parent: Any) -> None:
        """Vincula a definição e sua ação ao card dono."""
        self._parent = parent
        self.action.set_parent(parent)


class AppletCard(BaseModel):
    """Card exibido pelo applet."""

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    type: Literal["AdaptiveCard"] = ADAPTIVE_CARD_TYPE
    version: str | None = None
    app_id: str | None = None
    auto_refresh: AutoRefreshDefinition | None = None
    body: list[dict[str, Any]] = Field(default_factory=list)
    actions: list[dict[str, Any]] = Field(default_factory=list)

    _on_execute_action: Callable[[ExecuteAction], Any] | None = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        if self.auto_refresh is not None:
            self.auto_refresh.set_parent(self)

    @property
    def is_valid(self) -> bool:
        """Card só é válido com appId não vazio."""
        return bool(self.app_id)

    @property
    def on_execute_action(self) -> Callable[[ExecuteAction], Any] | None:
        return self._on_execute_action

    @on_execute_action.setter
    def on_execute_action(self, callback: Callable[[ExecuteAction], Any] | None) -> None:
        self._on_execute_action = callback

    def execute_action(self, action: ExecuteAction) -> Any:
        """Chamado pelo renderer quando o usuário aciona uma ação."""
        if self._on_execute_action is None:
            return None
        return self._on_execute_action(action)

    def iter_execute_actions(self) -> Iterator[ExecuteAction]:
        """Percorre body e actions em busca de Action.Execute (inclusive aninhadas)."""
        for node in _walk([self.body, self.actions]):
            action = ExecuteAction.model_validate(node)
            action.set_parent(self)
            yield action

    def find_action(self, action_id: str) -> ExecuteAction | None:
        """Retorna a Action.Execute com o id informado, se existir."""
        for action in self.iter_execute_actions():
            if action.id == action_id:
                return action
        return None


def _walk(node: Any) -> Iterator[dict[str, Any]]:
    if isinstance(node, dict):
        if node.get("type") == EXECUTE_ACTION_TYPE:
            yield node
        for value in node.values():
            yield from _walk(value)
    elif isinstance(node, list):
        for item in node:
            yield from _walk(item)
