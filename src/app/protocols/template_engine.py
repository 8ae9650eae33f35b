"""Protocolo do motor de templating (colaborador externo)."""

from __future__ import annotations

from typing import Any, Protocol


class TemplateEngineProtocol(Protocol):
    """Expande um template de card usando `data` como raiz ($root)."""

    def expand(self, payload: dict[str, Any], data: Any) -> dict[str, Any]: ...
