"""Exceções de domínio do executor de ações do applet."""

from __future__ import annotations


class AppletError(Exception):
    """Base para falhas do applet."""


class TransportError(AppletError):
    """Falha do channel adapter ao transportar a requisição (sem retry)."""


class ValidationError(AppletError):
    """Payload ou valor inválido (appId ausente, loginUrl malformada)."""


class UnsupportedResultTypeError(AppletError):
    """Resultado de Action.Execute com tipo não suportado."""

    def __init__(self, result_type: str) -> None:
        super().__init__(f"Action.Execute result is of unsupported type ({result_type})")
        self.result_type = result_type


class UnsupportedActionError(AppletError):
    """Ação que não é Action.Execute."""


class ChannelNotConfiguredError(AppletError):
    """Nenhum channel adapter configurado no applet."""


class CardParseError(AppletError):
    """Payload de card não respeita o schema."""


class TemplateExpansionError(AppletError):
    """Falha ao expandir template com dados vinculados."""
