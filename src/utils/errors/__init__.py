"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AppletError,
    CardParseError,
    ChannelNotConfiguredError,
    TemplateExpansionError,
    TransportError,
    UnsupportedActionError,
    UnsupportedResultTypeError,
    ValidationError,
)

__all__ = [
    "AppletError",
    "CardParseError",
    "ChannelNotConfiguredError",
    "TemplateExpansionError",
    "TransportError",
    "UnsupportedActionError",
    "UnsupportedResultTypeError",
    "ValidationError",
]
