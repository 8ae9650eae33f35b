"""Protocolos e contratos do core do applet."""

from .card_parser import CardParserProtocol
from .channel_adapter import ChannelAdapterProtocol
from .hooks import AppletHooksProtocol
from .render_host import RenderHostProtocol
from .template_engine import TemplateEngineProtocol

__all__ = [
    "AppletHooksProtocol",
    "CardParserProtocol",
    "ChannelAdapterProtocol",
    "RenderHostProtocol",
    "TemplateEngineProtocol",
]
