"""Serviços de aplicação.

AdaptiveApplet orquestra os use cases; hooks padrão ficam em hooks.py.
"""

from app.services.applet import AdaptiveApplet
from app.services.hooks import CallbackHooks, DefaultAppletHooks

__all__ = [
    "AdaptiveApplet",
    "CallbackHooks",
    "DefaultAppletHooks",
]
