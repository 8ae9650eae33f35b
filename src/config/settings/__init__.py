"""Agregador de settings do applet.

Re-exporta as settings de cada domínio.
"""

from __future__ import annotations

from config.settings.applet import AppletSettings, get_applet_settings
from config.settings.channel import ChannelSettings, get_channel_settings

__all__ = [
    "AppletSettings",
    "ChannelSettings",
    "get_applet_settings",
    "get_channel_settings",
]
