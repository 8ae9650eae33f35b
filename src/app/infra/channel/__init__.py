"""Channel adapters concretos."""

from app.infra.channel.http_channel_adapter import (
    HttpChannelAdapter,
    create_http_channel_adapter,
)

__all__ = ["HttpChannelAdapter", "create_http_channel_adapter"]
