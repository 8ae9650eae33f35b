"""Channel adapter HTTP (httpx).

Envia a ActivityRequest serializada como JSON num POST único; a política
de retry pertence ao ActivityExecutor, não ao transporte.

Mapeamento:
- 2xx → ActivityStatus.SUCCESS com o corpo como conteúdo
- demais status → ActivityStatus.FAILURE com o corpo como conteúdo
- erro de conexão/timeout → TransportError
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from app.domain.activity import ActivityRequest, ActivityResponse, ActivityStatus
from utils.errors import TransportError

if TYPE_CHECKING:
    from config.settings.channel import ChannelSettings

logger = logging.getLogger(__name__)


class HttpChannelAdapter:
    """Implementação de ChannelAdapterProtocol sobre HTTP."""

    def __init__(
        self,
        endpoint_url: str,
        *,
        timeout_seconds: float = 30.0,
        auth_token: str = "",
        verify_ssl: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Inicializa o adapter.

        Args:
            endpoint_url: URL que recebe as activities
            timeout_seconds: Timeout do POST
            auth_token: Bearer token opcional
            verify_ssl: Validação de certificado TLS
            transport: Transport httpx alternativo (ex: MockTransport em testes)
        """
        if not endpoint_url or not endpoint_url.strip():
            raise ValueError("endpoint_url é obrigatório para o channel HTTP")
        self._endpoint_url = endpoint_url
        self._timeout_seconds = timeout_seconds
        self._verify_ssl = verify_ssl
        self._transport = transport
        self._headers = {"Content-Type": "application/json"}
        if auth_token:
            self._headers["Authorization"] = f"Bearer {auth_token}"

    async def send(self, request: ActivityRequest) -> ActivityResponse:
        try:
            async with httpx.AsyncClient(
                verify=self._verify_ssl,
                transport=self._transport,
                timeout=self._timeout_seconds,
            ) as client:
                response = await client.post(
                    self._endpoint_url,
                    json=request.to_wire(),
                    headers=self._headers,
                )
        except httpx.HTTPError as exc:
            logger.warning(
                "channel_transport_failed",
                extra={
                    "error_type": type(exc).__name__,
                    "attempt": request.attempt_number + 1,
                },
            )
            raise TransportError(f"channel request failed ({type(exc).__name__})") from exc

        status = ActivityStatus.SUCCESS if response.is_success else ActivityStatus.FAILURE
        logger.info(
            "channel_response_received",
            extra={
                "http_status": response.status_code,
                "activity_status": str(status),
                "attempt": request.attempt_number + 1,
            },
        )
        return ActivityResponse(status=status, content=response.text)


def create_http_channel_adapter(
    settings: ChannelSettings | None = None,
) -> HttpChannelAdapter:
    """Factory para criar o adapter a partir de ChannelSettings.

    Args:
        settings: ChannelSettings opcional. Se None, carrega do ambiente.
    """
    from config.settings import get_channel_settings

    channel = settings or get_channel_settings()
    return HttpChannelAdapter(
        channel.endpoint_url,
        timeout_seconds=channel.timeout_seconds,
        auth_token=channel.auth_token,
        verify_ssl=channel.verify_ssl,
    )
